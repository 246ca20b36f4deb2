"""Arabic-to-English prompt translation.

Role in pipeline:
    First step of every generation flow. Image models respond best to English
    prompts, so Arabic-script input is translated before `prompt_builder` wraps it.

Detection model:
    Rule-based: any code point in the Arabic block (U+0600-U+06FF) triggers
    translation. Text without such characters is returned unchanged and no
    network call is made.

Error handling strategy:
    Translation failure must never block generation. Every failure path raises
    `TranslationError` internally, is logged, is reported through the optional
    `notify` callback, and resolves to the original text.
"""

import logging
import re
from typing import Callable

import requests

from studio.core.messages import message
from studio.errors import TranslationError, UpstreamError
from studio.llm.client import extract_first_text, send_generate_content


logger = logging.getLogger(__name__)

ARABIC_PATTERN = re.compile(r"[\u0600-\u06FF]")

TRANSLATION_INSTRUCTION = (
    'Translate the following text to English, and return only the translated text: "{text}"'
)


def contains_arabic(text: str) -> bool:
    """Return whether `text` contains any Arabic-block character."""
    if not text:
        return False
    return ARABIC_PATTERN.search(text) is not None


def request_translation(text: str) -> str:
    """Ask the text model for an English translation of `text`.

    Raises:
        TranslationError: transport failure, non-2xx status, or a response
            without a usable first text part.
    """
    parts = [{"text": TRANSLATION_INSTRUCTION.format(text=text)}]

    try:
        data = send_generate_content(parts)
    except UpstreamError as err:
        raise TranslationError(err.message) from err
    except (requests.exceptions.RequestException, ValueError) as err:
        raise TranslationError(str(err)) from err

    translated = extract_first_text(data)
    if not translated or not translated.strip():
        raise TranslationError("Translation response contained no text")

    return translated.strip()


def translate(text: str, notify: Callable[[str], None] | None = None) -> str:
    """Return `text` in English, or unchanged when translation is not possible.

    Args:
        text: Raw prompt text.
        notify: Optional callback receiving a user-facing notice on failure.

    Returns:
        Translated text, or the original text when no Arabic characters are
        present or translation fails.
    """
    if not contains_arabic(text):
        return text

    try:
        return request_translation(text)
    except TranslationError:
        logger.exception("Prompt translation failed; using original text")
        if notify is not None:
            notify(message("translation_failed"))
        return text
