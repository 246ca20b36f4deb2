"""Provider/runtime configuration for the model layer.

Architectural role:
    Centralizes endpoint templates, model names, timeouts, and credential lookup
    for `studio.llm.client` and `studio.image.client`.

Determinism:
    Deterministic for a fixed process environment and key files. Values are resolved
    at import time (plus runtime key-file reads in `load_key`).

Failure behavior:
    Missing key material is represented as `None`. The credential is an injected
    placeholder, so callers send the request without an API key header instead of
    failing locally.
"""

import os
from dotenv import load_dotenv

load_dotenv()

# Text and vision requests share one multimodal model.
TEXT_MODEL = os.getenv("TEXT_MODEL", "gemini-2.5-flash-preview-05-20")
IMAGE_MODEL = os.getenv("IMAGE_MODEL", "imagen-3.0-generate-002")

GEMINI_URL_TEMPLATE = os.getenv(
    "GEMINI_URL_TEMPLATE",
    "https://generativelanguage.googleapis.com/v1beta/models/{model}:generateContent",
)

IMAGE_URL_TEMPLATE = os.getenv(
    "IMAGE_URL_TEMPLATE",
    "https://generativelanguage.googleapis.com/v1beta/models/{model}:predict",
)

GEMINI_KEY_FILE = "config/gemini.key"

# Single attempt per request; no retry loop anywhere in the studio.
REQUEST_TIMEOUT = float(os.getenv("REQUEST_TIMEOUT", "120"))

# Language of user-facing error and notice messages (`ar` or `en`).
UI_LANGUAGE = os.getenv("UI_LANGUAGE", "ar")


def load_key(path):
    """Load API key from environment override or key file.

    Resolution order:
        1. Environment variable inferred from file stem (for example
           `config/gemini.key` -> `GEMINI_API_KEY`).
        2. Raw file contents at `path`.

    Args:
        path: Configured key file path or `None`.

    Returns:
        Key string or `None` when not available.

    Edge cases:
        - `None` path returns `None`.
        - Missing file returns `None`.
    """
    if not path:
        return None
    key_name = os.path.splitext(os.path.basename(path))[0].upper() + "_API_KEY"
    env_value = os.getenv(key_name)
    if env_value:
        return env_value
    if not os.path.exists(path):
        return None
    with open(path, "r") as f:
        return f.read().strip() or None


def text_model_url() -> str:
    """Return the `generateContent` endpoint for the configured text model."""
    return GEMINI_URL_TEMPLATE.format(model=TEXT_MODEL)


def image_model_url() -> str:
    """Return the `predict` endpoint for the configured image model."""
    return IMAGE_URL_TEMPLATE.format(model=IMAGE_MODEL)
