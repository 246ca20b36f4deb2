"""Image understanding service.

Processing flow:
    1. Reject requests without image data before any network call.
    2. Package the fixed instruction and the inline image into one user turn.
    3. Send one `generateContent` request.
    4. Return the first text part of the first candidate.

Error handling strategy:
    - Missing image -> `NoImageProvidedError` (an `UnderstandingError`).
    - Non-2xx status -> `UnderstandingError` with the provider message.
    - Transport failure -> `UnderstandingError` with the exception text.
    - Missing candidates/content/parts/text -> `NoContentError` (an `UnderstandingError`).
"""

import logging
from dataclasses import dataclass

import requests

from studio.errors import NoContentError, NoImageProvidedError, UnderstandingError, UpstreamError
from studio.llm.client import extract_first_text, send_generate_content


logger = logging.getLogger(__name__)

DESCRIBE_INSTRUCTION = "Describe this image in detail."

NO_CONTENT_MESSAGE = "No content returned by the service"


@dataclass(frozen=True)
class UnderstandingRequest:
    """Uploaded bitmap ready for inline submission.

    Attributes:
        data: Base64-encoded file bytes (no data-URL header).
        mime_type: Declared mime type of the upload.
    """

    data: str
    mime_type: str = "image/png"


def build_parts(request: UnderstandingRequest) -> list:
    """Return the request parts: instruction first, inline image second."""
    return [
        {"text": DESCRIBE_INSTRUCTION},
        {
            "inlineData": {
                "mimeType": request.mime_type,
                "data": request.data,
            }
        },
    ]


def understand_image(request: UnderstandingRequest | None) -> str:
    """Describe an uploaded image.

    Args:
        request: Uploaded bitmap, or `None` when nothing was uploaded.

    Returns:
        Description text from the vision model.

    Raises:
        NoImageProvidedError: no image data; no request is sent.
        UnderstandingError: provider failure or empty response.
    """
    if request is None or not request.data:
        raise NoImageProvidedError("No image provided")

    try:
        data = send_generate_content(build_parts(request))
    except UpstreamError as err:
        raise UnderstandingError(err.message) from err
    except (requests.exceptions.RequestException, ValueError) as err:
        raise UnderstandingError(str(err)) from err

    text = extract_first_text(data)
    if text is None:
        logger.warning("Vision response missing candidate text")
        raise NoContentError(NO_CONTENT_MESSAGE)

    return text
