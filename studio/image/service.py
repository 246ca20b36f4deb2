"""Image generation service used by the generation flow.

Role in pipeline:
    translate -> build kind-specific prompt/resolution -> call provider -> decode.
    The steps run strictly in this order for every invocation.

Compositing:
    This module never draws text. The returned image is composited later by
    `studio.core.engine.resolve_display_image` when overlay state requires it.

Error handling strategy:
    - Translation failures are recovered inside `studio.nlp.translator`.
    - Provider non-2xx status, transport failures, and responses without
      `predictions[0].bytesBase64Encoded` raise `GenerationError`.
"""

import base64
import binascii
import logging
from dataclasses import dataclass
from typing import Callable

import requests

from studio.errors import GenerationError, UpstreamError
from studio.image.client import build_predict_payload, send_image_request
from studio.image.encoding import to_data_url
from studio.nlp.translator import translate
from studio.prompting.prompt_builder import GenerationRequest, build_generation_request


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GeneratedImage:
    """Decoded provider output for one generation request.

    Attributes:
        data_url: PNG data URL ready for display or compositing.
        request: Request values the image was generated from.
    """

    data_url: str
    request: GenerationRequest

    @property
    def kind(self) -> str:
        return self.request.kind


def decode_prediction(data) -> str:
    """Return a PNG data URL from the first prediction of a provider response.

    Raises:
        GenerationError: no predictions, no image bytes, or invalid base64.
    """
    predictions = data.get("predictions") if isinstance(data, dict) else None
    if not isinstance(predictions, list) or not predictions:
        raise GenerationError("No image data returned by the service")

    first = predictions[0] if isinstance(predictions[0], dict) else {}
    encoded = first.get("bytesBase64Encoded")
    if not encoded or not isinstance(encoded, str):
        raise GenerationError("No image data returned by the service")

    try:
        base64.b64decode(encoded, validate=True)
    except binascii.Error as err:
        raise GenerationError("Service returned invalid image data") from err

    return to_data_url(encoded)


def generate_image(
    prompt: str,
    kind: str = "general",
    aspect_ratio: str = "1:1",
    notify: Callable[[str], None] | None = None,
) -> GeneratedImage:
    """Generate one image for a user prompt.

    Args:
        prompt: Raw prompt text (any language).
        kind: `general`, `logo`, or `cover`.
        aspect_ratio: Requested aspect ratio; ignored for logos.
        notify: Optional callback for non-fatal notices (translation failure).

    Returns:
        `GeneratedImage` holding the decoded image and its request values.

    Raises:
        GenerationError: provider failure or missing image data.
    """
    translated = translate(prompt, notify=notify)
    request = build_generation_request(prompt, translated, kind, aspect_ratio)

    logger.info(
        "image_generation kind=%s aspect_ratio=%s size=%s",
        request.kind,
        request.aspect_ratio,
        request.image_size,
    )

    payload = build_predict_payload(request.final_prompt, request.image_size)

    try:
        data = send_image_request(payload)
    except UpstreamError as err:
        raise GenerationError(err.message) from err
    except requests.exceptions.RequestException as err:
        raise GenerationError(str(err)) from err
    except ValueError as err:
        raise GenerationError("Service returned a malformed response") from err

    return GeneratedImage(data_url=decode_prediction(data), request=request)
