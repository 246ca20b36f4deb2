"""Image-provider HTTP client.

Processing flow:
    1. Resolve the `predict` endpoint of the configured image model.
    2. Submit the JSON payload once.
    3. Return the parsed JSON response or raise on non-2xx status.

Base64:
    This module does not decode image data; `studio.image.service` does.

Error handling strategy:
    - Non-2xx HTTP response -> `UpstreamError` carrying the provider message.
    - Transport failures propagate as `requests` exceptions.
"""

from studio.llm.client import post_json
from studio.llm.provider_config import image_model_url


def build_predict_payload(prompt: str, image_size: str) -> dict:
    """Return the provider request body for one single-sample generation."""
    return {
        "instances": {
            "prompt": prompt,
            "imageSize": image_size,
        },
        "parameters": {
            "sampleCount": 1,
        },
    }


def send_image_request(payload: dict) -> dict:
    """Send an image-generation request to the configured provider.

    Args:
        payload: Provider JSON payload from `build_predict_payload`.

    Returns:
        Parsed JSON response from provider.
    """
    return post_json(image_model_url(), payload)
