"""Transport client for `generateContent` requests.

Architectural role:
    Executes HTTP requests against the configured text/vision model and exposes
    helpers to read the first text part of a response.

Model invocation flow:
    `nlp.translator.translate` / `vision.service.understand_image`
    -> `send_generate_content(parts)` -> parsed JSON response
    -> `extract_first_text(data)`.

Retry behavior:
    No retry loop is implemented. Each HTTP call is attempted once with the
    configured timeout.

Failure handling model:
    - Non-2xx responses raise `UpstreamError` with the provider's `error.message`.
    - Transport failures propagate as `requests.exceptions.RequestException`.
    - Non-JSON success bodies propagate as `ValueError`.
    Callers map these into their own error type.
"""

import requests

from studio.errors import UpstreamError
from studio.llm.provider_config import (
    GEMINI_KEY_FILE,
    REQUEST_TIMEOUT,
    load_key,
    text_model_url,
)


def build_headers() -> dict:
    """Return JSON headers plus the API key header when a key is configured."""
    headers = {
        "Content-Type": "application/json",
    }
    api_key = load_key(GEMINI_KEY_FILE)
    if api_key:
        headers["x-goog-api-key"] = api_key
    return headers


def error_message_from_response(response) -> str:
    """Extract a provider error message from a failed response.

    Prefers `{"error": {"message": ...}}`; falls back to the raw body and then
    to the HTTP status line.
    """
    try:
        data = response.json()
    except ValueError:
        data = None

    if isinstance(data, dict):
        error = data.get("error")
        if isinstance(error, dict) and error.get("message"):
            return str(error["message"])

    text = (getattr(response, "text", "") or "").strip()
    if text:
        return text
    return f"HTTP {response.status_code}"


def post_json(url: str, payload: dict) -> dict:
    """POST `payload` as JSON and return the decoded response body.

    Raises:
        UpstreamError: response status is not 2xx.
        requests.exceptions.RequestException: transport failure.
        ValueError: success body is not JSON.
    """
    response = requests.post(
        url,
        headers=build_headers(),
        json=payload,
        timeout=REQUEST_TIMEOUT,
    )

    if not 200 <= response.status_code < 300:
        raise UpstreamError(response.status_code, error_message_from_response(response))

    return response.json()


def send_generate_content(parts: list) -> dict:
    """Send one single-turn user request made of `parts` to the text model."""
    payload = {
        "contents": [
            {
                "role": "user",
                "parts": parts,
            }
        ]
    }
    return post_json(text_model_url(), payload)


def extract_first_text(data) -> str | None:
    """Return the first text part of the first candidate, or `None`.

    Any missing level of `candidates[0].content.parts[0].text` yields `None`
    instead of raising.
    """
    if not isinstance(data, dict):
        return None

    candidates = data.get("candidates") or []
    if not isinstance(candidates, list) or not candidates:
        return None

    content = candidates[0].get("content") if isinstance(candidates[0], dict) else None
    if not isinstance(content, dict):
        return None

    parts = content.get("parts") or []
    if not isinstance(parts, list) or not parts or not isinstance(parts[0], dict):
        return None

    text = parts[0].get("text")
    if not isinstance(text, str):
        return None
    return text
