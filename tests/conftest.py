"""Shared fixtures for studio tests."""

from __future__ import annotations

import base64
import io
from unittest.mock import MagicMock

import pytest
from PIL import Image


@pytest.fixture
def make_png():
    """Factory returning a solid-color PNG data URL."""

    def _make(width: int = 200, height: int = 500, color=(20, 40, 60, 255)) -> str:
        buffer = io.BytesIO()
        Image.new("RGBA", (width, height), color).save(buffer, format="PNG")
        encoded = base64.b64encode(buffer.getvalue()).decode("ascii")
        return f"data:image/png;base64,{encoded}"

    return _make


@pytest.fixture
def fake_response():
    """Factory returning a `requests.Response`-like mock."""

    def _make(status_code: int = 200, payload=None, text: str = "") -> MagicMock:
        response = MagicMock()
        response.status_code = status_code
        response.text = text
        if payload is None:
            response.json.side_effect = ValueError("No JSON body")
        else:
            response.json.return_value = payload
        return response

    return _make


@pytest.fixture
def candidate_payload():
    """Factory returning a `generateContent` success body."""

    def _make(text: str) -> dict:
        return {"candidates": [{"content": {"parts": [{"text": text}]}}]}

    return _make


def decode_data_url(data_url: str) -> Image.Image:
    """Open a PNG data URL as a Pillow image."""
    _, encoded = data_url.split(",", 1)
    return Image.open(io.BytesIO(base64.b64decode(encoded))).convert("RGBA")


@pytest.fixture
def open_image():
    return decode_data_url
