"""Unit tests for the generateContent transport helpers."""

from __future__ import annotations

from unittest.mock import patch

import pytest

from studio.errors import UpstreamError
from studio.llm.client import build_headers, extract_first_text, post_json


class TestExtractFirstText:
    """Response-part extraction."""

    def test_first_part(self, candidate_payload) -> None:
        assert extract_first_text(candidate_payload("hello")) == "hello"

    @pytest.mark.parametrize(
        "data",
        [
            None,
            {},
            {"candidates": []},
            {"candidates": [{}]},
            {"candidates": [{"content": {}}]},
            {"candidates": [{"content": {"parts": []}}]},
            {"candidates": [{"content": {"parts": [{"inlineData": {}}]}}]},
        ],
    )
    def test_missing_levels_return_none(self, data) -> None:
        assert extract_first_text(data) is None


class TestPostJson:
    """Status handling."""

    @patch("studio.llm.client.requests.post")
    def test_error_message_from_body(self, mock_post, fake_response) -> None:
        mock_post.return_value = fake_response(400, {"error": {"message": "Invalid prompt"}})

        with pytest.raises(UpstreamError) as excinfo:
            post_json("https://example.test", {})

        assert excinfo.value.status_code == 400
        assert excinfo.value.message == "Invalid prompt"

    @patch("studio.llm.client.requests.post")
    def test_error_message_from_text(self, mock_post, fake_response) -> None:
        mock_post.return_value = fake_response(503, None, text="Service Unavailable")

        with pytest.raises(UpstreamError, match="Service Unavailable"):
            post_json("https://example.test", {})


def test_api_key_header_from_environment(monkeypatch) -> None:
    monkeypatch.setenv("GEMINI_API_KEY", "secret")
    assert build_headers()["x-goog-api-key"] == "secret"
