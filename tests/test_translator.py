"""Unit tests for prompt translation."""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import requests

from studio.core.messages import message
from studio.nlp.translator import contains_arabic, translate


class TestContainsArabic:
    """Arabic-block detection."""

    def test_plain_english(self) -> None:
        assert not contains_arabic("a red fox in the snow")

    def test_empty(self) -> None:
        assert not contains_arabic("")

    def test_mixed_text(self) -> None:
        assert contains_arabic("logo for مقهى")

    def test_latin_accents_are_not_arabic(self) -> None:
        assert not contains_arabic("café crème")


class TestTranslate:
    """Translation requests and failure fallbacks."""

    @patch("studio.llm.client.requests.post")
    def test_no_arabic_skips_network(self, mock_post: MagicMock) -> None:
        assert translate("a quiet harbor") == "a quiet harbor"
        mock_post.assert_not_called()

    @patch("studio.llm.client.requests.post")
    def test_arabic_is_translated(self, mock_post, fake_response, candidate_payload) -> None:
        mock_post.return_value = fake_response(200, candidate_payload("  a quiet harbor \n"))

        assert translate("ميناء هادئ") == "a quiet harbor"

        mock_post.assert_called_once()
        payload = mock_post.call_args.kwargs["json"]
        parts = payload["contents"][0]["parts"]
        assert payload["contents"][0]["role"] == "user"
        assert "Translate the following text to English" in parts[0]["text"]
        assert "ميناء هادئ" in parts[0]["text"]

    @patch("studio.llm.client.requests.post")
    def test_http_error_returns_original_and_notifies(self, mock_post, fake_response) -> None:
        mock_post.return_value = fake_response(500, {"error": {"message": "boom"}})
        notices = []

        assert translate("ميناء", notify=notices.append) == "ميناء"
        assert notices == [message("translation_failed")]

    @patch("studio.llm.client.requests.post")
    def test_missing_candidate_returns_original(self, mock_post, fake_response) -> None:
        mock_post.return_value = fake_response(200, {"candidates": []})

        assert translate("ميناء") == "ميناء"

    @patch("studio.llm.client.requests.post")
    def test_transport_error_returns_original(self, mock_post) -> None:
        mock_post.side_effect = requests.exceptions.ConnectionError("offline")
        notices = []

        assert translate("ميناء", notify=notices.append) == "ميناء"
        assert len(notices) == 1
