"""Unit tests for kind-specific prompt and resolution assembly."""

from __future__ import annotations

import pytest

from studio.prompting.prompt_builder import (
    build_final_prompt,
    build_generation_request,
    normalize_kind,
    resolve_size,
)


class TestResolveSize:
    """Resolution lookup by kind and aspect ratio."""

    @pytest.mark.parametrize("aspect_ratio", ["1:1", "16:9", "9:16", "2:3", "weird", None])
    def test_logo_is_always_square(self, aspect_ratio) -> None:
        assert resolve_size("logo", aspect_ratio) == (512, 512)

    @pytest.mark.parametrize(
        ("aspect_ratio", "expected"),
        [
            ("2:3", (720, 1280)),
            ("16:9", (1920, 1080)),
            ("9:16", (720, 1280)),
            ("1:1", (1280, 720)),
            ("4:5", (1280, 720)),
        ],
    )
    def test_cover_sizes(self, aspect_ratio, expected) -> None:
        assert resolve_size("cover", aspect_ratio) == expected

    @pytest.mark.parametrize(
        ("aspect_ratio", "expected"),
        [
            ("16:9", (1280, 720)),
            ("9:16", (720, 1280)),
            ("1:1", (1024, 1024)),
            ("2:3", (1024, 1024)),
        ],
    )
    def test_general_sizes(self, aspect_ratio, expected) -> None:
        assert resolve_size("general", aspect_ratio) == expected

    def test_unknown_kind_uses_general_sizes(self) -> None:
        assert resolve_size("poster", "16:9") == (1280, 720)


class TestFinalPrompt:
    """Prompt wrapping per kind."""

    def test_logo_prompt(self) -> None:
        assert build_final_prompt("a fox", "logo") == (
            "minimalist, iconic, clean, vector style logo for: a fox. "
            "No text, no typography, no words."
        )

    def test_cover_prompt(self) -> None:
        assert build_final_prompt("a fox", "cover") == (
            "high-quality, artistic, detailed cover art for: a fox, suitable for a cover. "
            "No text, no typography, no words."
        )

    def test_general_prompt(self) -> None:
        assert build_final_prompt("a fox", "general") == (
            "a fox, no text, no words, no typography, high quality, detailed, realistic."
        )

    def test_unknown_kind_is_general(self) -> None:
        assert normalize_kind("banner") == "general"
        assert normalize_kind(None) == "general"


def test_build_generation_request_keeps_raw_prompt() -> None:
    request = build_generation_request("ثعلب", "a fox", "cover", "16:9")

    assert request.raw_prompt == "ثعلب"
    assert request.kind == "cover"
    assert request.image_size == "1920x1080"
    assert "cover art for: a fox" in request.final_prompt
