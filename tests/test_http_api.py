"""Route tests for the HTTP adapter."""

from __future__ import annotations

import re
from unittest.mock import MagicMock, patch

import pytest
from fastapi.testclient import TestClient

from studio.api import http_api
from studio.core.messages import message
from studio.core.state import StudioSession
from studio.errors import GenerationError
from studio.image.service import GeneratedImage
from studio.prompting.prompt_builder import build_generation_request


@pytest.fixture
def client(monkeypatch) -> TestClient:
    monkeypatch.setattr(http_api, "session", StudioSession())
    return TestClient(http_api.app)


def _result(data_url: str, kind: str, aspect_ratio: str = "1:1") -> GeneratedImage:
    return GeneratedImage(
        data_url=data_url,
        request=build_generation_request("fox", "fox", kind, aspect_ratio),
    )


class TestGenerate:
    """POST /v1/images/generate."""

    @patch("studio.core.engine.generate_image")
    def test_success(self, mock_generate: MagicMock, client, make_png) -> None:
        mock_generate.return_value = _result(make_png(), "cover", "16:9")

        response = client.post(
            "/v1/images/generate",
            json={"prompt": "fox", "kind": "cover", "aspect_ratio": "16:9"},
        )

        assert response.status_code == 200
        body = response.json()
        assert body["image"] == mock_generate.return_value.data_url
        assert (body["width"], body["height"]) == (1920, 1080)
        assert body["in_flight"] is False

    @patch("studio.core.engine.generate_image")
    def test_failure_is_502(self, mock_generate: MagicMock, client) -> None:
        mock_generate.side_effect = GenerationError("Prompt blocked")

        response = client.post("/v1/images/generate", json={"prompt": "fox"})

        assert response.status_code == 502
        assert response.json()["image"] is None
        assert response.json()["error"] == message("generation_failed", detail="Prompt blocked")

    @patch("studio.core.engine.generate_image")
    def test_empty_prompt_is_400(self, mock_generate: MagicMock, client) -> None:
        response = client.post("/v1/images/generate", json={"prompt": "  "})

        assert response.status_code == 400
        mock_generate.assert_not_called()

    @patch("studio.core.engine.generate_image")
    def test_in_flight_is_409(self, mock_generate: MagicMock, client) -> None:
        http_api.session.generation.in_flight = True

        response = client.post("/v1/images/generate", json={"prompt": "fox"})

        assert response.status_code == 409
        mock_generate.assert_not_called()


class TestOverlayAndDownload:
    """PUT /v1/images/overlay and GET /v1/images/download."""

    def test_overlay_recomputes_image(self, client, make_png) -> None:
        state = http_api.session.generation
        state.result = _result(make_png(), "logo")
        state.display_image = state.result.data_url

        response = client.put("/v1/images/overlay", json={"content": "Brand", "position": "bottom"})

        assert response.status_code == 200
        assert response.json()["image"] != state.result.data_url
        assert state.overlay.position == "bottom"

    def test_overlay_rejects_non_positive_size(self, client) -> None:
        response = client.put("/v1/images/overlay", json={"size": 0})
        assert response.status_code == 422

    def test_download(self, client, make_png) -> None:
        state = http_api.session.generation
        state.result = _result(make_png(), "cover")
        state.display_image = state.result.data_url

        response = client.get("/v1/images/download")

        assert response.status_code == 200
        assert response.headers["content-type"] == "image/png"
        assert re.fullmatch(
            r'attachment; filename="cover_\d+\.png"',
            response.headers["content-disposition"],
        )
        assert response.content.startswith(b"\x89PNG")

    def test_download_without_image(self, client) -> None:
        assert client.get("/v1/images/download").status_code == 404

    def test_current(self, client) -> None:
        body = client.get("/v1/images/current").json()
        assert body["image"] is None
        assert body["in_flight"] is False


class TestDescribe:
    """POST /v1/vision/describe."""

    @patch("studio.llm.client.requests.post")
    def test_success(self, mock_post, client, make_png, fake_response, candidate_payload) -> None:
        mock_post.return_value = fake_response(200, candidate_payload("A blue square."))

        response = client.post("/v1/vision/describe", json={"image": make_png(8, 8)})

        assert response.status_code == 200
        assert response.json() == {"description": "A blue square."}

    @patch("studio.llm.client.requests.post")
    def test_missing_image(self, mock_post: MagicMock, client) -> None:
        response = client.post("/v1/vision/describe", json={})

        assert response.status_code == 400
        assert response.json()["error"] == message("no_image")
        mock_post.assert_not_called()

    @patch("studio.llm.client.requests.post")
    def test_rejected_upload(self, mock_post: MagicMock, client) -> None:
        response = client.post(
            "/v1/vision/describe",
            json={"image": "data:text/plain;base64,QUJD"},
        )

        assert response.status_code == 400
        mock_post.assert_not_called()

    @pytest.mark.parametrize("image", ["/etc/hosts", "file:///tmp/photo.png", "photo.png"])
    @patch("studio.llm.client.requests.post")
    def test_local_file_references_are_400(self, mock_post: MagicMock, client, image) -> None:
        response = client.post("/v1/vision/describe", json={"image": image})

        assert response.status_code == 400
        assert response.json()["error"] == "Upload must be a data URL"
        mock_post.assert_not_called()

    @patch("studio.llm.client.requests.post")
    def test_upstream_failure_is_502(self, mock_post, client, make_png, fake_response) -> None:
        mock_post.return_value = fake_response(500, {"error": {"message": "internal"}})

        response = client.post("/v1/vision/describe", json={"image": make_png(8, 8)})

        assert response.status_code == 502
        assert response.json()["error"] == message("understanding_failed", detail="internal")
