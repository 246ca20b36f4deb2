"""
HTTP API adapter for the AI Image Studio.

Architectural role:
- Stand in for the browser UI: each endpoint is one user action.
- Own the single in-process `StudioSession` (one generation flow, one
  understanding flow).
- Delegate flow work to `studio.core.engine` and shape JSON responses.

Endpoint responsibilities:
- `POST /v1/images/generate`: run the generation flow.
- `PUT /v1/images/overlay`: change overlay fields and recompute the display image.
- `GET /v1/images/current`: report display image and flow status.
- `GET /v1/images/download`: return the display image as `{kind}_{timestamp}.png`.
- `POST /v1/vision/describe`: load an uploaded image and run the understanding flow.

Input validation behavior:
- Empty prompt -> HTTP 400.
- Rejected upload (type/size/encoding) -> HTTP 400.
- Flow already in flight -> HTTP 409 (re-triggering is disabled while running).
- Nothing generated yet (download) -> HTTP 404.

Error handling strategy:
- Upstream generation/understanding failures -> HTTP 502 with the localized
  message stored on flow state.
- Non-fatal notices (translation, overlay) are returned alongside results.

Side effects:
- Loads environment variables at import time via `load_dotenv()`.
- Emits verbose request logs only when `DEBUG == "true"`.
"""

from dotenv import load_dotenv

load_dotenv()

import logging
import os

from fastapi import FastAPI
from fastapi.responses import JSONResponse, Response
from pydantic import BaseModel, Field

from studio.api.multimodal.file_input_manager import UploadError, load_upload
from studio.core.engine import download_filename, run_generation, run_understanding, update_overlay
from studio.core.messages import message
from studio.core.state import StudioSession
from studio.image.encoding import decode_bitmap

app = FastAPI()
logger = logging.getLogger(__name__)
# Sensitive request/response debug logging is opt-in.
DEBUG = os.getenv("DEBUG") == "true"

session = StudioSession()


# ============================================================
# Request Schemas
# ============================================================

class GenerateRequest(BaseModel):
    """Generation action: prompt plus kind and aspect ratio selectors."""
    prompt: str = ""
    kind: str = "general"
    aspect_ratio: str = "1:1"


class OverlayRequest(BaseModel):
    """Partial overlay update; omitted fields keep their current value."""
    content: str | None = None
    color: str | None = None
    font_family: str | None = None
    size: int | None = Field(default=None, gt=0)
    position: str | None = None


class DescribeRequest(BaseModel):
    """Upload as produced by a browser file input (data URL)."""
    image: str = ""


# ============================================================
# Response Helpers
# ============================================================

def _generation_payload():
    state = session.generation
    request = state.result.request if state.result is not None else None
    return {
        "image": state.display_image,
        "kind": request.kind if request else state.kind,
        "width": request.width if request else None,
        "height": request.height if request else None,
        "prompt": request.final_prompt if request else None,
        "in_flight": state.in_flight,
        "error": state.error,
        "notices": list(state.notices),
    }


def _busy():
    return JSONResponse(status_code=409, content={"error": "Request already in progress"})


# ============================================================
# Image Generation
# ============================================================

@app.post("/v1/images/generate")
async def generate(body: GenerateRequest):
    """
    Run one generation flow for the submitted selectors.

    Error handling strategy:
    - Empty prompt returns HTTP 400 without starting the flow.
    - A running generation returns HTTP 409.
    - Generation failure returns HTTP 502 with the localized message.
    """
    state = session.generation

    if state.in_flight:
        return _busy()

    if not body.prompt.strip():
        return JSONResponse(status_code=400, content={"error": message("empty_prompt")})

    state.prompt = body.prompt
    state.kind = body.kind
    state.aspect_ratio = body.aspect_ratio

    if DEBUG:
        logger.info("generate kind=%s aspect_ratio=%s", body.kind, body.aspect_ratio)

    await run_generation(state)

    if state.error:
        return JSONResponse(status_code=502, content=_generation_payload())

    return _generation_payload()


@app.put("/v1/images/overlay")
async def overlay(body: OverlayRequest):
    """Apply overlay changes and return the recomputed display image."""
    changes = body.model_dump(exclude_none=True)

    if DEBUG:
        logger.info("overlay changes=%s", sorted(changes))

    await update_overlay(session.generation, **changes)
    return _generation_payload()


@app.get("/v1/images/current")
def current():
    """Return display image and status of the generation flow."""
    return _generation_payload()


@app.get("/v1/images/download")
def download():
    """Return the display image as a PNG attachment."""
    state = session.generation

    if state.display_image is None or state.result is None:
        return JSONResponse(status_code=404, content={"error": "No image to download"})

    filename = download_filename(state.result.kind)
    return Response(
        content=decode_bitmap(state.display_image),
        media_type="image/png",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


# ============================================================
# Image Understanding
# ============================================================

@app.post("/v1/vision/describe")
async def describe(body: DescribeRequest):
    """
    Describe an uploaded image.

    Error handling strategy:
    - Missing image returns HTTP 400 with the localized no-image message.
    - Non-data-URL uploads and rejected uploads return HTTP 400.
    - A running analysis returns HTTP 409.
    - Understanding failure returns HTTP 502 with the localized message.
    """
    state = session.understanding

    if state.in_flight:
        return _busy()

    if not body.image.strip():
        state.set_upload(None)
        return JSONResponse(status_code=400, content={"error": message("no_image")})

    if not body.image.strip().startswith("data:"):
        return JSONResponse(status_code=400, content={"error": "Upload must be a data URL"})

    try:
        upload = load_upload(body.image)
    except UploadError as err:
        return JSONResponse(status_code=400, content={"error": str(err)})

    state.set_upload(upload)

    if DEBUG:
        logger.info("describe mime_type=%s", upload.mime_type)

    await run_understanding(state)

    if state.error:
        return JSONResponse(status_code=502, content={"error": state.error})

    return {"description": state.description}
