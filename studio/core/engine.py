"""Flow orchestration for generation, overlay, and understanding.

Architectural role:
    Provides the async entrypoints used by the HTTP adapter. Each entrypoint
    takes an explicit flow state, runs its steps strictly in order, and writes
    outcomes back to that state.

Control-flow model (generation):
    1. Reject empty prompts without touching flow status.
    2. Take an invocation ticket and set the in-flight flag.
    3. translate -> build prompt -> call provider -> decode (`generate_image`).
    4. Recompute the display image from the new result and current overlay.
    5. Clear the in-flight flag in `finally`.

Staleness:
    No request can be cancelled. When a newer invocation has started, results
    of older ones are dropped instead of overwriting newer state.

Display invariant:
    `display_image` is always recomputed from scratch by
    `resolve_display_image(result, overlay)` after a state transition that
    changes either input; it is never patched.

Error handling strategy:
    - `GenerationError` / `UnderstandingError` become localized messages on state.
    - Translation and overlay failures become non-fatal notices.
    - Blocking HTTP and Pillow work runs in worker threads via `asyncio.to_thread`.
"""

import asyncio
import logging
import time
from dataclasses import replace
from typing import Callable

from studio.core.messages import message
from studio.core.state import GenerationFlowState, UnderstandingFlowState
from studio.errors import (
    GenerationError,
    LoadError,
    NoContentError,
    NoImageProvidedError,
    UnderstandingError,
)
from studio.image.compositor import TextOverlayOptions, composite
from studio.image.service import GeneratedImage, generate_image
from studio.prompting.prompt_builder import OVERLAY_KINDS
from studio.vision.service import understand_image


logger = logging.getLogger(__name__)


# =========================================================
# DISPLAY IMAGE
# =========================================================

def resolve_display_image(
    result: GeneratedImage | None,
    options: TextOverlayOptions,
    notify: Callable[[str], None] | None = None,
) -> str | None:
    """Return the image to display for a result and overlay options.

    Text is composited only for logo and cover results with non-blank overlay
    content. A compositing `LoadError` falls back to the raw image.
    """
    if result is None:
        return None

    if result.kind not in OVERLAY_KINDS or options is None or options.is_blank():
        return result.data_url

    try:
        return composite(result.data_url, options)
    except LoadError:
        logger.exception("Text overlay failed; showing uncomposited image")
        if notify is not None:
            notify(message("overlay_failed"))
        return result.data_url


# =========================================================
# GENERATION FLOW
# =========================================================

async def run_generation(state: GenerationFlowState) -> GenerationFlowState:
    """Run one generation invocation for the prompt/kind/ratio on `state`."""
    if not state.prompt or not state.prompt.strip():
        state.error = message("empty_prompt")
        return state

    ticket = state.begin()
    notices = []

    try:
        result = await asyncio.to_thread(
            generate_image,
            state.prompt,
            state.kind,
            state.aspect_ratio,
            notices.append,
        )

        if not state.is_current(ticket):
            logger.info("Discarding stale generation result (ticket=%d)", ticket)
            return state

        state.result = result

        revision = state.overlay_revision
        display = await asyncio.to_thread(
            resolve_display_image,
            result,
            state.overlay,
            notices.append,
        )
        # A newer overlay change already recomputed the display image.
        if state.is_current(ticket) and state.overlay_revision == revision:
            state.display_image = display

    except GenerationError as err:
        logger.warning("Image generation failed: %s", err)
        if state.is_current(ticket):
            state.error = message("generation_failed", detail=str(err))

    finally:
        if state.is_current(ticket):
            state.notices.extend(notices)
            state.in_flight = False

    return state


async def update_overlay(state: GenerationFlowState, **changes) -> GenerationFlowState:
    """Apply overlay field changes and recompute the display image.

    Args:
        state: Generation flow state.
        **changes: `TextOverlayOptions` fields to replace.

    Raises:
        TypeError: unknown overlay field name.
    """
    state.overlay = replace(state.overlay, **changes)
    state.overlay_revision += 1
    revision = state.overlay_revision
    result = state.result

    notices = []
    display = await asyncio.to_thread(
        resolve_display_image,
        result,
        state.overlay,
        notices.append,
    )

    # A newer overlay change or a new generation result owns the display image.
    if state.overlay_revision == revision and state.result is result:
        state.display_image = display
        state.notices.extend(notices)

    return state


def download_filename(kind: str, timestamp_ms: int | None = None) -> str:
    """Return the download name `{kind}_{timestamp}.png` (milliseconds)."""
    if timestamp_ms is None:
        timestamp_ms = int(time.time() * 1000)
    return f"{kind}_{timestamp_ms}.png"


# =========================================================
# UNDERSTANDING FLOW
# =========================================================

async def run_understanding(state: UnderstandingFlowState) -> UnderstandingFlowState:
    """Run one understanding invocation for the upload on `state`."""
    ticket = state.begin()

    try:
        description = await asyncio.to_thread(understand_image, state.upload)
        if state.is_current(ticket):
            state.description = description

    except NoImageProvidedError:
        if state.is_current(ticket):
            state.error = message("no_image")

    except NoContentError:
        logger.warning("Image understanding returned no content")
        if state.is_current(ticket):
            state.error = message("understanding_failed", detail=message("no_content"))

    except UnderstandingError as err:
        logger.warning("Image understanding failed: %s", err)
        if state.is_current(ticket):
            state.error = message("understanding_failed", detail=str(err))

    finally:
        if state.is_current(ticket):
            state.in_flight = False

    return state
