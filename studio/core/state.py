"""Per-flow state structures for `studio.core.engine`.

Architectural role:
    Replaces ambient UI variables with one explicit structure per flow. The
    engine receives a state object, mutates it, and returns it; the HTTP adapter
    owns one `StudioSession` per process.

Staleness model:
    Each flow keeps an invocation counter. `begin()` hands out a ticket and
    `is_current(ticket)` tells the engine whether an invocation is still the most
    recent one. Only the current invocation may write results, errors, or clear
    the in-flight flag.
"""

from dataclasses import dataclass, field

from studio.image.compositor import TextOverlayOptions
from studio.image.service import GeneratedImage
from studio.vision.service import UnderstandingRequest


@dataclass
class GenerationFlowState:
    """Inputs, outputs, and status of the image generation flow.

    Attributes:
        prompt: Prompt text as typed by the user.
        kind: Selected generation kind.
        aspect_ratio: Selected aspect ratio.
        overlay: Current overlay styling.
        result: Latest generated image, or `None`.
        display_image: Image to show (composited or raw), always derived from
            `result` and `overlay`.
        in_flight: Whether a generation request is running.
        error: Localized error message of the latest invocation.
        notices: Non-fatal notices of the latest invocation.
        generation: Invocation counter used for stale-response detection.
        overlay_revision: Overlay change counter used the same way for
            display recomputation.
    """

    prompt: str = ""
    kind: str = "general"
    aspect_ratio: str = "1:1"
    overlay: TextOverlayOptions = field(default_factory=TextOverlayOptions)

    result: GeneratedImage | None = None
    display_image: str | None = None

    in_flight: bool = False
    error: str | None = None
    notices: list = field(default_factory=list)

    generation: int = 0
    overlay_revision: int = 0

    def begin(self) -> int:
        """Start a new invocation and return its ticket."""
        self.generation += 1
        self.in_flight = True
        self.error = None
        self.notices = []
        self.result = None
        self.display_image = None
        return self.generation

    def is_current(self, ticket: int) -> bool:
        return ticket == self.generation


@dataclass
class UnderstandingFlowState:
    """Inputs, outputs, and status of the image understanding flow."""

    upload: UnderstandingRequest | None = None
    description: str | None = None

    in_flight: bool = False
    error: str | None = None

    generation: int = 0

    def set_upload(self, upload: UnderstandingRequest | None) -> None:
        """Replace the uploaded image; the previous analysis no longer applies."""
        self.upload = upload
        self.description = None
        self.error = None

    def begin(self) -> int:
        self.generation += 1
        self.in_flight = True
        self.error = None
        self.description = None
        return self.generation

    def is_current(self, ticket: int) -> bool:
        return ticket == self.generation


@dataclass
class StudioSession:
    """Both flows of one user session; they never share mutable state."""

    generation: GenerationFlowState = field(default_factory=GenerationFlowState)
    understanding: UnderstandingFlowState = field(default_factory=UnderstandingFlowState)
