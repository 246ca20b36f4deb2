"""Kind-specific prompt and resolution assembly for image generation.

This module only builds request values from already translated text. Translation,
transport, and decoding happen outside this module.

Design constraints:
    - Deterministic construction for identical inputs.
    - No I/O, no global state mutation.
    - Every prompt variant instructs the model to omit text: typography is drawn
      later by `studio.image.compositor`.

Fallbacks:
    - Unknown kinds are built as `general`.
    - Unknown aspect ratios resolve to the kind's default resolution
      (1280x720 for covers, 1024x1024 for general images).
"""

from dataclasses import dataclass


KIND_GENERAL = "general"
KIND_LOGO = "logo"
KIND_COVER = "cover"

GENERATION_KINDS = (KIND_GENERAL, KIND_LOGO, KIND_COVER)

# Kinds whose result can carry a text overlay.
OVERLAY_KINDS = (KIND_LOGO, KIND_COVER)


# =========================================================
# PROMPT TEMPLATES
# =========================================================

LOGO_TEMPLATE = (
    "minimalist, iconic, clean, vector style logo for: {text}. "
    "No text, no typography, no words."
)

COVER_TEMPLATE = (
    "high-quality, artistic, detailed cover art for: {text}, suitable for a cover. "
    "No text, no typography, no words."
)

GENERAL_SUFFIX = ", no text, no words, no typography, high quality, detailed, realistic."


# =========================================================
# RESOLUTIONS
# =========================================================

LOGO_SIZE = (512, 512)

COVER_SIZES = {
    "2:3": (720, 1280),
    "16:9": (1920, 1080),
    "9:16": (720, 1280),
}
COVER_DEFAULT_SIZE = (1280, 720)

GENERAL_SIZES = {
    "16:9": (1280, 720),
    "9:16": (720, 1280),
}
GENERAL_DEFAULT_SIZE = (1024, 1024)


@dataclass
class GenerationRequest:
    """One generation action with its derived provider values.

    Attributes:
        raw_prompt: Prompt text as typed by the user.
        kind: Normalized generation kind.
        aspect_ratio: Aspect ratio selected by the user (ignored for logos).
        width: Resolved output width.
        height: Resolved output height.
        final_prompt: Translated, kind-wrapped prompt sent to the provider.
    """

    raw_prompt: str
    kind: str
    aspect_ratio: str
    width: int
    height: int
    final_prompt: str

    @property
    def image_size(self) -> str:
        """Provider `imageSize` value (`"WxH"`)."""
        return f"{self.width}x{self.height}"


def normalize_kind(kind: str | None) -> str:
    """Return `kind` when known, otherwise `general`."""
    if kind in GENERATION_KINDS:
        return kind
    return KIND_GENERAL


def resolve_size(kind: str, aspect_ratio: str | None) -> tuple[int, int]:
    """Return `(width, height)` for a kind and aspect ratio."""
    kind = normalize_kind(kind)

    if kind == KIND_LOGO:
        return LOGO_SIZE
    if kind == KIND_COVER:
        return COVER_SIZES.get(aspect_ratio, COVER_DEFAULT_SIZE)
    return GENERAL_SIZES.get(aspect_ratio, GENERAL_DEFAULT_SIZE)


def build_final_prompt(text: str, kind: str) -> str:
    """Wrap translated `text` in the kind-specific template."""
    kind = normalize_kind(kind)

    if kind == KIND_LOGO:
        return LOGO_TEMPLATE.format(text=text)
    if kind == KIND_COVER:
        return COVER_TEMPLATE.format(text=text)
    return f"{text}{GENERAL_SUFFIX}"


def build_generation_request(
    raw_prompt: str,
    translated_prompt: str,
    kind: str,
    aspect_ratio: str,
) -> GenerationRequest:
    """Build the complete request values for one generation action.

    Args:
        raw_prompt: Prompt as typed by the user.
        translated_prompt: Output of `studio.nlp.translator.translate`.
        kind: Requested kind (`general`, `logo`, `cover`).
        aspect_ratio: Requested aspect ratio (`1:1`, `16:9`, `9:16`, `2:3`).

    Returns:
        `GenerationRequest` with resolution and final prompt filled in.
    """
    kind = normalize_kind(kind)
    width, height = resolve_size(kind, aspect_ratio)

    return GenerationRequest(
        raw_prompt=raw_prompt,
        kind=kind,
        aspect_ratio=aspect_ratio,
        width=width,
        height=height,
        final_prompt=build_final_prompt(translated_prompt, kind),
    )
