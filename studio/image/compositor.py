"""Client-side text compositor.

Draws overlay text on a generated image so typography stays under user control
while the image model only renders the scene.

Rendering model:
    - The base bitmap is decoded into an RGBA surface of its natural size.
    - Text is centered horizontally and vertically centered on an anchor chosen
      by `position` (`top`, `center`, `bottom`; anything else behaves as `center`).
    - Arabic text is shaped and laid out right-to-left when libraqm is available.
    - A fixed drop shadow (black at 70% opacity, blur 5, offset 2,2) is rendered
      on its own transparent layer, so nothing carries over between calls.
    - The result is re-encoded as a PNG data URL.

Passthrough:
    An empty base image or blank content returns the base image unchanged.

Error handling strategy:
    Decode failures raise `LoadError` before any drawing happens. Callers are
    expected to fall back to the uncomposited image.
"""

import io
import logging
from dataclasses import dataclass

from PIL import Image, ImageColor, ImageDraw, ImageFilter, ImageFont, features

from studio.errors import LoadError
from studio.image.encoding import decode_bitmap, encode_bitmap
from studio.nlp.translator import contains_arabic


logger = logging.getLogger(__name__)

PADDING = 20

SHADOW_COLOR = (0, 0, 0, round(255 * 0.7))
SHADOW_BLUR = 5
SHADOW_OFFSET = (2, 2)

DEFAULT_COLOR = (255, 255, 255, 255)

# Complex-script shaping (Arabic joining, bidi) needs libraqm.
LAYOUT_ENGINE = ImageFont.Layout.RAQM if features.check("raqm") else ImageFont.Layout.BASIC
FALLBACK_FONT_FILES = ("DejaVuSans.ttf", "Arial.ttf")

POSITION_TOP = "top"
POSITION_CENTER = "center"
POSITION_BOTTOM = "bottom"

_FONT_CACHE = {}


@dataclass
class TextOverlayOptions:
    """User-editable overlay styling.

    Attributes:
        content: Text to draw; blank disables the overlay.
        color: Any color string Pillow understands (`#ffffff`, `white`, `rgb(...)`).
        font_family: Font family name or path to a TrueType/OpenType file.
        size: Font size in pixels.
        position: Vertical placement (`top`, `center`, `bottom`).
    """

    content: str = ""
    color: str = "#ffffff"
    font_family: str = "Arial"
    size: int = 48
    position: str = POSITION_CENTER

    def is_blank(self) -> bool:
        return not self.content or not self.content.strip()


def anchor_y(height: float, size: float, position: str) -> float:
    """Return the vertical text anchor for a surface height and font size."""
    if position == POSITION_TOP:
        return PADDING + size / 2
    if position == POSITION_BOTTOM:
        return height - PADDING - size / 2
    return height / 2


def anchor_point(width: float, height: float, size: float, position: str) -> tuple[float, float]:
    """Return `(x, y)` anchor; x is always the horizontal midpoint."""
    return width / 2, anchor_y(height, size, position)


def load_font(family: str, size: int):
    """Load a font by family name or path, with cached fallbacks.

    Tries the family as given, then `<family>.ttf`, then common fallback
    files, then Pillow's bundled default font at the requested size.
    """
    size = max(1, int(size))
    key = (family or "default", size)
    if key in _FONT_CACHE:
        return _FONT_CACHE[key]

    candidates = []
    if family:
        candidates.append(family)
        if not family.lower().endswith((".ttf", ".otf", ".ttc")):
            candidates.append(f"{family}.ttf")
            candidates.append(f"{family.replace(' ', '')}.ttf")
    candidates.extend(FALLBACK_FONT_FILES)

    font = None
    for name in candidates:
        try:
            font = ImageFont.truetype(name, size, layout_engine=LAYOUT_ENGINE)
            break
        except OSError:
            continue

    if font is None:
        logger.warning("Font %r not found; using default font", family)
        font = ImageFont.load_default(size=size)

    _FONT_CACHE[key] = font
    return font


def parse_color(color: str) -> tuple:
    """Return an RGBA tuple for `color`, falling back to white."""
    try:
        rgb = ImageColor.getrgb(color)
    except (ValueError, AttributeError):
        logger.warning("Unrecognized overlay color %r; using white", color)
        return DEFAULT_COLOR
    if len(rgb) == 3:
        return (*rgb, 255)
    return rgb


def decode_surface(base_image: str) -> Image.Image:
    """Decode a bitmap reference into an RGBA surface.

    Raises:
        LoadError: payload is not valid base64 or not a readable image.
    """
    try:
        raw = decode_bitmap(base_image)
        with Image.open(io.BytesIO(raw)) as img:
            img.load()
            return img.convert("RGBA")
    except (ValueError, OSError, Image.DecompressionBombError) as err:
        raise LoadError(f"Could not decode base image: {err}") from err


def text_direction(text: str, font) -> str | None:
    """Return `rtl` for Arabic text when the font shapes with raqm, else `None`."""
    if contains_arabic(text) and getattr(font, "layout_engine", None) == ImageFont.Layout.RAQM:
        return "rtl"
    return None


def _centered_origin(draw, anchor, text, font, direction=None) -> tuple[float, float]:
    """Return the top-left origin that centers the text box on `anchor`."""
    left, top, right, bottom = draw.textbbox((0, 0), text, font=font, direction=direction)
    x, y = anchor
    return x - (right - left) / 2 - left, y - (bottom - top) / 2 - top


def composite(base_image: str, options: TextOverlayOptions) -> str:
    """Draw `options.content` on `base_image` and return a new PNG data URL.

    Args:
        base_image: Data URL (or bare base64) of the source bitmap.
        options: Overlay styling.

    Returns:
        Composited PNG data URL, or `base_image` unchanged when the image or
        content is empty.

    Raises:
        LoadError: `base_image` cannot be decoded.
    """
    if not base_image or options is None or options.is_blank():
        return base_image

    surface = decode_surface(base_image)
    width, height = surface.size

    font = load_font(options.font_family, options.size)
    fill = parse_color(options.color)
    anchor = anchor_point(width, height, options.size, options.position)
    direction = text_direction(options.content, font)

    shadow = Image.new("RGBA", surface.size, (0, 0, 0, 0))
    shadow_draw = ImageDraw.Draw(shadow)
    shadow_anchor = (anchor[0] + SHADOW_OFFSET[0], anchor[1] + SHADOW_OFFSET[1])
    shadow_draw.text(
        _centered_origin(shadow_draw, shadow_anchor, options.content, font, direction),
        options.content,
        font=font,
        fill=SHADOW_COLOR,
        align="center",
        direction=direction,
    )
    # Canvas shadow blur is twice the gaussian standard deviation.
    shadow = shadow.filter(ImageFilter.GaussianBlur(SHADOW_BLUR / 2))

    surface = Image.alpha_composite(surface, shadow)

    draw = ImageDraw.Draw(surface)
    draw.text(
        _centered_origin(draw, anchor, options.content, font, direction),
        options.content,
        font=font,
        fill=fill,
        align="center",
        direction=direction,
    )

    buffer = io.BytesIO()
    surface.save(buffer, format="PNG")
    return encode_bitmap(buffer.getvalue())
