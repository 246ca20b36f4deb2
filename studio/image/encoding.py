"""Data-URL helpers for bitmap references.

Bitmaps travel through the studio as `data:<mime>;base64,<payload>` strings,
the same form a browser accepts as an image source. Bare base64 strings are
accepted on input and treated as PNG.
"""

import base64
import binascii

DEFAULT_MIME_TYPE = "image/png"


def to_data_url(encoded: str, mime_type: str = DEFAULT_MIME_TYPE) -> str:
    """Wrap base64 `encoded` bytes in a data URL."""
    return f"data:{mime_type};base64,{encoded}"


def split_data_url(reference: str) -> tuple[str, str]:
    """Return `(mime_type, base64_payload)` for a data URL or bare base64 string.

    Raises:
        ValueError: `reference` is a data URL without a `,` separator or is not
            base64-encoded.
    """
    if not reference.startswith("data:"):
        return DEFAULT_MIME_TYPE, reference.strip()

    header, sep, encoded = reference.partition(",")
    if not sep:
        raise ValueError("Malformed data URL")

    meta = header[len("data:"):].split(";")
    if "base64" not in meta[1:]:
        raise ValueError("Data URL is not base64-encoded")

    mime_type = meta[0] or DEFAULT_MIME_TYPE
    return mime_type, encoded.strip()


def decode_bitmap(reference: str) -> bytes:
    """Return raw bytes behind a bitmap reference.

    Raises:
        ValueError: malformed data URL or invalid base64 payload.
    """
    _, encoded = split_data_url(reference)
    try:
        return base64.b64decode(encoded, validate=True)
    except binascii.Error as err:
        raise ValueError(f"Invalid base64 payload: {err}") from err


def encode_bitmap(raw: bytes, mime_type: str = DEFAULT_MIME_TYPE) -> str:
    """Return a data URL for raw bitmap bytes."""
    return to_data_url(base64.b64encode(raw).decode("ascii"), mime_type)
