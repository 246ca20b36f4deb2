"""
Upload preprocessing for the image-understanding flow.

Architectural role:
- Convert a user-selected file reference into an `UnderstandingRequest`
  (raw bytes as base64 plus declared mime type).
- Enforce size, type, and path constraints before anything is sent upstream.

Supported references:
- `data:` URLs (as produced by browser file inputs).
- Local file paths and `file://` URLs inside `FILE_INPUT_BASE_DIR`.

Error handling strategy:
- Every rejected reference raises `UploadError` with a user-presentable reason.
- No temporary files are written; data URLs are decoded in memory.
"""

import base64
import mimetypes
import os
from urllib.parse import unquote, urlparse

from studio.errors import StudioError
from studio.image.encoding import decode_bitmap, split_data_url
from studio.vision.service import UnderstandingRequest


# ============================================================
# CONFIG
# ============================================================

MAX_FILE_SIZE_MB = 10
MAX_FILE_SIZE_BYTES = MAX_FILE_SIZE_MB * 1024 * 1024
ALLOWED_MIME_TYPES = {
    "image/png", "image/jpeg", "image/webp", "image/gif",
}
ALLOWED_EXTENSIONS = {
    ".png", ".jpg", ".jpeg", ".webp", ".gif",
}
PROJECT_ROOT = os.path.dirname(
    os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
)
ALLOWED_FILE_BASE_DIR = os.path.realpath(
    os.getenv("FILE_INPUT_BASE_DIR", os.path.join(PROJECT_ROOT, "uploads"))
)


class UploadError(StudioError):
    """Uploaded file reference was rejected."""


# ============================================================
# PUBLIC ENTRYPOINT
# ============================================================

def load_upload(file_ref: str, base_dir: str | None = None) -> UnderstandingRequest:
    """
    Resolve a file reference into an inline understanding payload.

    Args:
        file_ref: data URL, `file://` URL, or local path.
        base_dir: Directory local paths must live in (default
            `ALLOWED_FILE_BASE_DIR`).

    Raises:
        UploadError: empty, malformed, oversized, unsupported, or
            out-of-scope reference.
    """
    if not file_ref or not file_ref.strip():
        raise UploadError("No file provided")

    file_ref = file_ref.strip()

    if file_ref.startswith("data:"):
        return _load_data_url(file_ref)

    return _load_local_file(_resolve_path(file_ref), base_dir or ALLOWED_FILE_BASE_DIR)


# ============================================================
# DATA URL
# ============================================================

def _load_data_url(data_url: str) -> UnderstandingRequest:
    """
    Validate a base64 data URL and return it as an understanding payload.

    Input validation behavior:
    - Applies an approximate decoded-size check before decoding.
    - Rejects non-image mime types and invalid base64.
    """
    try:
        mime_type, encoded = split_data_url(data_url)
    except ValueError as err:
        raise UploadError(str(err)) from err

    padding = 0
    if encoded.endswith("=="):
        padding = 2
    elif encoded.endswith("="):
        padding = 1
    approx_decoded_size = (len(encoded) * 3) // 4 - padding
    if approx_decoded_size > MAX_FILE_SIZE_BYTES:
        raise UploadError("File exceeds max size limit")

    if mime_type.lower() not in ALLOWED_MIME_TYPES:
        raise UploadError("Unsupported file type")

    try:
        raw = decode_bitmap(data_url)
    except ValueError as err:
        raise UploadError(str(err)) from err

    if not raw:
        raise UploadError("File is empty")

    return UnderstandingRequest(data=encoded, mime_type=mime_type.lower())


# ============================================================
# LOCAL FILES
# ============================================================

def _resolve_path(file_ref: str) -> str:
    """Return a canonical path for a `file://` URL or plain path."""
    if file_ref.startswith("file://"):
        parsed = urlparse(file_ref)

        # Reject remote hosts in file URLs.
        if parsed.netloc not in ("", "localhost"):
            raise UploadError("Remote file URLs are not supported")

        file_ref = unquote(parsed.path or "")

    return os.path.realpath(os.path.expanduser(file_ref))


def _is_allowed_path(path: str, base_dir: str) -> bool:
    """Return whether `path` is inside `base_dir` after normalization."""
    base = os.path.realpath(base_dir)
    try:
        return os.path.commonpath([os.path.realpath(path), base]) == base
    except ValueError:
        return False


def _load_local_file(path: str, base_dir: str) -> UnderstandingRequest:
    """
    Read an image file and return it as an understanding payload.

    Validation behavior:
    - Rejects paths outside the allowed base directory.
    - Rejects missing, empty, or oversized files.
    - Rejects unsupported extensions.
    """
    if not _is_allowed_path(path, base_dir):
        raise UploadError("Access denied: path is outside allowed directory")

    if not os.path.isfile(path):
        raise UploadError("File does not exist")

    size = os.path.getsize(path)
    if size == 0:
        raise UploadError("File is empty")
    if size > MAX_FILE_SIZE_BYTES:
        raise UploadError("File exceeds max size limit")

    _, ext = os.path.splitext(path)
    if ext.lower() not in ALLOWED_EXTENSIONS:
        raise UploadError("Unsupported file type")

    mime_type = mimetypes.guess_type(path)[0] or "image/png"

    with open(path, "rb") as f:
        encoded = base64.b64encode(f.read()).decode("ascii")

    return UnderstandingRequest(data=encoded, mime_type=mime_type)
