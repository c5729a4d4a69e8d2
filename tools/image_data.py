"""Read a chosen image file into an embeddable data URI."""

from __future__ import annotations

import base64
import mimetypes
from pathlib import Path


class ImageReadError(OSError):
    """Raised when the selected image file cannot be read."""


def to_data_uri(content: bytes, mime_type: str | None) -> str:
    encoded = base64.b64encode(content).decode("ascii")
    return f"data:{mime_type or 'application/octet-stream'};base64,{encoded}"


def read_image_as_data_uri(path: str | Path) -> str:
    """Read ``path`` completely and return it as a base64 data URI.

    The mime type is guessed from the file name.

    Raises:
        ImageReadError: If the file is missing or unreadable.
    """

    image_path = Path(path)
    try:
        content = image_path.read_bytes()
    except OSError as exc:
        raise ImageReadError(f"Could not read image {image_path.name}: {exc.strerror or exc}") from exc
    mime_type, _ = mimetypes.guess_type(image_path.name)
    return to_data_uri(content, mime_type)


__all__ = ["ImageReadError", "read_image_as_data_uri", "to_data_uri"]
