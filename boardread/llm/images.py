"""Decode, check and downscale uploaded creatives before they reach the model."""

from __future__ import annotations

import io
import logging
from dataclasses import dataclass

from PIL import Image, UnidentifiedImageError

from boardread.errors import InvalidImageError

logger = logging.getLogger(__name__)

MAX_EDGE_PX = 1568  # longest edge the vision model uses without internal resizing
MAX_BYTES = 5 * 1024 * 1024

_MEDIA_TYPES = {
    "JPEG": "image/jpeg",
    "PNG": "image/png",
    "GIF": "image/gif",
    "WEBP": "image/webp",
}


@dataclass(frozen=True)
class PreparedImage:
    data: bytes
    media_type: str
    width: int
    height: int


def prepare_image(raw: bytes) -> PreparedImage:
    """Return the image as the model should receive it.

    Supported formats under the size limits pass through untouched; anything
    else is re-encoded (JPEG, or PNG when there is transparency).
    """
    if not raw:
        raise InvalidImageError("empty image")
    try:
        with Image.open(io.BytesIO(raw)) as probe:
            probe.verify()
        with Image.open(io.BytesIO(raw)) as img:
            img.load()
            prepared = _encode(raw, img)
    except Image.DecompressionBombError as exc:
        raise InvalidImageError(f"image too large to decode: {exc}") from exc
    except (UnidentifiedImageError, OSError, SyntaxError) as exc:
        raise InvalidImageError(f"not a readable image: {exc}") from exc
    return prepared


def _encode(raw: bytes, img: Image.Image) -> PreparedImage:
    fmt = img.format or ""
    width, height = img.size
    if fmt in _MEDIA_TYPES and max(width, height) <= MAX_EDGE_PX and len(raw) <= MAX_BYTES:
        return PreparedImage(raw, _MEDIA_TYPES[fmt], width, height)

    if max(width, height) > MAX_EDGE_PX:
        img.thumbnail((MAX_EDGE_PX, MAX_EDGE_PX))

    buf = io.BytesIO()
    if img.mode in ("RGBA", "LA", "P"):
        img.convert("RGBA").save(buf, format="PNG", optimize=True)
        media_type = "image/png"
    else:
        img.convert("RGB").save(buf, format="JPEG", quality=85)
        media_type = "image/jpeg"

    logger.info(
        "Re-encoded %s %dx%d (%d bytes) as %s %dx%d (%d bytes)",
        fmt or "image",
        width,
        height,
        len(raw),
        media_type,
        img.width,
        img.height,
        buf.tell(),
    )
    return PreparedImage(buf.getvalue(), media_type, img.width, img.height)
