"""
Decoding of ``data:image/<subtype>;base64,<payload>`` URIs.

``decode_image`` only checks the URI and base64 layer and returns the raw
bytes.  ``prepare_for_docx`` opens them with Pillow and converts formats Word
cannot embed (webp, ...) to PNG.
"""
from __future__ import annotations

import base64
import binascii
import io
import logging
import re
from dataclasses import dataclass

from PIL import Image, UnidentifiedImageError

logger = logging.getLogger(__name__)

_DATA_URI_RE = re.compile(r"^data:image/([A-Za-z0-9+\-]+);base64,(.+)$", re.DOTALL)
_WHITESPACE_RE = re.compile(r"\s+")

# Pillow format names python-docx can embed without conversion
_DOCX_NATIVE_FORMATS = {"PNG", "JPEG", "GIF", "BMP", "TIFF"}


class ImageDecodeError(ValueError):
    """Raised when a data URI is malformed or its payload is not a usable image."""


@dataclass(frozen=True)
class DecodedImage:
    data: bytes
    subtype: str


def decode_image(data_uri: str) -> DecodedImage:
    """
    Split a data URI into its image subtype and decoded bytes.

    Args:
        data_uri: String of the form ``data:image/png;base64,iVBOR...``.

    Returns:
        DecodedImage with the lower-cased subtype and the decoded payload.

    Raises:
        ImageDecodeError: The string does not match the pattern or the payload
                          is not valid base64.
    """
    if not isinstance(data_uri, str):
        raise ImageDecodeError(f"Expected a data URI string, got {type(data_uri).__name__}")

    match = _DATA_URI_RE.match(data_uri.strip())
    if match is None:
        raise ImageDecodeError("Invalid image format: not a base64 image data URI")

    subtype = match.group(1).lower()
    payload = _WHITESPACE_RE.sub("", match.group(2))
    try:
        data = base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise ImageDecodeError(f"Invalid base64 image payload: {exc}") from exc

    if not data:
        raise ImageDecodeError("Image payload is empty")
    return DecodedImage(data=data, subtype=subtype)


def prepare_for_docx(image: DecodedImage) -> io.BytesIO:
    """
    Return a stream python-docx can embed.

    Native formats are passed through byte-for-byte; anything else Pillow can
    read is re-encoded as PNG.

    Raises:
        ImageDecodeError: Pillow cannot identify the image, or its declared
            size exceeds the decompression-bomb limit.
    """
    try:
        with Image.open(io.BytesIO(image.data)) as img:
            fmt = (img.format or "").upper()
            if fmt in _DOCX_NATIVE_FORMATS:
                return io.BytesIO(image.data)

            logger.debug("Converting %s image to PNG for embedding", fmt or image.subtype)
            if img.mode not in ("RGB", "RGBA", "L", "LA", "P"):
                img = img.convert("RGBA")
            out = io.BytesIO()
            img.save(out, format="PNG")
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError) as exc:
        raise ImageDecodeError(f"Unreadable {image.subtype} image: {exc}") from exc

    out.seek(0)
    return out
