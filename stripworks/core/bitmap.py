"""
Bitmap codec - decoding sources into RGBA images and encoding them back.
NO UI DEPENDENCIES.

Decoding is the only point where editing sessions wait on I/O. Everything
downstream works on fully loaded RGBA images or (H, W, 4) uint8 buffers.
"""
import base64
import binascii
import io
import logging
from pathlib import Path
from typing import Tuple, Union

import numpy as np
from PIL import Image, UnidentifiedImageError

from ..errors import DecodeFailure

logger = logging.getLogger(__name__)

# Type alias for RGBA color tuples
Color = Tuple[int, int, int, int]

BitmapSource = Union[str, Path, bytes, Image.Image]

DATA_URL_PREFIX = "data:image/png;base64,"


def _describe(source: BitmapSource) -> str:
    if isinstance(source, (bytes, bytearray)):
        return f"<{len(source)} bytes>"
    if isinstance(source, str) and source.startswith("data:"):
        return "<data url>"
    return str(source)


def load_bitmap(source: BitmapSource) -> Image.Image:
    """
    Decode a bitmap source into a fully loaded RGBA image.

    Args:
        source: A PIL image, raw encoded bytes, a data URL, or a file path

    Returns:
        RGBA image with pixel data loaded

    Raises:
        DecodeFailure: if the source cannot be read or decoded
    """
    if isinstance(source, Image.Image):
        return source.convert("RGBA")

    try:
        if isinstance(source, (bytes, bytearray)):
            fp = io.BytesIO(source)
        elif isinstance(source, str) and source.startswith("data:"):
            _, _, payload = source.partition(",")
            fp = io.BytesIO(base64.b64decode(payload, validate=True))
        else:
            fp = Path(source)

        with Image.open(fp) as img:
            img.load()
            bitmap = img.convert("RGBA")
    except (OSError, UnidentifiedImageError, binascii.Error, ValueError) as e:
        raise DecodeFailure(_describe(source), str(e)) from e

    logger.debug(f"Decoded {_describe(source)} ({bitmap.width}x{bitmap.height})")
    return bitmap


def encode_png(img: Image.Image) -> bytes:
    """Encode an image as PNG bytes."""
    buf = io.BytesIO()
    img.save(buf, format="PNG")
    return buf.getvalue()


def to_data_url(png_bytes: bytes) -> str:
    """Wrap PNG bytes in a data URL."""
    return DATA_URL_PREFIX + base64.b64encode(png_bytes).decode("ascii")


def to_buffer(img: Image.Image) -> np.ndarray:
    """Copy an image into a mutable (H, W, 4) uint8 raster buffer."""
    return np.array(img.convert("RGBA"), dtype=np.uint8)


def from_buffer(buffer: np.ndarray) -> Image.Image:
    """Build an RGBA image from a raster buffer."""
    return Image.fromarray(np.ascontiguousarray(buffer, dtype=np.uint8))


def parse_hex_color(value: str) -> Color:
    """
    Parse '#rrggbb' or '#rrggbbaa' into an RGBA tuple.
    Six-digit colors are fully opaque.
    """
    digits = value.lstrip("#")
    if len(digits) not in (6, 8):
        raise ValueError(f"Invalid color: {value!r}")
    try:
        channels = [int(digits[i:i + 2], 16) for i in range(0, len(digits), 2)]
    except ValueError:
        raise ValueError(f"Invalid color: {value!r}") from None
    if len(channels) == 3:
        channels.append(255)
    return tuple(channels)


def color_to_hex(color: Tuple[int, ...]) -> str:
    """Convert a color tuple to '#rrggbb' (alpha is dropped)."""
    return f"#{color[0]:02x}{color[1]:02x}{color[2]:02x}"
