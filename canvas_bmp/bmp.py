"""24-bit uncompressed BMP encoder for RGBA pixel buffers."""

from __future__ import annotations

import logging
import numbers
from pathlib import Path
from typing import TYPE_CHECKING, Optional, Sequence, Union

import numpy as np

from .cursor import ByteCursor
from .errors import BufferSizeMismatch, InvalidDimensions
from .settings import DEFAULT_SETTINGS, EncoderSettings

if TYPE_CHECKING:
    from .surface import PixelSurface

logger = logging.getLogger(__name__)

FILE_HEADER_SIZE = 14
DIB_HEADER_SIZE = 40
PIXEL_DATA_OFFSET = FILE_HEADER_SIZE + DIB_HEADER_SIZE
BITS_PER_PIXEL = 24
BI_RGB = 0
SIGNATURE = 0x4D42  # "BM" read as a little-endian u16

_MAX_DIMENSION = 0x7FFFFFFF
_MAX_FILE_SIZE = 0xFFFFFFFF

PixelData = Union[bytes, bytearray, memoryview, np.ndarray, Sequence[int]]


def row_stride(width: int) -> int:
    """Bytes per pixel row: ``width * 3`` rounded up to a multiple of 4."""

    return (width * 3 + 3) // 4 * 4


def encode(
    width: int,
    height: int,
    pixels: PixelData,
    settings: Optional[EncoderSettings] = None,
) -> bytes:
    """Encode top-down RGBA pixels as a bottom-up 24-bit BGR BMP file.

    ``pixels`` holds ``width * height`` pixels of four bytes each in
    (R, G, B, A) order, top row first. The alpha channel is ignored.
    """

    width, height = check_dimensions(width, height)
    stride = row_stride(width)
    pixel_array_size = stride * height
    file_length = PIXEL_DATA_OFFSET + pixel_array_size
    if file_length > _MAX_FILE_SIZE:
        raise InvalidDimensions(
            width, height, f"Bitmap of {width}x{height} exceeds the 4 GiB BMP size limit"
        )

    data = _as_pixel_array(pixels)
    expected = width * height * 4
    if data.size != expected:
        raise BufferSizeMismatch(expected, int(data.size))

    settings = settings or DEFAULT_SETTINGS

    logger.debug(
        "Encoding %dx%d bitmap: stride=%d, file_length=%d", width, height, stride, file_length
    )

    buffer = bytearray(file_length)
    cursor = ByteCursor(buffer)

    # File header
    cursor.write_u16le(SIGNATURE)
    cursor.write_u32le(file_length)
    cursor.skip(4)  # reserved
    cursor.write_u32le(PIXEL_DATA_OFFSET)

    # BITMAPINFOHEADER
    cursor.write_u32le(DIB_HEADER_SIZE)
    cursor.write_u32le(width)
    cursor.write_u32le(height)  # positive: rows stored bottom-to-top
    cursor.write_u16le(1)
    cursor.write_u16le(BITS_PER_PIXEL)
    cursor.write_u32le(BI_RGB)
    cursor.write_u32le(pixel_array_size)
    cursor.write_u32le(settings.pixels_per_meter)
    cursor.write_u32le(settings.pixels_per_meter)
    cursor.skip(8)  # colors used, important colors

    cursor.write_bytes(_pixel_rows(data, width, height, stride))
    return bytes(buffer)


def encode_surface(surface: "PixelSurface", settings: Optional[EncoderSettings] = None) -> bytes:
    return encode(surface.width, surface.height, surface.pixels, settings)


def save_bitmap(
    path: str | Path,
    width: int,
    height: int,
    pixels: PixelData,
    settings: Optional[EncoderSettings] = None,
) -> Path:
    """Encode the pixels and write them to ``path`` as a BMP file."""

    payload = encode(width, height, pixels, settings)
    path = Path(path)
    with path.open("wb") as fh:
        fh.write(payload)
    logger.debug("Wrote %d bytes to %s", len(payload), path)
    return path


def check_dimensions(width: object, height: object) -> tuple[int, int]:
    for value in (width, height):
        if isinstance(value, bool) or not isinstance(value, numbers.Integral):
            raise InvalidDimensions(width, height)
        if not 1 <= value <= _MAX_DIMENSION:
            raise InvalidDimensions(width, height)
    return int(width), int(height)


def _as_pixel_array(pixels: PixelData) -> np.ndarray:
    if isinstance(pixels, (bytes, bytearray, memoryview)):
        return np.frombuffer(pixels, dtype=np.uint8)
    if isinstance(pixels, np.ndarray):
        if pixels.dtype != np.uint8:
            raise TypeError(f"Pixel array must have dtype uint8, got {pixels.dtype}")
        return pixels.reshape(-1)
    values = np.asarray(pixels).reshape(-1)
    if values.size and (values.dtype.kind not in "iu" or values.min() < 0 or values.max() > 255):
        raise ValueError("Pixel values must be integers in the range 0..255")
    return values.astype(np.uint8)


def _pixel_rows(data: np.ndarray, width: int, height: int, stride: int) -> bytes:
    """Flip rows vertically and reorder RGBA to BGR, zero padding each row to ``stride``."""

    rgba = data.reshape(height, width, 4)
    rows = np.zeros((height, stride), dtype=np.uint8)
    rows[:, : width * 3] = rgba[::-1, :, 2::-1].reshape(height, width * 3)
    return rows.tobytes()
