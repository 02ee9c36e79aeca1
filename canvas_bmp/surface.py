"""Pixel surfaces and the adapters that produce them from external images."""

from __future__ import annotations

import io
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO, Union
from urllib.parse import urlparse
from urllib.request import url2pathname

import numpy as np
from PIL import Image

from .bmp import check_dimensions
from .errors import BufferSizeMismatch, SourceLoadFailure
from .export import parse_data_url

logger = logging.getLogger(__name__)

SurfaceSource = Union["PixelSurface", Image.Image, np.ndarray, bytes, bytearray, memoryview, str, os.PathLike]


@dataclass(frozen=True)
class PixelSurface:
    """Rectangular RGBA pixel grid, row-major, top row first."""

    width: int
    height: int
    pixels: bytes

    def __post_init__(self) -> None:
        width, height = check_dimensions(self.width, self.height)
        pixels = bytes(self.pixels)
        expected = width * height * 4
        if len(pixels) != expected:
            raise BufferSizeMismatch(expected, len(pixels))
        object.__setattr__(self, "width", width)
        object.__setattr__(self, "height", height)
        object.__setattr__(self, "pixels", pixels)

    @classmethod
    def from_image(cls, image: Image.Image) -> "PixelSurface":
        """Render a Pillow image of any mode onto an RGBA surface of the same size."""

        rgba = image if image.mode == "RGBA" else image.convert("RGBA")
        width, height = rgba.size
        return cls(width=width, height=height, pixels=rgba.tobytes("raw", "RGBA"))

    @classmethod
    def from_array(cls, array: np.ndarray) -> "PixelSurface":
        """Build a surface from a ``(height, width, 4)`` or ``(height, width, 3)`` uint8 array.

        Three-channel input is treated as fully opaque.
        """

        array = np.asarray(array)
        if array.dtype != np.uint8:
            raise TypeError(f"Pixel array must have dtype uint8, got {array.dtype}")
        if array.ndim != 3 or array.shape[2] not in (3, 4):
            raise ValueError(f"Expected an array of shape (H, W, 3) or (H, W, 4), got {array.shape}")
        if array.shape[2] == 3:
            alpha = np.full(array.shape[:2] + (1,), 255, dtype=np.uint8)
            array = np.concatenate([array, alpha], axis=2)
        height, width = array.shape[:2]
        return cls(width=width, height=height, pixels=np.ascontiguousarray(array).tobytes())

    def as_array(self) -> np.ndarray:
        """Read-only ``(height, width, 4)`` view of the pixel bytes."""

        return np.frombuffer(self.pixels, dtype=np.uint8).reshape(self.height, self.width, 4)


def load_surface(source: SurfaceSource) -> PixelSurface:
    """Acquire a pixel surface from an image object, array, URI, path or encoded bytes.

    Any failure to read or decode the source is raised as ``SourceLoadFailure``
    chained to the underlying error.
    """

    if isinstance(source, PixelSurface):
        return source
    if isinstance(source, Image.Image):
        return PixelSurface.from_image(source)
    if isinstance(source, np.ndarray):
        return PixelSurface.from_array(source)
    if isinstance(source, (bytes, bytearray, memoryview)):
        return _decode(io.BytesIO(bytes(source)), "<bytes>")
    if isinstance(source, str) and source.startswith("data:"):
        try:
            _, payload = parse_data_url(source)
        except ValueError as exc:
            logger.warning("Rejected malformed data URI: %s", exc)
            raise SourceLoadFailure("data URI", exc) from exc
        return _decode(io.BytesIO(payload), "data URI")
    if isinstance(source, str) and "://" in source:
        return _decode(_uri_to_path(source), source)
    if isinstance(source, (str, os.PathLike)):
        path = Path(source)
        return _decode(path, str(path))
    raise TypeError(f"Unsupported image source type: {type(source).__name__}")


def _uri_to_path(uri: str) -> Path:
    parsed = urlparse(uri)
    if parsed.scheme != "file":
        exc = ValueError(f"Unsupported URI scheme {parsed.scheme!r}; only file and data URIs are read")
        logger.warning("Rejected image source %s: %s", uri, exc)
        raise SourceLoadFailure(uri, exc) from exc
    return Path(url2pathname(parsed.path))


def _decode(fp: Union[Path, BinaryIO], description: str) -> PixelSurface:
    logger.debug("Decoding image from %s", description)
    try:
        with Image.open(fp) as image:
            return PixelSurface.from_image(image)
    except (OSError, Image.DecompressionBombError) as exc:
        logger.warning("Failed to load image from %s: %s", description, exc)
        raise SourceLoadFailure(description, exc) from exc
