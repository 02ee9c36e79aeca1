"""Canvas-style facade over the BMP encoder."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import numpy as np
from PIL import Image

from .bmp import encode_surface, save_bitmap
from .export import Blob, to_blob, to_data_url
from .settings import EncoderSettings
from .surface import PixelSurface, SurfaceSource, load_surface


class CanvasToBMP:
    """Convert a pixel surface to a BMP file, blob or data URI."""

    def __init__(self, surface: PixelSurface, settings: Optional[EncoderSettings] = None) -> None:
        self.surface = surface
        self.settings = settings

    @classmethod
    def from_uri(cls, uri: SurfaceSource, settings: Optional[EncoderSettings] = None) -> "CanvasToBMP":
        return cls(load_surface(uri), settings)

    @classmethod
    def from_data_url(cls, data_url: str, settings: Optional[EncoderSettings] = None) -> "CanvasToBMP":
        return cls.from_uri(data_url, settings)

    @classmethod
    def from_image(cls, image: Image.Image, settings: Optional[EncoderSettings] = None) -> "CanvasToBMP":
        return cls(PixelSurface.from_image(image), settings)

    @classmethod
    def from_array(cls, array: np.ndarray, settings: Optional[EncoderSettings] = None) -> "CanvasToBMP":
        return cls(PixelSurface.from_array(array), settings)

    @property
    def width(self) -> int:
        return self.surface.width

    @property
    def height(self) -> int:
        return self.surface.height

    def to_bytes(self) -> bytes:
        """Return the complete BMP file image."""

        return encode_surface(self.surface, self.settings)

    def to_blob(self) -> Blob:
        return to_blob(self.to_bytes())

    def to_data_url(self) -> str:
        return to_data_url(self.to_bytes())

    def save(self, path: str | Path) -> Path:
        return save_bitmap(path, self.width, self.height, self.surface.pixels, self.settings)
