"""Encode RGBA pixel surfaces as 24-bit Windows bitmaps."""

from .bmp import encode, encode_surface, row_stride, save_bitmap
from .canvas import CanvasToBMP
from .cursor import ByteCursor
from .errors import BufferSizeMismatch, CanvasBMPError, InvalidDimensions, SourceLoadFailure
from .export import MEDIA_TYPE, Blob, parse_data_url, to_blob, to_data_url
from .settings import EncoderSettings, load_settings
from .surface import PixelSurface, load_surface

__all__ = [
    "encode",
    "encode_surface",
    "row_stride",
    "save_bitmap",
    "CanvasToBMP",
    "ByteCursor",
    "BufferSizeMismatch",
    "CanvasBMPError",
    "InvalidDimensions",
    "SourceLoadFailure",
    "MEDIA_TYPE",
    "Blob",
    "parse_data_url",
    "to_blob",
    "to_data_url",
    "EncoderSettings",
    "load_settings",
    "PixelSurface",
    "load_surface",
]
