"""Exceptions raised by the canvas_bmp package."""

from __future__ import annotations

from typing import Optional


class CanvasBMPError(Exception):
    """Base class for all canvas_bmp errors."""


class InvalidDimensions(CanvasBMPError, ValueError):
    """Width or height is not a usable positive integer."""

    def __init__(self, width: object, height: object, message: str = "") -> None:
        self.width = width
        self.height = height
        super().__init__(message or f"Invalid bitmap dimensions: {width!r}x{height!r}")


class BufferSizeMismatch(CanvasBMPError, ValueError):
    """Pixel buffer length does not match width * height * 4."""

    def __init__(self, expected: int, actual: int) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(f"Expected {expected} bytes of RGBA data, got {actual}")


class SourceLoadFailure(CanvasBMPError):
    """The image source could not be read or decoded."""

    def __init__(self, source: str, cause: Optional[BaseException] = None) -> None:
        self.source = source
        self.cause = cause
        detail = f": {cause}" if cause is not None else ""
        super().__init__(f"Failed to load image from {source}{detail}")
