"""Encoder configuration."""

from __future__ import annotations

import json
import math
import numbers
from dataclasses import dataclass
from pathlib import Path

INCHES_PER_METER = 39.3701
DEFAULT_PIXELS_PER_METER = 2835  # 72 DPI
_U32_MAX = 0xFFFFFFFF


@dataclass(frozen=True)
class EncoderSettings:
    """Header values that are not derived from the pixel data.

    ``pixels_per_meter`` is written to both the horizontal and vertical
    resolution fields of the DIB header.
    """

    pixels_per_meter: int = DEFAULT_PIXELS_PER_METER

    def __post_init__(self) -> None:
        if not isinstance(self.pixels_per_meter, int) or isinstance(self.pixels_per_meter, bool):
            raise ValueError("pixels_per_meter must be an integer")
        if not 0 <= self.pixels_per_meter <= _U32_MAX:
            raise ValueError(
                f"pixels_per_meter must be within [0, {_U32_MAX}], got {self.pixels_per_meter}"
            )

    @classmethod
    def from_dpi(cls, dpi: float) -> "EncoderSettings":
        if isinstance(dpi, bool) or not isinstance(dpi, numbers.Real):
            raise ValueError(f"dpi must be a number, got {dpi!r}")
        pixels_per_meter = float(dpi) * INCHES_PER_METER
        if not math.isfinite(pixels_per_meter):
            raise ValueError(f"dpi must be finite, got {dpi!r}")
        return cls(pixels_per_meter=int(round(pixels_per_meter)))

    @property
    def dpi(self) -> float:
        return self.pixels_per_meter / INCHES_PER_METER


DEFAULT_SETTINGS = EncoderSettings()


def load_settings(path: Path | str | None) -> EncoderSettings:
    """Read settings from a JSON object with either ``pixels_per_meter`` or ``dpi``."""

    if path is None:
        return DEFAULT_SETTINGS
    with Path(path).open("r", encoding="utf-8") as fp:
        data = json.load(fp)
    if not isinstance(data, dict):
        raise ValueError("Settings file must contain a JSON object")

    unknown = set(data) - {"pixels_per_meter", "dpi"}
    if unknown:
        raise ValueError(f"Unknown settings: {', '.join(sorted(unknown))}")
    if "pixels_per_meter" in data and "dpi" in data:
        raise ValueError("Specify either pixels_per_meter or dpi, not both")
    if "dpi" in data:
        return EncoderSettings.from_dpi(data["dpi"])
    return EncoderSettings(**data)
