"""Blob and data URI wrappers around encoded bitmap bytes."""

from __future__ import annotations

import base64
import binascii
from dataclasses import dataclass
from typing import Tuple
from urllib.parse import unquote_to_bytes

MEDIA_TYPE = "image/bmp"


@dataclass(frozen=True)
class Blob:
    """Immutable bytes tagged with a media type."""

    data: bytes
    type: str = MEDIA_TYPE

    @property
    def size(self) -> int:
        return len(self.data)

    def read(self) -> bytes:
        return self.data


def to_blob(data: bytes, media_type: str = MEDIA_TYPE) -> Blob:
    return Blob(data=bytes(data), type=media_type)


def to_data_url(data: bytes, media_type: str = MEDIA_TYPE) -> str:
    encoded = base64.b64encode(bytes(data)).decode("ascii")
    return f"data:{media_type};base64,{encoded}"


def parse_data_url(url: str) -> Tuple[str, bytes]:
    """Split a ``data:`` URI into its media type and decoded payload.

    The media type defaults to ``text/plain`` when the URI omits it, as in
    RFC 2397. Raises ``ValueError`` for anything that is not a data URI.
    """

    if not url.startswith("data:"):
        raise ValueError("Not a data URI")
    header, sep, payload = url[len("data:"):].partition(",")
    if not sep:
        raise ValueError("Data URI is missing the ',' separator")

    params = header.split(";")
    is_base64 = params[-1].lower() == "base64"
    if is_base64:
        params = params[:-1]
    media_type = params[0] if params and params[0] else "text/plain"

    if is_base64:
        try:
            return media_type, base64.b64decode(payload, validate=True)
        except binascii.Error as exc:
            raise ValueError(f"Invalid base64 payload in data URI: {exc}") from exc
    return media_type, unquote_to_bytes(payload)
