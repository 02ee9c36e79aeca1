"""Command line interface for canvas-bmp."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from .canvas import CanvasToBMP
from .errors import CanvasBMPError
from .settings import EncoderSettings, load_settings

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Convert an image to a 24-bit BMP")
    parser.add_argument(
        "source",
        help="Image path, file:// URI or data: URI of any format Pillow can read",
    )
    destination = parser.add_mutually_exclusive_group()
    destination.add_argument(
        "-o",
        "--output",
        type=Path,
        default=None,
        help="Destination BMP file (default: source path with a .bmp suffix)",
    )
    destination.add_argument(
        "--data-url",
        action="store_true",
        help="Print a data:image/bmp;base64 URI to stdout instead of writing a file",
    )
    parser.add_argument(
        "--dpi",
        type=float,
        default=None,
        help="Resolution written to the header, overriding --settings",
    )
    parser.add_argument(
        "--settings",
        type=Path,
        default=None,
        help="Optional JSON file with pixels_per_meter or dpi",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def resolve_settings(args: argparse.Namespace) -> EncoderSettings:
    if args.dpi is not None:
        return EncoderSettings.from_dpi(args.dpi)
    return load_settings(args.settings)


def default_output(source: str) -> Path:
    return Path(source).with_suffix(".bmp")


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    is_uri = args.source.startswith("data:") or "://" in args.source
    if is_uri and not args.data_url and args.output is None:
        parser.error("--output is required when the source is a URI")

    try:
        settings = resolve_settings(args)
    except (OSError, ValueError) as exc:
        logger.error("Invalid settings: %s", exc)
        return 1

    try:
        canvas = CanvasToBMP.from_uri(args.source, settings)
        if args.data_url:
            sys.stdout.write(canvas.to_data_url() + "\n")
            return 0
        output = args.output or default_output(args.source)
        canvas.save(output)
    except (CanvasBMPError, OSError) as exc:
        logger.error("%s", exc)
        return 1

    logger.info("Wrote %dx%d bitmap to %s", canvas.width, canvas.height, output)
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
