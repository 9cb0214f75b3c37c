#!/usr/bin/env python3
"""CLI entry point for the face mask generator."""

from __future__ import annotations

import argparse
import os
import sys
import time
from typing import List, Optional

from facemask import __version__
from facemask.config_manager import MIN_SCALE_FACTOR, ConfigManager
from facemask.errors import FaceMaskError, UnsupportedFormatError
from facemask.image_io import output_extension
from facemask.mask_generator import FaceMaskGenerator

from .spinner import Spinner

BANNER = r"""
 ____  __    ___  ____  _  _   __   ____  __ _
(  __)/ _\  / __)(  __)( \/ ) / _\ / ___)(  / )
 ) _)/    \( (__  ) _) / \/ \/    \\___ \ )  (
(__) \_/\_/ \___)(____)\_)(_/\_/\_/(____/(__\_)

Face mask generator
    Version: {version}
"""

# flag name -> config key
CONFIG_FLAGS = {
    "min": "detection.min_size",
    "max": "detection.max_size",
    "shift": "detection.shift_factor",
    "scale": "detection.scale_factor",
    "angle": "detection.angle",
    "iou": "detection.iou_threshold",
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="facemask",
        description=BANNER.format(version=__version__),
        formatter_class=argparse.RawDescriptionHelpFormatter,
        allow_abbrev=False,
    )

    parser.add_argument("-in", "--in", dest="source", type=str, help="Source image")
    parser.add_argument("-out", "--out", dest="destination", type=str, help="Destination image (.jpg, .jpeg or .png)")
    parser.add_argument("-min", "--min", dest="min", type=int, help="Minimum size of face (default: 20)")
    parser.add_argument("-max", "--max", dest="max", type=int, help="Maximum size of face (default: 1000)")
    parser.add_argument("-shift", "--shift", dest="shift", type=float, help="Shift detection window by percentage (default: 0.1)")
    parser.add_argument("-scale", "--scale", dest="scale", type=float, help="Scale detection window by percentage (default: 1.1)")
    parser.add_argument("-angle", "--angle", dest="angle", type=float, help="0.0 is 0 radians and 1.0 is 2*pi radians (default: 0.0)")
    parser.add_argument("-iou", "--iou", dest="iou", type=float, help="Intersection over union (IoU) threshold (default: 0.2)")
    parser.add_argument("--config", type=str, help="Configuration file path (JSON)")
    parser.add_argument("--mark-faces", action="store_true", help="Draw face boxes, pupils and mouth corners for inspection")
    parser.add_argument("--print-config", action="store_true", help="Print the effective configuration before running")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    return parser


def build_config(args: argparse.Namespace, parser: argparse.ArgumentParser) -> ConfigManager:
    if args.config and not os.path.isfile(args.config):
        parser.error(f"configuration file not found: {args.config}")

    config = ConfigManager(args.config)
    if args.config and not config.loaded:
        print(f"Error: could not load configuration from {args.config}", file=sys.stderr)
        sys.exit(1)

    for flag, key in CONFIG_FLAGS.items():
        value = getattr(args, flag)
        if value is not None:
            config.set(key, value)

    if args.mark_faces:
        config.set("show_markers", True)

    return config


def main(argv: Optional[List[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.source or not args.destination:
        parser.error("both -in and -out are required, e.g. facemask -in input.jpg -out output.png")

    try:
        output_extension(args.destination)
    except UnsupportedFormatError as exc:
        parser.error(str(exc))

    config = build_config(args, parser)

    scale = config.get("detection.scale_factor")
    if scale <= MIN_SCALE_FACTOR:
        parser.error("Scale factor must be greater than 1.05")

    if not config.validate_config():
        sys.exit(2)

    if args.print_config:
        config.print_config()

    spinner = Spinner(
        config.get("spinner.message", "Processing..."),
        interval=float(config.get("spinner.interval", 0.1)),
    )
    start = time.time()

    try:
        with spinner:
            generator = FaceMaskGenerator(config)
            results = generator.run(args.source, args.destination)
    except FaceMaskError as exc:
        print(f"\nError: {exc}", file=sys.stderr)
        sys.exit(1)

    drawn = sum(1 for result in results if result.overlaid)
    print(f"\nFaces found: {len(results)}, masks drawn: {drawn}")
    print(f"Done in: \x1b[92m{time.time() - start:.2f}s\x1b[39m")


if __name__ == "__main__":
    main()
