#!/usr/bin/env python3
"""CLI entry point for the Face Crop application."""

from __future__ import annotations

import argparse
import os
import sys
from typing import List, Optional

from facecrop import __version__
from facecrop.config_manager import ConfigManager
from facecrop.errors import ConfigError, FaceCropError
from facecrop.face_cropper import crop_face
from facecrop.face_detector import BACKENDS


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="face-crop",
        description="Crop a square, face-centered region out of an image containing exactly one face.",
        formatter_class=argparse.RawTextHelpFormatter,
    )
    parser.add_argument("-i", "--input", required=True, help="Path to the source image")
    parser.add_argument(
        "-o",
        "--output",
        help="Destination image path\n(default: <input stem>_cropped.<ext> next to the input)",
    )
    parser.add_argument("--config", type=str, help="Configuration file path (JSON)")
    parser.add_argument("--backend", choices=BACKENDS, help="Face detector backend (default: cascade)")
    parser.add_argument("--model", type=str, help="Detector model file (required for the yunet backend)")
    parser.add_argument("--min-face-size", type=int, help="Minimum face size in pixels")
    parser.add_argument("--quality", type=int, help="JPEG/WebP output quality (0-100)")
    parser.add_argument("--verbose", action="store_true", help="Print the effective configuration")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def build_config(args: argparse.Namespace) -> ConfigManager:
    """Merge the config file (if any) with command-line overrides and validate."""
    if args.config and not os.path.isfile(args.config):
        raise ConfigError(f"Configuration file not found: {args.config}")

    config = ConfigManager(args.config)

    if args.backend:
        config.set("detector.backend", args.backend)
    if args.model:
        config.set("detector.model_path", args.model)
    if args.min_face_size is not None:
        config.set("detector.min_face_size", args.min_face_size)
    if args.quality is not None:
        config.set("jpeg_quality", args.quality)

    if not config.validate_config():
        details = "\n".join(f"  - {error}" for error in config.errors)
        raise ConfigError(f"Configuration validation errors:\n{details}")

    return config


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        config = build_config(args)
        if args.verbose:
            config.print_config()

        print(f"🔍 Processing: {args.input}")
        result = crop_face(args.input, args.output, config)
    except FaceCropError as exc:
        print(f"❌ {exc}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("Interrupted by user", file=sys.stderr)
        return 130

    crop = result.crop
    width, height = result.image_size
    print(
        f"✅ Saved {crop.side}x{crop.side} crop at ({crop.x}, {crop.y}) "
        f"from {width}x{height} image to {result.output_path}"
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
