"""Application entry points for the Face Crop project."""

from .cli import build_parser, main

__all__ = ["build_parser", "main"]
