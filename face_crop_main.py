#!/usr/bin/env python3
"""Compatibility shim for the face crop CLI entry point."""

import sys

from app.cli import main

__all__ = ["main"]


if __name__ == "__main__":
    sys.exit(main())
