"""
Detector model payloads and their temporary on-disk extraction.

OpenCV detectors only load models from a file path, so every run writes the
payload to a temporary file that is removed again on every exit path.
"""

from __future__ import annotations

import os
import tempfile
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator

import cv2

from .errors import DetectorInitFailure, TempFileFailure

BUNDLED_CASCADE_NAME = "haarcascade_frontalface_default.xml"
TEMP_PREFIX = "face_crop_model_"


@dataclass(frozen=True)
class ModelPayload:
    """Raw model bytes plus the file suffix the loader expects."""

    data: bytes
    suffix: str


def bundled_cascade_payload() -> ModelPayload:
    """Frontal-face Haar cascade shipped inside the opencv-python wheel."""
    cascade_path = os.path.join(cv2.data.haarcascades, BUNDLED_CASCADE_NAME)
    try:
        with open(cascade_path, "rb") as f:
            data = f.read()
    except OSError as exc:
        raise DetectorInitFailure("cascade", f"bundled model unavailable ({exc})") from exc
    return ModelPayload(data=data, suffix=".xml")


def payload_from_file(path: str, backend: str = "cascade") -> ModelPayload:
    """Read a user-supplied model file into a payload."""
    try:
        with open(path, "rb") as f:
            data = f.read()
    except OSError as exc:
        raise DetectorInitFailure(backend, f"cannot read model file {path} ({exc})") from exc
    if not data:
        raise DetectorInitFailure(backend, f"model file {path} is empty")
    suffix = os.path.splitext(path)[1] or ".bin"
    return ModelPayload(data=data, suffix=suffix)


@contextmanager
def extracted_model(payload: ModelPayload) -> Iterator[str]:
    """Write ``payload`` to a temp file and yield its path; always deleted on exit."""
    try:
        handle = tempfile.NamedTemporaryFile(prefix=TEMP_PREFIX, suffix=payload.suffix, delete=False)
    except OSError as exc:
        raise TempFileFailure(str(exc)) from exc

    model_path = handle.name
    try:
        try:
            with handle:
                handle.write(payload.data)
        except OSError as exc:
            raise TempFileFailure(f"could not write model bytes ({exc})") from exc
        yield model_path
    finally:
        try:
            os.unlink(model_path)
        except FileNotFoundError:
            pass
