#!/usr/bin/env python3
"""Image decode/encode helpers and output path policy."""

from __future__ import annotations

import os
import tempfile
from typing import List, Tuple

import cv2
import numpy as np

from .detectors.types import as_8bit
from .errors import DecodeFailure, EncodeFailure, InputNotFound
from .geometry import CropRect

SUPPORTED_FORMATS: Tuple[str, ...] = ('.jpg', '.jpeg', '.png', '.bmp', '.tif', '.tiff', '.webp')
EIGHT_BIT_FORMATS: Tuple[str, ...] = ('.jpg', '.jpeg', '.bmp', '.webp')
DEFAULT_OUTPUT_SUFFIX = "_cropped"
DEFAULT_JPEG_QUALITY = 95
DEFAULT_PNG_COMPRESSION = 3


def default_output_path(input_path: str, suffix: str = DEFAULT_OUTPUT_SUFFIX) -> str:
    """``dir/photo.jpg`` -> ``dir/photo_cropped.jpg``."""
    directory, filename = os.path.split(input_path)
    stem, ext = os.path.splitext(filename)
    if not stem:
        raise InputNotFound(input_path)
    return os.path.join(directory, f"{stem}{suffix}{ext}")


def is_supported_format(path: str) -> bool:
    return os.path.splitext(path)[1].lower() in SUPPORTED_FORMATS


def check_output_format(path: str) -> None:
    """Fail before any detection work if the output cannot be encoded."""
    if not is_supported_format(path):
        ext = os.path.splitext(path)[1] or "(none)"
        raise EncodeFailure(
            path,
            f"unsupported output extension {ext}; use one of {', '.join(SUPPORTED_FORMATS)}",
        )


class OpenCVImageCodec:
    """Decode images from disk and write cropped regions back with OpenCV."""

    def __init__(
        self,
        jpeg_quality: int = DEFAULT_JPEG_QUALITY,
        png_compression: int = DEFAULT_PNG_COMPRESSION,
    ) -> None:
        self.jpeg_quality = int(jpeg_quality)
        self.png_compression = int(png_compression)

    def decode(self, path: str) -> np.ndarray:
        """Read ``path`` keeping its channels and bit depth."""
        if not os.path.isfile(path):
            raise InputNotFound(path)
        try:
            with open(path, 'rb') as f:
                data = f.read()
        except OSError as exc:
            raise DecodeFailure(path, str(exc)) from exc

        image = cv2.imdecode(np.frombuffer(data, dtype=np.uint8), cv2.IMREAD_UNCHANGED)
        if image is None or image.size == 0:
            raise DecodeFailure(path)
        return image

    def encode(self, image: np.ndarray, region: CropRect, path: str) -> None:
        """Encode ``region`` of ``image`` in memory, then move it into place at ``path``."""
        check_output_format(path)
        if os.path.isdir(path):
            raise EncodeFailure(path, "output path is a directory")

        rows, cols = region.slices()
        cropped = image[rows, cols]

        ext = os.path.splitext(path)[1].lower()
        if ext in EIGHT_BIT_FORMATS:
            cropped = as_8bit(cropped)
        try:
            ok, buffer = cv2.imencode(ext, cropped, self._encode_params(ext))
        except cv2.error as exc:
            raise EncodeFailure(path, str(exc)) from exc
        if not ok:
            raise EncodeFailure(path, "encoder rejected the image")

        parent = os.path.dirname(path)
        temp_path = None
        try:
            if parent:
                os.makedirs(parent, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                dir=parent or ".", prefix=".face_crop_", suffix=ext, delete=False
            ) as f:
                temp_path = f.name
                f.write(buffer.tobytes())
            os.replace(temp_path, path)
        except OSError as exc:
            # an existing file at ``path`` is left untouched
            if temp_path and os.path.exists(temp_path):
                os.unlink(temp_path)
            raise EncodeFailure(path, str(exc)) from exc

    def _encode_params(self, ext: str) -> List[int]:
        if ext in ('.jpg', '.jpeg'):
            return [cv2.IMWRITE_JPEG_QUALITY, self.jpeg_quality]
        if ext == '.webp':
            return [cv2.IMWRITE_WEBP_QUALITY, max(1, self.jpeg_quality)]
        if ext == '.png':
            return [cv2.IMWRITE_PNG_COMPRESSION, self.png_compression]
        return []
