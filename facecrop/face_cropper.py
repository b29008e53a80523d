#!/usr/bin/env python3
"""Single-image pipeline: decode, detect, validate, crop and write."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional, Protocol, Tuple

import cv2
import numpy as np

from .config_manager import ConfigManager
from .detectors.types import FaceBox, FaceDetectorBackend
from .errors import DecodeFailure, DetectionFailure, InputNotFound
from .face_detector import FaceDetector, load_payload
from .geometry import CropRect, compute_crop, validate_faces
from .image_io import (
    DEFAULT_OUTPUT_SUFFIX,
    OpenCVImageCodec,
    check_output_format,
    default_output_path,
)
from .model_payload import extracted_model


class ImageCodec(Protocol):
    def decode(self, path: str) -> np.ndarray:
        ...

    def encode(self, image: np.ndarray, region: CropRect, path: str) -> None:
        ...


@dataclass(frozen=True)
class CropResult:
    """Outcome of one successful crop."""

    input_path: str
    output_path: str
    image_size: Tuple[int, int]  # (width, height)
    face: FaceBox
    crop: CropRect


class FaceCropper:
    """Crop a square around the only face in an image."""

    def __init__(
        self,
        detector: FaceDetectorBackend,
        codec: Optional[ImageCodec] = None,
        output_suffix: str = DEFAULT_OUTPUT_SUFFIX,
    ) -> None:
        self.detector = detector
        self.codec = codec or OpenCVImageCodec()
        self.output_suffix = output_suffix

    def locate_crop(self, image: np.ndarray) -> Tuple[FaceBox, CropRect]:
        """Detect faces, enforce the single-face policy and compute the crop."""
        height, width = image.shape[:2]
        if width <= 0 or height <= 0:
            raise ValueError(f"Invalid image size: {width}x{height}")

        try:
            faces = self.detector.detect(image)
        except cv2.error as exc:
            raise DetectionFailure(str(exc)) from exc

        face = validate_faces(faces)
        return face, compute_crop(width, height, face)

    def process(self, input_path: str, output_path: Optional[str] = None) -> CropResult:
        """
        Crop one image file
        Args:
            input_path: Source image
            output_path: Destination; derived from ``input_path`` when omitted
        Returns:
            CropResult describing the written file
        """
        if not output_path:
            output_path = default_output_path(input_path, self.output_suffix)
        check_output_format(output_path)

        image = self.codec.decode(input_path)
        if image.ndim < 2 or 0 in image.shape[:2]:
            raise DecodeFailure(input_path, "image has no pixels")

        face, crop = self.locate_crop(image)
        self.codec.encode(image, crop, output_path)

        height, width = image.shape[:2]
        return CropResult(
            input_path=input_path,
            output_path=output_path,
            image_size=(width, height),
            face=face,
            crop=crop,
        )


def crop_face(
    input_path: str,
    output_path: Optional[str] = None,
    config: Optional[ConfigManager] = None,
) -> CropResult:
    """
    Run the full pipeline for one image with a detector built from ``config``.

    The detector model is extracted to a temporary file that only lives for
    the duration of this call.
    """
    config = config or ConfigManager()

    if not os.path.isfile(input_path):
        raise InputNotFound(input_path)

    suffix = config.get("output_suffix", DEFAULT_OUTPUT_SUFFIX)
    if not output_path:
        output_path = default_output_path(input_path, suffix)
    check_output_format(output_path)

    detector_config = config.section("detector")
    payload = load_payload(detector_config.get("backend", "cascade"), detector_config.get("model_path"))

    codec = OpenCVImageCodec(
        jpeg_quality=config.get("jpeg_quality", 95),
        png_compression=config.get("png_compression", 3),
    )

    with extracted_model(payload) as model_path:
        detector = FaceDetector.from_config(model_path, detector_config)
        cropper = FaceCropper(detector, codec, output_suffix=suffix)
        return cropper.process(input_path, output_path)
