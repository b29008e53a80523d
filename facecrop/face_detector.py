#!/usr/bin/env python3
"""
Face Detection Module
Selects an OpenCV detector backend and exposes a single detect_faces call

Created: 2025
"""

from __future__ import annotations

from typing import List, Optional

import numpy as np

from .detectors import CascadeDetector, FaceBox, YuNetDetector
from .errors import DetectorInitFailure
from .model_payload import ModelPayload, bundled_cascade_payload, payload_from_file

BACKENDS = ("cascade", "yunet")


def load_payload(backend: str, model_path: Optional[str] = None) -> ModelPayload:
    """
    Resolve the model payload for a backend
    Args:
        backend: Detector backend name
        model_path: Optional user-supplied model file
    Returns:
        Model bytes ready to be extracted for the detector
    """
    if backend not in BACKENDS:
        raise DetectorInitFailure(backend, f"unknown backend (choose from {', '.join(BACKENDS)})")
    if model_path:
        return payload_from_file(model_path, backend)
    if backend == "yunet":
        raise DetectorInitFailure(backend, "a YuNet ONNX model path is required (--model)")
    return bundled_cascade_payload()


class FaceDetector:
    """Face detection using OpenCV"""

    def __init__(
        self,
        model_path: str,
        backend: str = "cascade",
        *,
        min_face_size: int = 20,
        scale_factor: float = 1.25,
        min_neighbors: int = 5,
        score_threshold: float = 0.9,
        nms_threshold: float = 0.3,
    ):
        """
        Initialize face detector
        Args:
            model_path: Path to the extracted model file
            backend: 'cascade' (Haar) or 'yunet' (ONNX)
        """
        self.backend = backend
        if backend == "cascade":
            self._impl = CascadeDetector(
                model_path,
                min_face_size=min_face_size,
                scale_factor=scale_factor,
                min_neighbors=min_neighbors,
            )
        elif backend == "yunet":
            self._impl = YuNetDetector(
                model_path,
                min_face_size=min_face_size,
                score_threshold=score_threshold,
                nms_threshold=nms_threshold,
            )
        else:
            raise DetectorInitFailure(backend, f"unknown backend (choose from {', '.join(BACKENDS)})")

    @classmethod
    def from_config(cls, model_path: str, detector_config: dict) -> "FaceDetector":
        """Build a detector from the ``detector`` section of the configuration."""
        return cls(
            model_path,
            backend=detector_config.get("backend", "cascade"),
            min_face_size=detector_config.get("min_face_size", 20),
            scale_factor=detector_config.get("scale_factor", 1.25),
            min_neighbors=detector_config.get("min_neighbors", 5),
            score_threshold=detector_config.get("score_threshold", 0.9),
            nms_threshold=detector_config.get("nms_threshold", 0.3),
        )

    def detect_faces(self, image: np.ndarray) -> List[FaceBox]:
        """
        Detect faces in the input image
        Args:
            image: Decoded BGR image
        Returns:
            List of detected face boxes in image coordinates
        """
        return self._impl.detect(image)

    # The pipeline treats any object with ``detect`` as a detector
    detect = detect_faces
