"""Haar cascade detector backend."""

from __future__ import annotations

from typing import List

import cv2
import numpy as np

from ..errors import DetectorInitFailure
from .types import FaceBox, as_8bit


class CascadeDetector:
    """Frontal-face Haar cascade run on the grayscale image."""

    def __init__(
        self,
        model_path: str,
        *,
        min_face_size: int = 20,
        scale_factor: float = 1.25,
        min_neighbors: int = 5,
    ) -> None:
        self.min_face_size = int(min_face_size)
        self.scale_factor = float(scale_factor)
        self.min_neighbors = int(min_neighbors)

        try:
            self._cascade = cv2.CascadeClassifier(model_path)
        except cv2.error as exc:
            raise DetectorInitFailure("cascade", str(exc)) from exc
        if self._cascade.empty():
            raise DetectorInitFailure("cascade", f"{model_path} is not a valid cascade model")

    def detect(self, image: np.ndarray) -> List[FaceBox]:
        gray = self._to_gray(as_8bit(image))
        detections = self._cascade.detectMultiScale(
            gray,
            scaleFactor=self.scale_factor,
            minNeighbors=self.min_neighbors,
            minSize=(self.min_face_size, self.min_face_size),
        )

        faces: List[FaceBox] = []
        for (x, y, w, h) in detections:
            faces.append(FaceBox(x=int(x), y=int(y), width=int(w), height=int(h)))
        return faces

    @staticmethod
    def _to_gray(image: np.ndarray) -> np.ndarray:
        if image.ndim == 2:
            return image
        if image.shape[2] == 4:
            return cv2.cvtColor(image, cv2.COLOR_BGRA2GRAY)
        return cv2.cvtColor(image, cv2.COLOR_BGR2GRAY)
