"""YuNet (cv2.FaceDetectorYN) ONNX detector backend."""

from __future__ import annotations

from typing import List

import cv2
import numpy as np

from ..errors import DetectorInitFailure
from .types import FaceBox, as_8bit


class YuNetDetector:
    """CNN detector; needs an ONNX model such as face_detection_yunet_2023mar.onnx."""

    def __init__(
        self,
        model_path: str,
        *,
        min_face_size: int = 20,
        score_threshold: float = 0.9,
        nms_threshold: float = 0.3,
    ) -> None:
        self.min_face_size = int(min_face_size)
        try:
            self._net = cv2.FaceDetectorYN.create(model_path, "", (0, 0))
            self._net.setScoreThreshold(float(score_threshold))
            self._net.setNMSThreshold(float(nms_threshold))
        except cv2.error as exc:
            raise DetectorInitFailure("yunet", str(exc)) from exc

    def detect(self, image: np.ndarray) -> List[FaceBox]:
        image = as_8bit(image)
        if image.ndim == 2:
            image = cv2.cvtColor(image, cv2.COLOR_GRAY2BGR)
        elif image.shape[2] == 4:
            image = cv2.cvtColor(image, cv2.COLOR_BGRA2BGR)

        img_h, img_w = image.shape[:2]
        self._net.setInputSize((img_w, img_h))
        _, detections = self._net.detect(image)
        if detections is None:
            return []

        faces: List[FaceBox] = []
        for row in detections:
            x, y, w, h = (int(v) for v in row[:4])
            if w < self.min_face_size or h < self.min_face_size:
                continue
            # YuNet may report boxes that start slightly outside the frame
            x = max(0, x)
            y = max(0, y)
            faces.append(FaceBox(x=x, y=y, width=w, height=h, score=float(row[14])))
        return faces
