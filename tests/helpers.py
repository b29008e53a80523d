"""Shared fixtures for the face crop tests."""

import os

import cv2
import numpy as np


class StubDetector:
    """Detector double returning a fixed list of faces."""

    def __init__(self, faces):
        self.faces = list(faces)
        self.calls = 0

    def detect(self, image):
        self.calls += 1
        return list(self.faces)


class RecordingFactory:
    """Stands in for FaceDetector.from_config and remembers the model path."""

    def __init__(self, detector):
        self.detector = detector
        self.model_paths = []
        self.model_existed = []

    def __call__(self, model_path, detector_config):
        self.model_paths.append(model_path)
        self.model_existed.append(os.path.isfile(model_path))
        return self.detector


def write_image(path, width, height, channels=3):
    image = np.full((height, width, channels), 127, dtype=np.uint8)
    if not cv2.imwrite(path, image):
        raise RuntimeError(f"could not write test image {path}")
    return image
