"""OpenCV detector backends."""

from .cascade import CascadeDetector
from .types import FaceBox, FaceDetectorBackend
from .yunet import YuNetDetector

__all__ = ["CascadeDetector", "YuNetDetector", "FaceBox", "FaceDetectorBackend"]
