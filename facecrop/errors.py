"""Error taxonomy for the face crop pipeline.

Every failure is terminal for the invocation; the CLI reports the message
and exits with a non-zero status.
"""

from __future__ import annotations


class FaceCropError(Exception):
    """Base class for all face crop failures."""


class InputNotFound(FaceCropError):
    def __init__(self, path: str) -> None:
        super().__init__(f"Input image not found: {path}")
        self.path = path


class DecodeFailure(FaceCropError):
    def __init__(self, path: str, reason: str = "unsupported or corrupt image") -> None:
        super().__init__(f"Failed to open image {path}: {reason}")
        self.path = path


class NoFaceDetected(FaceCropError):
    def __init__(self) -> None:
        super().__init__("Validation failed: no faces detected.")


class MultipleFacesDetected(FaceCropError):
    def __init__(self, count: int) -> None:
        super().__init__(f"Validation failed: multiple faces detected (found {count}).")
        self.count = count


class EncodeFailure(FaceCropError):
    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"Failed to save output {path}: {reason}")
        self.path = path


class TempFileFailure(FaceCropError):
    def __init__(self, reason: str) -> None:
        super().__init__(f"Failed to prepare temporary model file: {reason}")


class DetectorInitFailure(FaceCropError):
    def __init__(self, backend: str, reason: str) -> None:
        super().__init__(f"Failed to create {backend} face detector: {reason}")
        self.backend = backend


class ConfigError(FaceCropError):
    """Raised when configuration cannot be loaded or does not validate."""


class DetectionFailure(FaceCropError):
    def __init__(self, reason: str) -> None:
        super().__init__(f"Face detection failed: {reason}")
