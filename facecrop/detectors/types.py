"""Shared detector data structures."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Protocol, Tuple

import numpy as np


@dataclass(frozen=True)
class FaceBox:
    """Axis-aligned face rectangle as reported by a detector."""

    x: int
    y: int
    width: int
    height: int
    score: float = 1.0


class FaceDetectorBackend(Protocol):
    """Anything that maps a BGR image to face boxes."""

    def detect(self, image: np.ndarray) -> List[FaceBox]:
        ...


def as_8bit(image: np.ndarray) -> np.ndarray:
    """Scale 16-bit and float images down to 8 bits per channel."""
    if image.dtype == np.uint8:
        return image
    if image.dtype == np.uint16:
        return (image // 257).astype(np.uint8)
    return np.clip(image * 255.0, 0, 255).astype(np.uint8)
