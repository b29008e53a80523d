"""Square crop geometry and the single-face validation policy."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence, Tuple

from .detectors.types import FaceBox
from .errors import MultipleFacesDetected, NoFaceDetected


@dataclass(frozen=True)
class CropRect:
    """Square crop region; always lies inside the image it was computed for."""

    x: int
    y: int
    side: int

    @property
    def right(self) -> int:
        return self.x + self.side

    @property
    def bottom(self) -> int:
        return self.y + self.side

    def slices(self) -> Tuple[slice, slice]:
        """Row/column slices for indexing a numpy image."""
        return slice(self.y, self.bottom), slice(self.x, self.right)


def compute_crop(image_width: int, image_height: int, face_box: FaceBox) -> CropRect:
    """
    Compute the square crop centered on a face.
    Args:
        image_width: Image width in pixels (> 0)
        image_height: Image height in pixels (> 0)
        face_box: Detected face, not required to lie inside the image
    Returns:
        Crop whose side is the shorter image dimension, centered on the face
        as far as the image bounds allow

    The face center uses the integer floor midpoint (``x + width // 2``), so
    odd-sized boxes shift the crop by at most one pixel toward the origin.
    """
    if image_width <= 0 or image_height <= 0:
        raise ValueError(f"Invalid image size: {image_width}x{image_height}")

    side = min(image_width, image_height)

    center_x = face_box.x + face_box.width // 2
    center_y = face_box.y + face_box.height // 2

    origin_x = center_x - side // 2
    origin_y = center_y - side // 2

    origin_x = max(0, min(origin_x, image_width - side))
    origin_y = max(0, min(origin_y, image_height - side))

    return CropRect(x=origin_x, y=origin_y, side=side)


def validate_faces(detected_faces: Sequence[FaceBox]) -> FaceBox:
    """Return the only detected face; zero or several faces is an error."""
    if not detected_faces:
        raise NoFaceDetected()
    if len(detected_faces) > 1:
        raise MultipleFacesDetected(len(detected_faces))
    return detected_faces[0]
