#!/usr/bin/env python3
"""
Face Crop
Init file for the facecrop package

Created: 2025
"""

from .config_manager import ConfigManager
from .detectors import FaceBox
from .errors import (
    ConfigError,
    DecodeFailure,
    DetectionFailure,
    DetectorInitFailure,
    EncodeFailure,
    FaceCropError,
    InputNotFound,
    MultipleFacesDetected,
    NoFaceDetected,
    TempFileFailure,
)
from .face_cropper import CropResult, FaceCropper, crop_face
from .face_detector import FaceDetector
from .geometry import CropRect, compute_crop, validate_faces

__version__ = "1.0.0"
__author__ = "Face Crop Team"

__all__ = [
    'ConfigManager',
    'CropRect',
    'CropResult',
    'FaceBox',
    'FaceCropper',
    'FaceDetector',
    'compute_crop',
    'crop_face',
    'validate_faces',
    'FaceCropError',
    'InputNotFound',
    'DecodeFailure',
    'NoFaceDetected',
    'MultipleFacesDetected',
    'EncodeFailure',
    'TempFileFailure',
    'DetectorInitFailure',
    'DetectionFailure',
    'ConfigError',
]
