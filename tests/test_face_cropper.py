"""
Face Crop - pipeline tests with a stub detector
"""

import os
import tempfile
import unittest
from unittest import mock

import cv2
import numpy as np

from facecrop.config_manager import ConfigManager
from facecrop.detectors.types import FaceBox
from facecrop.errors import (
    DecodeFailure,
    DetectionFailure,
    DetectorInitFailure,
    EncodeFailure,
    InputNotFound,
    MultipleFacesDetected,
    NoFaceDetected,
)
from facecrop.face_cropper import FaceCropper, crop_face
from facecrop.face_detector import FaceDetector
from facecrop.geometry import CropRect

from .helpers import RecordingFactory, StubDetector, write_image


class FaceCropperTest(unittest.TestCase):
    """Tests for FaceCropper.process."""

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmp.cleanup)
        self.input_path = os.path.join(self.tmp.name, "portrait.png")
        write_image(self.input_path, 1000, 800)

    def test_landscape_scenario(self):
        cropper = FaceCropper(StubDetector([FaceBox(450, 380, 100, 100)]))
        result = cropper.process(self.input_path)

        self.assertEqual(result.crop, CropRect(100, 0, 800))
        self.assertEqual(result.image_size, (1000, 800))
        self.assertEqual(result.output_path, os.path.join(self.tmp.name, "portrait_cropped.png"))
        self.assertEqual(cv2.imread(result.output_path).shape, (800, 800, 3))

    def test_explicit_output_path(self):
        output_path = os.path.join(self.tmp.name, "out", "face.jpg")
        cropper = FaceCropper(StubDetector([FaceBox(10, 10, 50, 50)]))
        result = cropper.process(self.input_path, output_path)

        self.assertEqual(result.output_path, output_path)
        self.assertTrue(os.path.isfile(output_path))

    def test_custom_suffix(self):
        cropper = FaceCropper(StubDetector([FaceBox(10, 10, 50, 50)]), output_suffix="_square")
        result = cropper.process(self.input_path)
        self.assertTrue(result.output_path.endswith("portrait_square.png"))

    def test_no_face_writes_nothing(self):
        cropper = FaceCropper(StubDetector([]))
        with self.assertRaises(NoFaceDetected):
            cropper.process(self.input_path)
        self.assertEqual(os.listdir(self.tmp.name), ["portrait.png"])

    def test_multiple_faces_writes_nothing(self):
        cropper = FaceCropper(StubDetector([FaceBox(0, 0, 40, 40), FaceBox(500, 500, 40, 40)]))
        with self.assertRaises(MultipleFacesDetected):
            cropper.process(self.input_path)
        self.assertEqual(os.listdir(self.tmp.name), ["portrait.png"])

    def test_bad_output_extension_skips_detection(self):
        detector = StubDetector([FaceBox(0, 0, 40, 40)])
        with self.assertRaises(EncodeFailure):
            FaceCropper(detector).process(self.input_path, os.path.join(self.tmp.name, "out.gif"))
        self.assertEqual(detector.calls, 0)

    def test_opencv_error_during_detection(self):
        detector = mock.Mock()
        detector.detect.side_effect = cv2.error("boom")
        with self.assertRaises(DetectionFailure):
            FaceCropper(detector).process(self.input_path)

    def test_locate_crop_on_array(self):
        image = np.zeros((500, 500, 3), dtype=np.uint8)
        face, crop = FaceCropper(StubDetector([FaceBox(200, 200, 100, 100)])).locate_crop(image)
        self.assertEqual(face, FaceBox(200, 200, 100, 100))
        self.assertEqual(crop, CropRect(0, 0, 500))


class CropFaceTest(unittest.TestCase):
    """Tests for crop_face, including the temporary model lifecycle."""

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmp.cleanup)
        self.input_path = os.path.join(self.tmp.name, "square.jpg")
        write_image(self.input_path, 500, 500)
        self.config = ConfigManager(os.path.join(self.tmp.name, "face_crop.json"))

    def run_with(self, faces, output_path=None):
        factory = RecordingFactory(StubDetector(faces))
        with mock.patch.object(FaceDetector, "from_config", side_effect=factory):
            result = crop_face(self.input_path, output_path, self.config)
        return result, factory

    def test_square_image_whole_frame(self):
        result, factory = self.run_with([FaceBox(200, 200, 100, 100)])

        self.assertEqual(result.crop, CropRect(0, 0, 500))
        self.assertTrue(os.path.isfile(os.path.join(self.tmp.name, "square_cropped.jpg")))
        self.assertEqual(factory.model_existed, [True])
        self.assertFalse(os.path.exists(factory.model_paths[0]))

    def test_no_face_cleans_up_model_and_writes_nothing(self):
        factory = RecordingFactory(StubDetector([]))
        with mock.patch.object(FaceDetector, "from_config", side_effect=factory):
            with self.assertRaises(NoFaceDetected):
                crop_face(self.input_path, None, self.config)

        self.assertFalse(os.path.exists(factory.model_paths[0]))
        self.assertFalse(os.path.exists(os.path.join(self.tmp.name, "square_cropped.jpg")))

    def test_missing_input_never_extracts_model(self):
        with mock.patch("facecrop.face_cropper.extracted_model") as extracted:
            with self.assertRaises(InputNotFound):
                crop_face(os.path.join(self.tmp.name, "missing.jpg"), None, self.config)
        extracted.assert_not_called()

    def test_output_suffix_from_config(self):
        self.config.set("output_suffix", "_face")
        result, _ = self.run_with([FaceBox(10, 10, 30, 30)])
        self.assertTrue(result.output_path.endswith("square_face.jpg"))

    def test_yunet_without_model(self):
        self.config.set("detector.backend", "yunet")
        with self.assertRaises(DetectorInitFailure):
            crop_face(self.input_path, None, self.config)

    def test_real_cascade_on_blank_image(self):
        with self.assertRaises(NoFaceDetected):
            crop_face(self.input_path, None, self.config)
        self.assertEqual(os.listdir(self.tmp.name), ["square.jpg"])

    def test_decode_failure_cleans_up_model(self):
        with open(self.input_path, "wb") as f:
            f.write(b"corrupt jpeg payload")

        factory = RecordingFactory(StubDetector([FaceBox(10, 10, 30, 30)]))
        with mock.patch.object(FaceDetector, "from_config", side_effect=factory):
            with self.assertRaises(DecodeFailure):
                crop_face(self.input_path, None, self.config)

        self.assertEqual(factory.model_existed, [True])
        self.assertFalse(os.path.exists(factory.model_paths[0]))
        self.assertEqual(os.listdir(self.tmp.name), ["square.jpg"])

    def test_encode_failure_cleans_up_model(self):
        output_path = os.path.join(self.tmp.name, "taken.png")
        os.mkdir(output_path)

        factory = RecordingFactory(StubDetector([FaceBox(10, 10, 30, 30)]))
        with mock.patch.object(FaceDetector, "from_config", side_effect=factory):
            with self.assertRaises(EncodeFailure):
                crop_face(self.input_path, output_path, self.config)

        self.assertFalse(os.path.exists(factory.model_paths[0]))
