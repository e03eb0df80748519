"""Unit tests for contour-based shape detection."""
import math
from unittest.mock import patch

import cv2
import numpy as np
import pytest

from part_inspector.config.settings import InspectionSettings
from part_inspector.vision.shape_detector import (
    ShapeDetector, ShapeKind, PartQuality, ShapeRecord, classify_shape, compute_circularity
)


class TestClassifyShape:
    """Test suite for the metrics-to-label rule."""

    @pytest.mark.parametrize("vertices,expected", [
        (3, ShapeKind.TRIANGLE),
        (4, ShapeKind.SQUARE),
        (6, ShapeKind.HEXAGON),
    ])
    def test_accepted_polygons_are_good(self, vertices, expected):
        shape, quality = classify_shape(0.5, vertices)

        assert shape is expected
        assert quality is PartQuality.GOOD

    @pytest.mark.parametrize("vertices", [0, 1, 2, 5, 7, 8, 12])
    def test_other_vertex_counts_are_bad(self, vertices):
        shape, quality = classify_shape(0.5, vertices)

        assert shape is ShapeKind.NONE
        assert quality is PartQuality.BAD

    @pytest.mark.parametrize("vertices", [3, 4, 5, 6, 9])
    def test_high_circularity_is_circle_regardless_of_vertices(self, vertices):
        shape, quality = classify_shape(0.95, vertices)

        assert shape is ShapeKind.CIRCLE
        assert quality is PartQuality.GOOD

    def test_circularity_threshold_is_exclusive(self):
        shape, _ = classify_shape(0.9, 8)

        assert shape is ShapeKind.NONE

    def test_labels_match_report_text(self):
        assert ShapeKind.NONE.value == "No shape detected"
        assert PartQuality.GOOD.value == "Good part"
        assert PartQuality.BAD.value == "Bad part"


class TestComputeCircularity:

    def test_perfect_circle_is_one(self):
        r = 10.0
        assert compute_circularity(math.pi * r * r, 2 * math.pi * r) == pytest.approx(1.0)

    def test_square(self):
        assert compute_circularity(100.0, 40.0) == pytest.approx(math.pi / 4)

    def test_zero_perimeter_is_none(self):
        assert compute_circularity(0.0, 0.0) is None


class TestShapeDetector:
    """Test suite for ShapeDetector on synthetic images."""

    def test_single_triangle(self, triangle_image):
        records = list(ShapeDetector().detect(triangle_image))

        assert len(records) == 1
        assert records[0].shape is ShapeKind.TRIANGLE
        assert records[0].quality is PartQuality.GOOD
        assert records[0].vertices == 3

    def test_single_circle_uses_circularity(self, circle_image):
        records = list(ShapeDetector().detect(circle_image))

        assert len(records) == 1
        assert records[0].shape is ShapeKind.CIRCLE
        assert records[0].quality is PartQuality.GOOD
        assert records[0].circularity > 0.9

    def test_single_square(self, square_image):
        records = list(ShapeDetector().detect(square_image))

        assert len(records) == 1
        assert records[0].shape is ShapeKind.SQUARE

    def test_empty_region_yields_nothing(self):
        region = np.zeros((200, 200, 3), dtype=np.uint8)

        assert list(ShapeDetector().detect(region)) == []

    def test_grayscale_region_is_accepted(self, triangle_image):
        gray = cv2.cvtColor(triangle_image, cv2.COLOR_BGR2GRAY)

        records = list(ShapeDetector().detect(gray))

        assert [r.shape for r in records] == [ShapeKind.TRIANGLE]

    def test_detect_is_a_generator(self, triangle_image):
        """Results are produced lazily and cannot be restarted."""
        records = ShapeDetector().detect(triangle_image)

        assert next(records).shape is ShapeKind.TRIANGLE
        assert list(records) == []

    def test_annotation_draws_on_copy_only(self, triangle_image):
        original = triangle_image.copy()
        annotated = triangle_image.copy()

        list(ShapeDetector().detect(triangle_image, annotate_on=annotated))

        np.testing.assert_array_equal(triangle_image, original)
        assert not np.array_equal(annotated, original)

    def test_single_point_contour_is_skipped(self):
        """Zero-perimeter boundaries never reach the circularity division."""
        detector = ShapeDetector()

        assert detector.classify_contour(np.array([[[5, 5]]], dtype=np.int32)) is None

    def test_degenerate_contours_are_excluded_from_output(self):
        detector = ShapeDetector()
        point = np.array([[[5, 5]]], dtype=np.int32)
        triangle = np.array([[[10, 10]], [[60, 10]], [[35, 50]]], dtype=np.int32)

        with patch.object(detector, 'find_contours', return_value=[point, triangle]):
            records = list(detector.detect(np.zeros((100, 100, 3), dtype=np.uint8)))

        assert [r.shape for r in records] == [ShapeKind.TRIANGLE]
        assert records[0].anchor in [(10, 10), (60, 10), (35, 50)]

    def test_library_error_skips_only_that_contour(self):
        detector = ShapeDetector()
        record = ShapeRecord(ShapeKind.SQUARE, PartQuality.GOOD, 0.78, 4, (0, 0))
        contours = [np.zeros((2, 1, 2), dtype=np.int32), np.zeros((4, 1, 2), dtype=np.int32)]

        with patch.object(detector, 'find_contours', return_value=contours), \
                patch.object(detector, 'classify_contour',
                             side_effect=[cv2.error("bad contour"), record]):
            records = list(detector.detect(np.zeros((10, 10, 3), dtype=np.uint8)))

        assert records == [record]

    def test_from_settings(self):
        settings = InspectionSettings(canny_threshold_low=50, canny_threshold_high=150,
                                      blur_kernel=5, circularity_threshold=0.8)
        detector = ShapeDetector.from_settings(settings)

        assert detector.blur_kernel == (5, 5)
        assert (detector.canny_low, detector.canny_high) == (50, 150)
        assert detector.circularity_threshold == 0.8
