"""
Part Shape Detection
Contour-based shape naming and good/bad part verdicts for the inspection box.
"""

import math
import cv2
import numpy as np
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Optional, Tuple
import logging

logger = logging.getLogger(__name__)


class ShapeKind(Enum):
    """Shapes the detector can name."""
    CIRCLE = "Circle"
    TRIANGLE = "Triangle"
    SQUARE = "Square"
    HEXAGON = "Hexagon"
    NONE = "No shape detected"


class PartQuality(Enum):
    """Pass/fail verdict for a detected part."""
    GOOD = "Good part"
    BAD = "Bad part"


# Accepted polygon shapes by vertex count
POLYGON_SHAPES = {
    3: ShapeKind.TRIANGLE,
    4: ShapeKind.SQUARE,
    6: ShapeKind.HEXAGON,
}


@dataclass(frozen=True)
class ShapeRecord:
    """Classification of one external contour."""
    shape: ShapeKind
    quality: PartQuality
    circularity: float
    vertices: int
    anchor: Tuple[int, int]

    @property
    def is_good(self) -> bool:
        return self.quality is PartQuality.GOOD


def compute_circularity(area: float, perimeter: float) -> Optional[float]:
    """Isoperimetric ratio 4*pi*A/P^2, or None for a zero-length boundary."""
    if perimeter <= 0:
        return None
    return (4 * math.pi * area) / (perimeter * perimeter)


def classify_shape(circularity: float, vertices: int,
                   circularity_threshold: float = 0.9) -> Tuple[ShapeKind, PartQuality]:
    """Name a shape from its circularity and approximated vertex count."""
    if circularity > circularity_threshold:
        return ShapeKind.CIRCLE, PartQuality.GOOD

    shape = POLYGON_SHAPES.get(vertices)
    if shape is None:
        return ShapeKind.NONE, PartQuality.BAD
    return shape, PartQuality.GOOD


class ShapeDetector:
    """
    Edge and contour based shape detector.
    Each external boundary in the region yields one ShapeRecord.
    """

    def __init__(self, blur_kernel: int = 3, blur_sigma: float = 1.5,
                 canny_low: int = 100, canny_high: int = 200,
                 epsilon_ratio: float = 0.02, circularity_threshold: float = 0.9):
        """
        Initialize detector.

        Args:
            blur_kernel: Gaussian blur kernel size (odd)
            blur_sigma: Gaussian blur sigma
            canny_low: Canny lower hysteresis threshold
            canny_high: Canny upper hysteresis threshold
            epsilon_ratio: Polygon approximation tolerance as a fraction of perimeter
            circularity_threshold: Circularity above which a contour is a circle
        """
        self.blur_kernel = (blur_kernel, blur_kernel)
        self.blur_sigma = blur_sigma
        self.canny_low = canny_low
        self.canny_high = canny_high
        self.epsilon_ratio = epsilon_ratio
        self.circularity_threshold = circularity_threshold

    @classmethod
    def from_settings(cls, settings) -> 'ShapeDetector':
        """Create detector from InspectionSettings."""
        return cls(
            blur_kernel=settings.blur_kernel,
            blur_sigma=settings.blur_sigma,
            canny_low=settings.canny_threshold_low,
            canny_high=settings.canny_threshold_high,
            epsilon_ratio=settings.poly_epsilon_ratio,
            circularity_threshold=settings.circularity_threshold
        )

    def find_contours(self, region: np.ndarray):
        """Return the external contours of the region's edge map."""
        if region.ndim == 3:
            gray = cv2.cvtColor(region, cv2.COLOR_BGR2GRAY)
        else:
            gray = region

        blurred = cv2.GaussianBlur(gray, self.blur_kernel, self.blur_sigma)
        edges = cv2.Canny(blurred, self.canny_low, self.canny_high)

        # Teh-Chin chain approximation keeps the perimeter close to the true curve length
        contours, _ = cv2.findContours(edges, cv2.RETR_EXTERNAL, cv2.CHAIN_APPROX_TC89_L1)
        return contours

    def classify_contour(self, contour: np.ndarray) -> Optional[ShapeRecord]:
        """
        Classify a single contour.

        Returns:
            ShapeRecord, or None if the contour has no measurable perimeter
        """
        perimeter = cv2.arcLength(contour, True)
        area = cv2.contourArea(contour)
        circularity = compute_circularity(area, perimeter)
        if circularity is None:
            return None

        approx = cv2.approxPolyDP(contour, perimeter * self.epsilon_ratio, True)
        vertices = len(approx)
        shape, quality = classify_shape(circularity, vertices, self.circularity_threshold)

        anchor_x, anchor_y = approx[0][0]
        return ShapeRecord(
            shape=shape,
            quality=quality,
            circularity=circularity,
            vertices=vertices,
            anchor=(int(anchor_x), int(anchor_y))
        )

    def detect(self, region: np.ndarray,
               annotate_on: Optional[np.ndarray] = None) -> Iterator[ShapeRecord]:
        """
        Detect shapes in a region.

        Args:
            region: Region image (BGR or grayscale)
            annotate_on: Optional image (usually a copy of region) to draw shape names on

        Yields:
            One ShapeRecord per classifiable external contour
        """
        for contour in self.find_contours(region):
            try:
                record = self.classify_contour(contour)
            except cv2.error as e:
                logger.warning(f"Skipping contour with {len(contour)} points: {e}")
                continue

            if record is None:
                logger.debug("Skipping degenerate contour with zero perimeter")
                continue

            logger.info(f"Detected shape: {record.shape.value}")
            logger.info(f"Good or bad part? {record.quality.value}")

            if annotate_on is not None:
                cv2.putText(annotate_on, record.shape.value, record.anchor,
                            cv2.FONT_HERSHEY_SIMPLEX, 0.5, (255, 0, 0), 2)

            yield record
