"""
Part Color Detection
HSV-based dominant color profiling and naming for the inspection box.
"""

import cv2
import numpy as np
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional
import logging

logger = logging.getLogger(__name__)

# OpenCV 8-bit hue range is [0, 180)
HUE_MAX = 180


class ColorLabel(Enum):
    """Enumeration of detectable part colors."""
    RED = "Red"
    YELLOW = "Yellow"
    GREEN = "Green"
    BLUE = "Blue"
    GRAY = "Gray"
    BLACK = "Black"
    UNKNOWN = "Unknown"


@dataclass(frozen=True)
class ColorDescriptor:
    """Mean HSV color of the chromatic pixels in a region."""
    hue: float
    saturation: float
    value: float


@dataclass(frozen=True)
class ColorRule:
    """One entry of the ordered color range table."""
    label: ColorLabel
    matches: Callable[[int, int, int], bool]


# Evaluated top to bottom, first match wins. Arguments are (h, s, v).
COLOR_RULES: List[ColorRule] = [
    ColorRule(ColorLabel.GRAY, lambda h, s, v: s < 40),
    ColorRule(ColorLabel.BLACK, lambda h, s, v: v < 40),
    ColorRule(ColorLabel.RED, lambda h, s, v: 0 <= h <= 25),
    ColorRule(ColorLabel.YELLOW, lambda h, s, v: 25 < h <= 55),
    ColorRule(ColorLabel.GREEN, lambda h, s, v: 55 < h <= 85),
    ColorRule(ColorLabel.BLUE, lambda h, s, v: 85 < h <= 150),
    # Red wraps around the top of the hue wheel
    ColorRule(ColorLabel.RED, lambda h, s, v: 150 < h <= HUE_MAX),
]


class ColorProfiler:
    """
    Computes the representative color of a region.
    Near-white and near-black pixels are excluded from the average so that
    background and shadows do not wash out the part color.
    """

    def __init__(self, white_saturation_max: int = 40, white_value_min: int = 200,
                 black_value_max: int = 50):
        """
        Initialize profiler.

        Args:
            white_saturation_max: Pixels with saturation below this may be white
            white_value_min: Pixels with value above this may be white
            black_value_max: Pixels with value below this are black
        """
        # cv2.inRange bounds are inclusive, so shift them to get strict comparisons
        self.white_lower = np.array([0, 0, white_value_min + 1])
        self.white_upper = np.array([HUE_MAX, white_saturation_max - 1, 255])
        self.black_lower = np.array([0, 0, 0])
        self.black_upper = np.array([HUE_MAX, 255, black_value_max - 1])

    @classmethod
    def from_settings(cls, settings) -> 'ColorProfiler':
        """Create profiler from InspectionSettings."""
        return cls(
            white_saturation_max=settings.white_saturation_max,
            white_value_min=settings.white_value_min,
            black_value_max=settings.black_value_max
        )

    def included_mask(self, hsv: np.ndarray) -> np.ndarray:
        """Return the mask of pixels that are neither near-white nor near-black."""
        white_mask = cv2.inRange(hsv, self.white_lower, self.white_upper)
        black_mask = cv2.inRange(hsv, self.black_lower, self.black_upper)
        excluded = cv2.bitwise_or(white_mask, black_mask)
        return cv2.bitwise_not(excluded)

    def profile(self, region: np.ndarray) -> Optional[ColorDescriptor]:
        """
        Compute the mean HSV color of a region.

        Args:
            region: Region image (BGR format)

        Returns:
            ColorDescriptor, or None if every pixel was excluded
        """
        hsv = cv2.cvtColor(region, cv2.COLOR_BGR2HSV)
        mask = self.included_mask(hsv)

        if cv2.countNonZero(mask) == 0:
            logger.debug("All pixels excluded as white or black, no color profile")
            return None

        h, s, v, _ = cv2.mean(hsv, mask=mask)
        descriptor = ColorDescriptor(hue=h, saturation=s, value=v)
        logger.debug(f"Color profile: H={h:.1f} S={s:.1f} V={v:.1f}")
        return descriptor


class ColorClassifier:
    """Maps a color descriptor to a color label using an ordered range table."""

    def __init__(self, rules: Optional[List[ColorRule]] = None):
        self.rules = list(rules) if rules is not None else list(COLOR_RULES)

    def classify(self, descriptor: ColorDescriptor) -> ColorLabel:
        """Return the label of the first rule matching the descriptor."""
        h = int(descriptor.hue)
        s = int(descriptor.saturation)
        v = int(descriptor.value)

        for rule in self.rules:
            if rule.matches(h, s, v):
                return rule.label

        return ColorLabel.UNKNOWN
