"""
Frame Inspector
Runs color and shape classification on the central inspection box.
"""

import numpy as np
from typing import List, Optional
from dataclasses import dataclass, field
import logging

from .color_detector import ColorProfiler, ColorClassifier, ColorDescriptor, ColorLabel
from .shape_detector import ShapeDetector, ShapeRecord
from ..utils.timer import timed_operation

logger = logging.getLogger(__name__)


@dataclass
class InspectionResult:
    """Result of one classification cycle."""
    color: Optional[ColorLabel]
    descriptor: Optional[ColorDescriptor]
    shapes: List[ShapeRecord] = field(default_factory=list)
    processing_time_ms: float = 0.0

    @property
    def is_ok(self) -> bool:
        """True when at least one shape was found and every shape is a good part."""
        return bool(self.shapes) and all(record.is_good for record in self.shapes)

    def get_summary(self) -> str:
        """Get human-readable result summary."""
        color = self.color.value if self.color else "n/a"
        if self.shapes:
            shapes = ", ".join(
                f"{record.shape.value} ({record.quality.value})" for record in self.shapes)
        else:
            shapes = "none"

        lines = [
            f"Status: {'OK' if self.is_ok else 'NG'}",
            f"Color: {color}",
            f"Shapes: {shapes}",
            f"Processing Time: {self.processing_time_ms:.2f} ms"
        ]
        return "\n".join(lines)


class FrameInspector:
    """Color and shape inspector for the central region of a frame."""

    def __init__(self, profiler: Optional[ColorProfiler] = None,
                 classifier: Optional[ColorClassifier] = None,
                 shape_detector: Optional[ShapeDetector] = None):
        """Initialize inspector."""
        self.profiler = profiler or ColorProfiler()
        self.classifier = classifier or ColorClassifier()
        self.shape_detector = shape_detector or ShapeDetector()

    @classmethod
    def from_settings(cls, settings) -> 'FrameInspector':
        """Create inspector with thresholds from InspectionSettings."""
        return cls(
            profiler=ColorProfiler.from_settings(settings),
            classifier=ColorClassifier(),
            shape_detector=ShapeDetector.from_settings(settings)
        )

    def inspect(self, region: np.ndarray,
                annotate_on: Optional[np.ndarray] = None) -> InspectionResult:
        """
        Classify the color and shapes of a region.

        Args:
            region: Region image (BGR format)
            annotate_on: Optional image to draw shape names on

        Returns:
            InspectionResult; color is None when no chromatic pixels remain
        """
        with timed_operation("Classification cycle") as timer:
            descriptor = self.profiler.profile(region)
            if descriptor is None:
                color = None
                logger.info("Detected color: skipped (region is only white/black pixels)")
            else:
                color = self.classifier.classify(descriptor)
                logger.info(f"Detected color: {color.value}")

            shapes = list(self.shape_detector.detect(region, annotate_on=annotate_on))

        return InspectionResult(
            color=color,
            descriptor=descriptor,
            shapes=shapes,
            processing_time_ms=timer.elapsed_ms
        )
