"""
Central Region Extraction
Crops the fixed-size inspection box from the middle of each frame.
"""

import cv2
import numpy as np
from dataclasses import dataclass, field
from typing import Tuple

from ..config.settings import ConfigurationError


@dataclass
class Region:
    """Square inspection box and the view of the frame it covers."""
    x: int
    y: int
    width: int
    height: int
    image: np.ndarray = field(repr=False)

    @property
    def bounds(self) -> Tuple[int, int, int, int]:
        """Return (x1, y1, x2, y2) with exclusive right/bottom edges."""
        return self.x, self.y, self.x + self.width, self.y + self.height

    def draw_outline(self, frame: np.ndarray, color: Tuple[int, int, int] = (0, 255, 0),
                     thickness: int = 2) -> np.ndarray:
        """Draw the box on a copy of the frame for visualization."""
        img_copy = frame.copy()
        x1, y1, x2, y2 = self.bounds
        cv2.rectangle(img_copy, (x1, y1), (x2 - 1, y2 - 1), color, thickness)
        return img_copy


def extract_central_region(frame: np.ndarray, box_size: int) -> Region:
    """
    Extract a centered box_size x box_size region from a frame.

    Args:
        frame: Input image (BGR format)
        box_size: Side length of the square box in pixels

    Returns:
        Region whose image is a view into the frame

    Raises:
        ConfigurationError: If the box does not fit inside the frame
    """
    height, width = frame.shape[:2]

    if box_size <= 0:
        raise ConfigurationError(f"Box size must be positive, got {box_size}")
    if box_size > width or box_size > height:
        raise ConfigurationError(
            f"Box size {box_size} does not fit frame ({width}x{height})")

    start_x = (width - box_size) // 2
    start_y = (height - box_size) // 2

    return Region(
        x=start_x,
        y=start_y,
        width=box_size,
        height=box_size,
        image=frame[start_y:start_y + box_size, start_x:start_x + box_size]
    )
