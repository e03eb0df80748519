"""Pytest configuration and shared fixtures for the part inspection system.

Provides synthetic frames drawn with OpenCV, a scripted frame source and a
controllable clock so the inspection loop can be tested without a camera.
"""
import logging
from typing import Dict, List, Optional

import cv2
import numpy as np
import pytest

from part_inspector.config.settings import InspectionSettings
from part_inspector.vision.image_source import ImageSource, SourceType


# Configure logging for tests
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[logging.StreamHandler()]
)


class FakeClock:
    """Clock whose time only moves when the test says so."""

    def __init__(self, start: float = 0.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float):
        self.now += seconds


class ScriptedSource(ImageSource):
    """Frame source that replays a fixed list of frames, then ends."""

    def __init__(self, frames: List[np.ndarray], available: bool = True):
        self.frames = list(frames)
        self.available = available
        self.released = False
        self.reads = 0

    def get_frame(self) -> Optional[np.ndarray]:
        self.reads += 1
        if not self.available or not self.frames:
            return None
        return self.frames.pop(0)

    def is_available(self) -> bool:
        return self.available and not self.released

    def release(self):
        self.released = True

    def get_source_info(self) -> str:
        return "Scripted Source"

    def get_source_type(self) -> SourceType:
        return SourceType.VIDEO_FILE

    def get_metadata(self) -> Dict:
        return {'source_type': self.get_source_type().value, 'remaining': len(self.frames)}


@pytest.fixture
def settings():
    """Default settings with display disabled."""
    return InspectionSettings(show_windows=False)


@pytest.fixture
def fake_clock():
    """Provide a manually advanced clock."""
    return FakeClock(start=100.0)


@pytest.fixture
def make_source():
    """Factory for scripted frame sources."""
    def _make(frames=(), available=True):
        return ScriptedSource(list(frames), available=available)
    return _make


@pytest.fixture
def blank_frame():
    """400x300 black BGR frame, the Pi pipeline's output size."""
    return np.zeros((300, 400, 3), dtype=np.uint8)


def draw_triangle(size: int = 200, color=(255, 255, 255), background=(0, 0, 0)) -> np.ndarray:
    """Solid equilateral triangle centered in a square image."""
    image = np.full((size, size, 3), background, dtype=np.uint8)
    side = int(size * 0.7)
    height = int(side * np.sqrt(3) / 2)
    left = (size - side) // 2
    base_y = (size + height) // 2
    points = np.array([
        [left, base_y],
        [left + side, base_y],
        [size // 2, base_y - height]
    ], dtype=np.int32)
    cv2.fillPoly(image, [points], color)
    return image


def draw_circle(size: int = 200, color=(255, 255, 255), background=(0, 0, 0)) -> np.ndarray:
    """Solid circle centered in a square image."""
    image = np.full((size, size, 3), background, dtype=np.uint8)
    cv2.circle(image, (size // 2, size // 2), int(size * 0.35), color, -1, cv2.LINE_AA)
    return image


def draw_square(size: int = 200, color=(255, 255, 255), background=(0, 0, 0)) -> np.ndarray:
    """Solid axis-aligned square centered in a square image."""
    image = np.full((size, size, 3), background, dtype=np.uint8)
    margin = size // 4
    cv2.rectangle(image, (margin, margin), (size - margin, size - margin), color, -1)
    return image


@pytest.fixture
def triangle_image():
    return draw_triangle()


@pytest.fixture
def circle_image():
    return draw_circle()


@pytest.fixture
def square_image():
    return draw_square()
