"""
Display Sinks
Presentation targets for the inspection loop's frames.
"""

import cv2
import numpy as np
from abc import ABC, abstractmethod
import logging

logger = logging.getLogger(__name__)


class DisplaySink(ABC):
    """Interface for anything that can present a named image."""

    @abstractmethod
    def show(self, window_name: str, image: np.ndarray):
        """Present an image under the given window name."""
        pass

    def close(self):
        """Release any windows."""
        pass


class NullDisplay(DisplaySink):
    """Headless sink that discards every image."""

    def show(self, window_name: str, image: np.ndarray):
        pass


class OpenCVDisplay(DisplaySink):
    """HighGUI windows, one per window name."""

    def __init__(self):
        self._windows = set()

    def show(self, window_name: str, image: np.ndarray):
        if window_name not in self._windows:
            cv2.namedWindow(window_name, cv2.WINDOW_AUTOSIZE)
            self._windows.add(window_name)
        cv2.imshow(window_name, image)
        cv2.waitKey(1)

    def close(self):
        if self._windows:
            logger.debug(f"Closing windows: {sorted(self._windows)}")
            cv2.destroyAllWindows()
            self._windows.clear()
