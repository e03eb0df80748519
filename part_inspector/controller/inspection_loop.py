"""
Inspection Loop
Per-frame orchestration: read, crop, throttle classification, report frame rate.
"""

import time
from dataclasses import dataclass
from typing import Callable, Optional, Tuple
import logging
import numpy as np

from ..config.settings import InspectionSettings
from ..vision.image_source import ImageSource
from ..vision.inspector import FrameInspector, InspectionResult
from ..vision.region import extract_central_region

logger = logging.getLogger(__name__)


@dataclass
class InspectionState:
    """Mutable timing and counter state owned by one InspectionLoop."""
    last_detection_time: Optional[float] = None
    window_frames: int = 0
    window_start: float = 0.0
    total_frames: int = 0
    detections_run: int = 0
    last_fps: float = 0.0
    last_result: Optional[InspectionResult] = None


class InspectionLoop:
    """
    Single-threaded inspection loop.
    Classification runs at most once per detection interval; every other
    frame is only displayed and counted.
    """

    def __init__(self, source: ImageSource, settings: InspectionSettings,
                 inspector: Optional[FrameInspector] = None, display=None,
                 clock: Callable[[], float] = time.monotonic):
        """
        Initialize loop.

        Args:
            source: Opened frame source
            settings: Inspection settings
            inspector: Frame inspector (built from settings if omitted)
            display: Object with show(window_name, image), or None for headless
            clock: Monotonic time source in seconds
        """
        self.source = source
        self.settings = settings
        self.inspector = inspector or FrameInspector.from_settings(settings)
        self.display = display
        self.clock = clock
        self.state = InspectionState(window_start=clock())

    def should_classify(self, now: float) -> bool:
        """Check whether the detection interval has elapsed since the last run."""
        last = self.state.last_detection_time
        return last is None or now - last >= self.settings.detection_interval_s

    def _show(self, window_name: str, image: np.ndarray):
        if self.display is not None:
            self.display.show(window_name, image)

    def step(self, frame: np.ndarray) -> Optional[InspectionResult]:
        """
        Process one frame.

        Returns:
            InspectionResult if classification ran on this frame, else None
        """
        region = extract_central_region(frame, self.settings.box_size)

        if self.settings.draw_box_outline:
            self._show(self.settings.camera_window, region.draw_outline(frame))
        else:
            self._show(self.settings.camera_window, frame)

        result = None
        now = self.clock()
        if self.should_classify(now):
            annotated = region.image.copy() if self.settings.annotate_shapes else None
            result = self.inspector.inspect(region.image, annotate_on=annotated)
            self.state.last_detection_time = now
            self.state.detections_run += 1
            self.state.last_result = result
            self._show(self.settings.region_window,
                       annotated if annotated is not None else region.image)
        else:
            self._show(self.settings.region_window, region.image)

        self._update_frame_rate()
        return result

    def _update_frame_rate(self) -> Optional[Tuple[float, float]]:
        """Count a frame; every fps_window frames log and reset the window."""
        self.state.total_frames += 1
        self.state.window_frames += 1
        if self.state.window_frames < self.settings.fps_window:
            return None

        now = self.clock()
        elapsed = now - self.state.window_start
        frames = self.state.window_frames
        fps = frames / elapsed if elapsed > 0 else 0.0
        logger.info(f"{frames} frames in {elapsed:f} seconds = {fps:f} FPS")

        self.state.last_fps = fps
        self.state.window_frames = 0
        self.state.window_start = now
        return elapsed, fps

    def process_next(self) -> bool:
        """
        Read and process the next frame.

        Returns:
            False once the source stops delivering frames
        """
        frame = self.source.get_frame()
        if frame is None:
            logger.error("Could not read a frame.")
            return False

        self.step(frame)
        return True

    def run(self) -> int:
        """Run until the source stops delivering frames and return the exit code."""
        logger.info(f"Inspection loop started on {self.source.get_source_info()}")
        while self.process_next():
            pass

        logger.info(f"Inspection loop stopped after {self.state.total_frames} frames, "
                    f"{self.state.detections_run} classification cycles")
        return 0
