"""
Inspection Settings
Launch-time configuration for the capture pipeline and classification thresholds.
"""

import json
from dataclasses import dataclass, asdict, fields
from pathlib import Path
from typing import Dict, Optional
import logging

logger = logging.getLogger(__name__)


class ConfigurationError(ValueError):
    """Inconsistent or invalid inspection configuration."""
    pass


SOURCE_KINDS = ('gstreamer', 'camera', 'video')


@dataclass
class InspectionSettings:
    """All tunable constants of the inspection loop."""

    # ==================== Image Acquisition ====================
    source: str = 'gstreamer'
    camera_index: int = 0
    video_path: Optional[str] = None
    capture_width: int = 800
    capture_height: int = 600
    target_width: int = 400
    target_height: int = 300
    flip_method: Optional[str] = 'rotate-180'

    # ==================== Region & Timing ====================
    box_size: int = 200
    detection_interval_s: float = 1.0
    fps_window: int = 30

    # ==================== Color Thresholds (H: 0-180, S: 0-255, V: 0-255) ====================
    white_saturation_max: int = 40
    white_value_min: int = 200
    black_value_max: int = 50

    # ==================== Shape Detection ====================
    blur_kernel: int = 3
    blur_sigma: float = 1.5
    canny_threshold_low: int = 100
    canny_threshold_high: int = 200
    poly_epsilon_ratio: float = 0.02
    circularity_threshold: float = 0.9

    # ==================== Output ====================
    show_windows: bool = True
    annotate_shapes: bool = True
    draw_box_outline: bool = True
    camera_window: str = 'Camera'
    region_window: str = 'Central Box'

    def validate(self) -> 'InspectionSettings':
        """Check the settings for internal consistency, raising ConfigurationError."""
        if self.source not in SOURCE_KINDS:
            raise ConfigurationError(
                f"Unknown source '{self.source}', expected one of {', '.join(SOURCE_KINDS)}")
        if self.source == 'video' and not self.video_path:
            raise ConfigurationError("Video source requires video_path")

        for name in ('capture_width', 'capture_height', 'target_width',
                     'target_height', 'box_size', 'fps_window'):
            if getattr(self, name) <= 0:
                raise ConfigurationError(f"{name} must be positive, got {getattr(self, name)}")

        if self.detection_interval_s < 0:
            raise ConfigurationError("detection_interval_s must not be negative")
        if self.blur_kernel <= 0 or self.blur_kernel % 2 == 0:
            raise ConfigurationError(f"blur_kernel must be a positive odd number, got {self.blur_kernel}")
        if not 0 <= self.canny_threshold_low <= self.canny_threshold_high:
            raise ConfigurationError(
                f"Canny thresholds out of order: {self.canny_threshold_low} > {self.canny_threshold_high}")
        if not 0 < self.poly_epsilon_ratio < 1:
            raise ConfigurationError("poly_epsilon_ratio must be between 0 and 1")

        # Frame size is only known up front for the GStreamer pipeline
        if self.source == 'gstreamer':
            self.validate_frame_size(self.target_width, self.target_height)

        return self

    def validate_frame_size(self, width: int, height: int):
        """Ensure the central box fits inside a frame of the given size."""
        if self.box_size > width or self.box_size > height:
            raise ConfigurationError(
                f"Box size {self.box_size} does not fit frame ({width}x{height})")

    def gstreamer_pipeline(self) -> str:
        """Build the libcamera GStreamer pipeline description."""
        # Capture at a higher resolution, then downsample
        parts = [
            "libcamerasrc",
            f"video/x-raw, width={self.capture_width}, height={self.capture_height}",
            "videoconvert",
            "videoscale",
            f"video/x-raw, width={self.target_width}, height={self.target_height}",
        ]
        if self.flip_method:
            parts.append(f"videoflip method={self.flip_method}")
        parts.append("appsink drop=true max_buffers=2")
        return " ! ".join(parts)

    def to_dict(self) -> Dict:
        """Convert to dictionary for JSON serialization."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict) -> 'InspectionSettings':
        """Create from dictionary, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            logger.warning(f"Ignoring unknown settings: {sorted(unknown)}")
        return cls(**{k: v for k, v in data.items() if k in known})

    @classmethod
    def load(cls, filepath) -> 'InspectionSettings':
        """Load settings from a JSON file."""
        filepath = Path(filepath)
        try:
            with open(filepath, 'r') as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise ConfigurationError(f"Failed to load settings from {filepath}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigurationError(f"Settings file {filepath} must contain a JSON object")

        logger.info(f"Settings loaded from {filepath}")
        return cls.from_dict(data)
