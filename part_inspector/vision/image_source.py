"""
Image Source Abstraction
Provides a unified frame-reading interface for the Pi camera pipeline,
plain camera devices and recorded video clips.
"""

import cv2
import numpy as np
from abc import ABC, abstractmethod
from typing import Optional, Dict
from enum import Enum
import logging

logger = logging.getLogger(__name__)


class SourceType(Enum):
    """Type of image source."""
    GSTREAMER = "gstreamer"
    CAMERA = "camera"
    VIDEO_FILE = "video_file"


class ImageSource(ABC):
    """Abstract base class for image sources with context manager support."""

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit - ensures resources are released."""
        self.release()
        return False

    @abstractmethod
    def get_frame(self) -> Optional[np.ndarray]:
        """Get next frame from source, or None at end of stream."""
        pass

    @abstractmethod
    def is_available(self) -> bool:
        """Check if source is open."""
        pass

    @abstractmethod
    def release(self):
        """Release resources."""
        pass

    @abstractmethod
    def get_source_info(self) -> str:
        """Get human-readable source information."""
        pass

    @abstractmethod
    def get_source_type(self) -> SourceType:
        """Get source type enumeration."""
        pass

    @abstractmethod
    def get_metadata(self) -> Dict:
        """Get source metadata."""
        pass


class VideoCaptureSource(ImageSource):
    """Common cv2.VideoCapture handling shared by all capture-based sources."""

    def __init__(self):
        self.cap = None
        self.frame_count = 0
        self._open_capture()

    @abstractmethod
    def _create_capture(self) -> cv2.VideoCapture:
        """Create the underlying capture object."""
        pass

    def _open_capture(self):
        """Open capture device."""
        try:
            self.cap = self._create_capture()
            if not self.cap.isOpened():
                logger.error(f"Failed to open {self.get_source_info()}")
                self.cap = None
            else:
                logger.info(f"Opened {self.get_source_info()}")
        except cv2.error as e:
            logger.error(f"Error opening {self.get_source_info()}: {e}")
            self.cap = None

    def get_frame(self) -> Optional[np.ndarray]:
        """Capture next frame."""
        if self.cap is None or not self.cap.isOpened():
            return None

        ret, frame = self.cap.read()
        if ret and frame is not None:
            self.frame_count += 1
            return frame
        return None

    def is_available(self) -> bool:
        """Check if capture is opened."""
        return self.cap is not None and self.cap.isOpened()

    def release(self):
        """Release capture resources."""
        if self.cap is not None:
            logger.debug(f"Releasing {self.get_source_info()}")
            self.cap.release()
            self.cap = None

    def get_metadata(self) -> Dict:
        """Get capture metadata."""
        metadata = {
            'source_type': self.get_source_type().value,
            'frame_count': self.frame_count,
            'available': self.is_available()
        }

        if self.is_available():
            metadata.update({
                'width': int(self.cap.get(cv2.CAP_PROP_FRAME_WIDTH)),
                'height': int(self.cap.get(cv2.CAP_PROP_FRAME_HEIGHT)),
                'fps': self.cap.get(cv2.CAP_PROP_FPS)
            })

        return metadata


class GStreamerCameraSource(VideoCaptureSource):
    """Raspberry Pi camera read through a libcamera GStreamer pipeline."""

    def __init__(self, pipeline: str):
        self.pipeline = pipeline
        super().__init__()

    def _create_capture(self) -> cv2.VideoCapture:
        return cv2.VideoCapture(self.pipeline, cv2.CAP_GSTREAMER)

    def get_source_info(self) -> str:
        return f"GStreamer Pipeline: {self.pipeline}"

    def get_source_type(self) -> SourceType:
        return SourceType.GSTREAMER

    def get_metadata(self) -> Dict:
        metadata = super().get_metadata()
        metadata['pipeline'] = self.pipeline
        return metadata


class CameraSource(VideoCaptureSource):
    """Image source from camera device index."""

    def __init__(self, camera_index: int = 0):
        self.camera_index = camera_index
        super().__init__()

    def _create_capture(self) -> cv2.VideoCapture:
        return cv2.VideoCapture(self.camera_index)

    def get_source_info(self) -> str:
        return f"Camera Device: {self.camera_index}"

    def get_source_type(self) -> SourceType:
        return SourceType.CAMERA

    def get_metadata(self) -> Dict:
        metadata = super().get_metadata()
        metadata['camera_index'] = self.camera_index
        return metadata


class VideoFileSource(VideoCaptureSource):
    """Recorded clip replayed frame by frame; end of file ends the stream."""

    def __init__(self, filepath: str):
        self.filepath = filepath
        super().__init__()

    def _create_capture(self) -> cv2.VideoCapture:
        return cv2.VideoCapture(self.filepath)

    def get_source_info(self) -> str:
        return f"Video File: {self.filepath}"

    def get_source_type(self) -> SourceType:
        return SourceType.VIDEO_FILE

    def get_metadata(self) -> Dict:
        metadata = super().get_metadata()
        metadata['filepath'] = self.filepath
        return metadata


class ImageSourceFactory:
    """Factory for creating image sources with unified interface."""

    @staticmethod
    def create_gstreamer_source(pipeline: str) -> GStreamerCameraSource:
        """Create libcamera pipeline source."""
        return GStreamerCameraSource(pipeline)

    @staticmethod
    def create_camera_source(camera_index: int = 0) -> CameraSource:
        """Create camera source."""
        return CameraSource(camera_index)

    @staticmethod
    def create_video_source(filepath: str) -> VideoFileSource:
        """Create video file source."""
        return VideoFileSource(filepath)

    @staticmethod
    def create_source_from_settings(settings) -> ImageSource:
        """Create image source from InspectionSettings."""
        if settings.source == 'gstreamer':
            return ImageSourceFactory.create_gstreamer_source(settings.gstreamer_pipeline())
        if settings.source == 'camera':
            return ImageSourceFactory.create_camera_source(settings.camera_index)
        if settings.source == 'video':
            return ImageSourceFactory.create_video_source(settings.video_path)

        raise ValueError(f"Invalid source kind: {settings.source}")
