"""
Vision Processing Module
Contains all image acquisition and classification logic.
"""

from .image_source import (
    ImageSource, ImageSourceFactory, SourceType,
    GStreamerCameraSource, CameraSource, VideoFileSource
)
from .region import Region, extract_central_region
from .color_detector import (
    ColorProfiler, ColorClassifier, ColorDescriptor, ColorLabel, ColorRule, COLOR_RULES
)
from .shape_detector import (
    ShapeDetector, ShapeRecord, ShapeKind, PartQuality, classify_shape, compute_circularity
)
from .inspector import FrameInspector, InspectionResult

__all__ = [
    'ImageSource', 'ImageSourceFactory', 'SourceType',
    'GStreamerCameraSource', 'CameraSource', 'VideoFileSource',
    'Region', 'extract_central_region',
    'ColorProfiler', 'ColorClassifier', 'ColorDescriptor', 'ColorLabel', 'ColorRule', 'COLOR_RULES',
    'ShapeDetector', 'ShapeRecord', 'ShapeKind', 'PartQuality', 'classify_shape', 'compute_circularity',
    'FrameInspector', 'InspectionResult'
]
