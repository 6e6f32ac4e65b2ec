"""
Typed models for the vision overlay application.

Detections are produced once by a detector and never mutated; everything
else in the pipeline projects them into new coordinate spaces.
"""

from .frame import FrameData
from .detection import (
    UNKNOWN_LABEL,
    Detection,
    DisplayDetection,
    NormalizedRect,
    PixelDetection,
    PixelRect,
    format_caption,
    format_debug_line,
)
from .config import (
    Config,
    CameraConfig,
    DetectionConfig,
    DisplayConfig,
    OverlayConfig,
    StorageConfig,
    WebConfig,
    YoloConfig,
)

__all__ = [
    # Frame
    "FrameData",
    # Detection
    "UNKNOWN_LABEL",
    "Detection",
    "DisplayDetection",
    "NormalizedRect",
    "PixelDetection",
    "PixelRect",
    "format_caption",
    "format_debug_line",
    # Config
    "Config",
    "CameraConfig",
    "DetectionConfig",
    "DisplayConfig",
    "OverlayConfig",
    "StorageConfig",
    "WebConfig",
    "YoloConfig",
]
