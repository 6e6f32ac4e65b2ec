"""
Runtime wiring: capture and inference services plus the presenter that owns
the current frame.
"""

from .commands import (
    CapturePhoto,
    ClearImage,
    DetectionsReady,
    ImportImage,
    ResizeDisplay,
    RunInference,
)
from .frame_state import CurrentFrame
from .presenter import Presenter
from .services import CaptureService, InferenceService

__all__ = [
    "CapturePhoto",
    "ClearImage",
    "DetectionsReady",
    "ImportImage",
    "ResizeDisplay",
    "RunInference",
    "CurrentFrame",
    "Presenter",
    "CaptureService",
    "InferenceService",
]
