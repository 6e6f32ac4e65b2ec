"""
Commands passed to the presenter.

The HTTP layer, the capture service and the inference worker never touch
presentation state directly; they send one of these.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from models.detection import Detection


@dataclass(frozen=True)
class CapturePhoto:
    pass


@dataclass(frozen=True)
class ImportImage:
    data: bytes
    source: str = "upload"


@dataclass(frozen=True)
class ClearImage:
    pass


@dataclass(frozen=True)
class RunInference:
    pass


@dataclass(frozen=True)
class ResizeDisplay:
    width: float
    height: float


@dataclass(frozen=True)
class DetectionsReady:
    """Delivered by the inference worker once the full detection list exists."""
    request_id: int
    detections: Tuple[Detection, ...]
    error: Optional[str] = None
