"""
Detection models for object detection results.

Detectors report rectangles in normalized unit space with a bottom-left
origin. Projections into display or image pixel space produce PixelRect
values with a top-left origin.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Dict, Optional, Sequence, Tuple

UNKNOWN_LABEL = "Unknown"


@dataclass(frozen=True)
class NormalizedRect:
    """
    A rectangle in normalized unit space ([0, 1] x [0, 1]).

    Attributes:
        min_x: Left edge as a fraction of the frame width.
        min_y: Bottom edge as a fraction of the frame height (bottom-left origin).
        width: Width as a fraction of the frame width.
        height: Height as a fraction of the frame height.
    """
    min_x: float
    min_y: float
    width: float
    height: float

    @property
    def max_x(self) -> float:
        return self.min_x + self.width

    @property
    def max_y(self) -> float:
        return self.min_y + self.height

    def as_tuple(self) -> Tuple[float, float, float, float]:
        """Return as (min_x, min_y, width, height) tuple."""
        return (self.min_x, self.min_y, self.width, self.height)

    @classmethod
    def from_bounds(cls, min_x: float, min_y: float, max_x: float, max_y: float) -> "NormalizedRect":
        """Create from edge coordinates."""
        return cls(min_x=min_x, min_y=min_y, width=max_x - min_x, height=max_y - min_y)

    @classmethod
    def from_sequence(cls, values: Sequence[float]) -> "NormalizedRect":
        """Create from [min_x, min_y, width, height]."""
        if len(values) != 4:
            raise ValueError(f"Expected 4 values for a rect, got {len(values)}")
        return cls(*(float(v) for v in values))


@dataclass(frozen=True)
class PixelRect:
    """
    A rectangle in pixel coordinates, top-left origin.

    Attributes:
        x: Left edge.
        y: Top edge.
        width: Width in pixels.
        height: Height in pixels.
    """
    x: float
    y: float
    width: float
    height: float

    @property
    def x2(self) -> float:
        return self.x + self.width

    @property
    def y2(self) -> float:
        return self.y + self.height

    @property
    def center(self) -> Tuple[float, float]:
        return (self.x + self.width / 2, self.y + self.height / 2)

    @property
    def area(self) -> float:
        return self.width * self.height

    def as_tuple(self) -> Tuple[float, float, float, float]:
        """Return as (x, y, width, height) tuple."""
        return (self.x, self.y, self.width, self.height)

    def as_xyxy(self) -> Tuple[float, float, float, float]:
        """Return as (x1, y1, x2, y2) tuple."""
        return (self.x, self.y, self.x2, self.y2)

    def as_int_tuple(self) -> Tuple[int, int, int, int]:
        """Return as integer (x1, y1, x2, y2) tuple, rounded to the nearest pixel."""
        return (round(self.x), round(self.y), round(self.x2), round(self.y2))


def confidence_percent(confidence: float) -> int:
    """Confidence as a whole percentage, halves rounded up (0.125 -> 13)."""
    return int(math.floor(confidence * 100 + 0.5))


def format_caption(label: str, confidence: float) -> str:
    """Overlay caption text, e.g. "dog 87%"."""
    return f"{label} {confidence_percent(confidence)}%"


@dataclass(frozen=True)
class Detection:
    """
    A single recognized object instance.

    Attributes:
        label: Class identifier reported by the detector.
        confidence: Detection confidence score (0-1).
        rect: Bounding box in normalized unit space, bottom-left origin.
    """
    label: str
    confidence: float
    rect: NormalizedRect

    @classmethod
    def create(cls, label: Optional[str], confidence: float, rect: NormalizedRect) -> "Detection":
        """Create a Detection, substituting the "Unknown" label when none is given."""
        return cls(label=label or UNKNOWN_LABEL, confidence=float(confidence), rect=rect)

    @property
    def caption(self) -> str:
        return format_caption(self.label, self.confidence)

    def debug_line(self) -> str:
        return format_debug_line(self)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "label": self.label,
            "confidence": self.confidence,
            "rect": list(self.rect.as_tuple()),
        }

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "Detection":
        """Adapter: Create from {"label", "confidence", "rect": [min_x, min_y, w, h]}."""
        return cls.create(
            label=d.get("label"),
            confidence=d.get("confidence", 1.0),
            rect=NormalizedRect.from_sequence(d["rect"]),
        )


def format_debug_line(detection: Detection) -> str:
    """Inference log line: label, percentage and the raw normalized rect."""
    r = detection.rect
    return (
        f"{detection.label} ({confidence_percent(detection.confidence)}%) rect: "
        f"{r.min_x:.2f},{r.min_y:.2f},{r.width:.2f},{r.height:.2f}"
    )


@dataclass(frozen=True)
class DisplayDetection:
    """A detection projected into display-area pixel coordinates."""
    detection: Detection
    rect: PixelRect

    @property
    def label(self) -> str:
        return self.detection.label

    @property
    def confidence(self) -> float:
        return self.detection.confidence

    @property
    def caption(self) -> str:
        return self.detection.caption


@dataclass(frozen=True)
class PixelDetection:
    """A detection projected into the source image's own pixel coordinates."""
    detection: Detection
    rect: PixelRect

    @property
    def label(self) -> str:
        return self.detection.label

    @property
    def confidence(self) -> float:
        return self.detection.confidence

    @property
    def caption(self) -> str:
        return self.detection.caption
