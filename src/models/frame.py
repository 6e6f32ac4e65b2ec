"""
FrameData model for captured or imported photos.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Optional, Tuple

import numpy as np


@dataclass(frozen=True)
class FrameData:
    """
    A still image plus capture metadata.

    Attributes:
        frame: Pixel data as a numpy array (BGR, already upright).
        width: Image width in pixels.
        height: Image height in pixels.
        timestamp: Unix timestamp when the image was captured or imported.
        frame_index: Sequential capture number from the source.
        source: Identifier for the camera/fixture/upload the image came from.
    """
    frame: np.ndarray = field(repr=False, compare=False)
    width: int
    height: int
    timestamp: float
    frame_index: int = 0
    source: Optional[str] = None

    @classmethod
    def from_numpy(
        cls,
        frame: np.ndarray,
        timestamp: Optional[float] = None,
        frame_index: int = 0,
        source: Optional[str] = None,
    ) -> "FrameData":
        """Create FrameData from a numpy array."""
        h, w = frame.shape[:2]
        return cls(
            frame=frame,
            width=w,
            height=h,
            timestamp=time.time() if timestamp is None else timestamp,
            frame_index=frame_index,
            source=source,
        )

    @property
    def shape(self) -> Tuple[int, ...]:
        return self.frame.shape

    @property
    def size(self) -> Tuple[int, int]:
        """Return (width, height)."""
        return (self.width, self.height)
