"""
Inference backend interface.

Backends return detections with normalized, bottom-left-origin rectangles,
independent of the frame's pixel size.
"""

from __future__ import annotations

from typing import List, Protocol

import numpy as np

from models.detection import Detection


class InferenceBackend(Protocol):
    def detect(self, frame: np.ndarray) -> List[Detection]:
        ...
