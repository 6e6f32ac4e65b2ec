"""
Fixture inference backend: returns a fixed detection list for any frame.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, List

import numpy as np

from models.detection import Detection
from .backend import InferenceBackend


class FixtureBackend(InferenceBackend):
    def __init__(self, detections: Iterable[Detection] = ()):
        self._detections = list(detections)

    @classmethod
    def from_config(cls, entries: Iterable[Dict[str, Any]]) -> "FixtureBackend":
        return cls(Detection.from_dict(e) for e in entries)

    def detect(self, frame: np.ndarray) -> List[Detection]:
        return list(self._detections)
