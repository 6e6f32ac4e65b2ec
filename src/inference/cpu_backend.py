"""
CPU inference backend.

Uses Ultralytics if installed. The model reports pixel-space xyxy boxes with
a top-left origin; they are converted to normalized bottom-left rectangles
so every backend speaks the same contract.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence

import numpy as np

from geometry.projection import unproject_rect
from models.detection import Detection, PixelRect
from .backend import InferenceBackend


@dataclass(frozen=True)
class CpuYoloConfig:
    model: str
    conf_threshold: float = 0.25
    iou_threshold: float = 0.45
    classes: Optional[Sequence[int]] = None
    class_name_overrides: Optional[Dict[int, str]] = None

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "CpuYoloConfig":
        return cls(
            model=d["model"],
            conf_threshold=float(d.get("conf_threshold", 0.25)),
            iou_threshold=float(d.get("iou_threshold", 0.45)),
            classes=d.get("classes"),
            class_name_overrides=d.get("class_name_overrides"),
        )


def _to_numpy(values) -> np.ndarray:
    return values.cpu().numpy() if hasattr(values, "cpu") else np.asarray(values)


class UltralyticsCpuBackend(InferenceBackend):
    def __init__(self, cfg: CpuYoloConfig, model: Any = None):
        self.cfg = cfg
        if model is None:
            try:
                from ultralytics import YOLO  # type: ignore
            except Exception as e:  # pragma: no cover
                raise ImportError(
                    "Ultralytics is not installed. Install with `pip install ultralytics` "
                    "or switch detection.backend to 'fixture'."
                ) from e
            model = YOLO(cfg.model)
        self._model = model

    def _class_name(self, class_id: Optional[int], names: Dict[int, str]) -> Optional[str]:
        if class_id is None:
            return None
        return (self.cfg.class_name_overrides or {}).get(class_id) or names.get(class_id)

    def detect(self, frame: np.ndarray) -> List[Detection]:
        results = self._model.predict(
            source=frame,
            conf=self.cfg.conf_threshold,
            iou=self.cfg.iou_threshold,
            classes=list(self.cfg.classes) if self.cfg.classes is not None else None,
            verbose=False,
        )
        if not results:
            return []

        r0 = results[0]
        names = getattr(r0, "names", None) or {}
        boxes = getattr(r0, "boxes", None)
        if boxes is None:
            return []

        h, w = frame.shape[:2]
        image_frame = (0.0, 0.0, float(w), float(h))

        xyxy = _to_numpy(boxes.xyxy)
        conf = _to_numpy(boxes.conf)
        cls = _to_numpy(boxes.cls)

        out: List[Detection] = []
        for (x1, y1, x2, y2), c, k in zip(xyxy, conf, cls):
            class_id = int(k) if k is not None else None
            pixel = PixelRect(x=float(x1), y=float(y1), width=float(x2 - x1), height=float(y2 - y1))
            out.append(
                Detection.create(
                    label=self._class_name(class_id, names),
                    confidence=float(c),
                    rect=unproject_rect(pixel, image_frame),
                )
            )

        return out
