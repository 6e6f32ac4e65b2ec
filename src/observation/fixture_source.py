"""
Fixture-backed photo source.

Returns the same still image on every read. Used for previews, demos and
tests in place of camera hardware.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Any, Dict, Optional

import numpy as np

from models.frame import FrameData
from overlay.annotate import load_image_file
from .base import ObservationSource, ObservationConfig

PLACEHOLDER_SIZE = (640, 480)
PLACEHOLDER_GRAY = 200


@dataclass
class FixtureSourceConfig(ObservationConfig):
    """
    Attributes:
        image_path: Still image to serve. When missing or unreadable a blank
            placeholder frame is served instead.
    """
    image_path: Optional[str] = None

    @classmethod
    def from_camera_config(cls, camera_cfg: Dict[str, Any], source_id: str = "fixture") -> "FixtureSourceConfig":
        return cls(source_id=source_id, image_path=camera_cfg.get("fixture_image"))


def placeholder_frame(size=PLACEHOLDER_SIZE) -> np.ndarray:
    w, h = size
    return np.full((h, w, 3), PLACEHOLDER_GRAY, dtype=np.uint8)


class FixtureSource(ObservationSource):
    def __init__(self, config: FixtureSourceConfig, image: Optional[np.ndarray] = None):
        super().__init__(config)
        self._fixture_config = config
        self._image = image

    def open(self) -> None:
        if self._image is None:
            self._image = self._load()
        self._is_open = True
        self._frame_index = 0
        logging.info(
            f"FixtureSource opened: source_id={self.source_id}, "
            f"size={self._image.shape[1]}x{self._image.shape[0]}"
        )

    def _load(self) -> np.ndarray:
        path = self._fixture_config.image_path
        if not path or not os.path.exists(path):
            logging.warning(f"Fixture image not found ({path}), using placeholder frame")
            return placeholder_frame()
        try:
            return load_image_file(path)
        except OSError as e:
            logging.warning(f"Fixture image unreadable ({path}): {e}, using placeholder frame")
            return placeholder_frame()

    def read(self) -> Optional[FrameData]:
        if not self._is_open or self._image is None:
            return None
        self._frame_index += 1
        return FrameData.from_numpy(self._image.copy(), frame_index=self._frame_index, source=self.source_id)

    def close(self) -> None:
        self._is_open = False
