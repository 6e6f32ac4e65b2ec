"""
Live camera photo source backed by cv2.VideoCapture.

device_id may be a USB camera index, an RTSP URL or a video file path. A
photo is the newest frame available when read() is called; frames buffered
by the driver since the previous photo are discarded first.
"""

from __future__ import annotations

import logging
import os
import time
from dataclasses import dataclass
from typing import Any, Dict, Optional, Union

import cv2
import numpy as np

from models.frame import FrameData
from .base import ObservationSource, ObservationConfig
from .rtsp_utils import sanitize_url

ROTATIONS = {
    90: cv2.ROTATE_90_CLOCKWISE,
    180: cv2.ROTATE_180,
    270: cv2.ROTATE_90_COUNTERCLOCKWISE,
}


@dataclass
class OpenCVSourceConfig(ObservationConfig):
    """
    Attributes:
        device_id: Camera index (int), RTSP URL or file path (str).
        rtsp_transport: "tcp" or "udp", passed to the FFmpeg backend.
        max_retries: Open attempts before giving up.
        flush_frames: Buffered frames dropped before each photo.
        swap_rb: Swap R/B channels for drivers that deliver RGB.
        rotate: Clockwise rotation in degrees (0, 90, 180, 270).
    """
    device_id: Union[int, str] = 0
    rtsp_transport: str = "tcp"
    max_retries: int = 3
    flush_frames: int = 2
    swap_rb: bool = False
    rotate: int = 0
    flip_horizontal: bool = False
    flip_vertical: bool = False

    @classmethod
    def from_camera_config(cls, camera_cfg: Dict[str, Any], source_id: str = "camera") -> "OpenCVSourceConfig":
        resolution = camera_cfg.get("resolution")
        return cls(
            source_id=source_id,
            resolution=tuple(resolution) if resolution else None,
            fps=camera_cfg.get("fps"),
            device_id=camera_cfg.get("device_id", 0),
            rtsp_transport=camera_cfg.get("rtsp_transport", "tcp"),
            max_retries=int(camera_cfg.get("max_retries", 3)),
            flush_frames=int(camera_cfg.get("flush_frames", 2)),
            swap_rb=bool(camera_cfg.get("swap_rb", False)),
            rotate=camera_cfg.get("rotate") or 0,
            flip_horizontal=bool(camera_cfg.get("flip_horizontal", False)),
            flip_vertical=bool(camera_cfg.get("flip_vertical", False)),
        )


def orient_frame(
    frame: np.ndarray,
    rotate: int = 0,
    flip_horizontal: bool = False,
    flip_vertical: bool = False,
    swap_rb: bool = False,
) -> np.ndarray:
    """Rotate, mirror and channel-swap a camera frame so it comes out upright BGR."""
    if rotate in ROTATIONS:
        frame = cv2.rotate(frame, ROTATIONS[rotate])
    if flip_horizontal and flip_vertical:
        frame = cv2.flip(frame, -1)
    elif flip_horizontal:
        frame = cv2.flip(frame, 1)
    elif flip_vertical:
        frame = cv2.flip(frame, 0)
    if swap_rb:
        frame = np.ascontiguousarray(frame[..., ::-1])
    return frame


class OpenCVSource(ObservationSource):
    def __init__(self, config: OpenCVSourceConfig):
        super().__init__(config)
        self._opencv_config = config
        self._cap: Optional[cv2.VideoCapture] = None

    @property
    def device_id(self) -> Union[int, str]:
        return self._opencv_config.device_id

    @property
    def is_rtsp(self) -> bool:
        return isinstance(self.device_id, str) and self.device_id.startswith(("rtsp://", "rtsps://"))

    @property
    def is_file(self) -> bool:
        return isinstance(self.device_id, str) and not self.is_rtsp and os.path.exists(self.device_id)

    def open(self) -> None:
        if self._is_open:
            return

        cfg = self._opencv_config
        if self.is_rtsp:
            os.environ["OPENCV_FFMPEG_CAPTURE_OPTIONS"] = f"rtsp_transport;{cfg.rtsp_transport}"

        attempts = max(1, cfg.max_retries)
        for attempt in range(1, attempts + 1):
            cap = cv2.VideoCapture(self.device_id)
            if cap.isOpened():
                self._cap = cap
                break
            cap.release()
            if attempt < attempts:
                delay = min(2 ** attempt, 10)
                logging.warning(
                    f"Camera {sanitize_url(self.device_id)} did not open "
                    f"(attempt {attempt}/{attempts}), retrying in {delay}s"
                )
                time.sleep(delay)
        else:
            raise RuntimeError(f"Failed to open camera {sanitize_url(self.device_id)} after {attempts} attempts")

        if isinstance(self.device_id, int) and cfg.resolution:
            w, h = cfg.resolution
            self._cap.set(cv2.CAP_PROP_FRAME_WIDTH, w)
            self._cap.set(cv2.CAP_PROP_FRAME_HEIGHT, h)
            if cfg.fps:
                self._cap.set(cv2.CAP_PROP_FPS, cfg.fps)

        self._is_open = True
        self._frame_index = 0
        logging.info(f"Camera opened: {self.source_id} ({sanitize_url(self.device_id)})")

    def read(self) -> Optional[FrameData]:
        if not self._is_open or self._cap is None:
            return None

        if not self.is_file:
            for _ in range(max(0, self._opencv_config.flush_frames)):
                self._cap.grab()

        ok, frame = self._cap.read()
        if not ok or frame is None:
            logging.warning(f"No frame from {sanitize_url(self.device_id)}")
            return None

        self._frame_index += 1
        return FrameData.from_numpy(self._apply_transforms(frame), frame_index=self._frame_index, source=self.source_id)

    def _apply_transforms(self, frame: np.ndarray) -> np.ndarray:
        cfg = self._opencv_config
        return orient_frame(frame, cfg.rotate, cfg.flip_horizontal, cfg.flip_vertical, cfg.swap_rb)

    def close(self) -> None:
        if self._cap is not None:
            self._cap.release()
            self._cap = None
        if self._is_open:
            logging.info(f"Camera closed: {self.source_id}")
        self._is_open = False
