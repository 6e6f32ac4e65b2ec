"""
Image decoding and bounding-box annotation.

Frames are kept in memory as upright BGR numpy arrays (the OpenCV
convention). Decoding goes through Pillow so that EXIF orientation from phone
photos is applied before any pixel rectangle is computed.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from io import BytesIO
from pathlib import Path
from typing import Any, Dict, Iterable, Sequence, Tuple, Union

import cv2
import numpy as np
from PIL import Image, ImageOps

from geometry.projection import to_pixels
from models.detection import Detection, PixelDetection


@dataclass(frozen=True)
class OverlayStyle:
    """
    Stroke settings for burned-in boxes.

    Attributes:
        stroke_width: Rectangle outline thickness in pixels.
        color: Outline color as (R, G, B).
        draw_labels: Also draw the caption above each box.
    """
    stroke_width: int = 4
    color: Tuple[int, int, int] = (255, 0, 0)
    draw_labels: bool = False

    @property
    def bgr(self) -> Tuple[int, int, int]:
        r, g, b = self.color
        return (int(b), int(g), int(r))

    @classmethod
    def from_config(cls, overlay_cfg: Dict[str, Any]) -> "OverlayStyle":
        color = overlay_cfg.get("color", [255, 0, 0])
        return cls(
            stroke_width=int(overlay_cfg.get("stroke_width", 4)),
            color=(int(color[0]), int(color[1]), int(color[2])),
            draw_labels=bool(overlay_cfg.get("draw_labels", False)),
        )


def normalize_orientation(image: Image.Image) -> Image.Image:
    """
    Return an upright copy of image with no orientation metadata left.

    Idempotent: an image that is already upright comes back unchanged.
    """
    return ImageOps.exif_transpose(image)


def _pil_to_bgr(image: Image.Image) -> np.ndarray:
    if image.mode != "RGB":
        image = image.convert("RGB")
    rgb = np.asarray(image, dtype=np.uint8)
    return cv2.cvtColor(rgb, cv2.COLOR_RGB2BGR)


def decode_image(data: bytes) -> np.ndarray:
    """Decode encoded image bytes into an upright BGR array."""
    try:
        with Image.open(BytesIO(data)) as img:
            img.load()
            upright = normalize_orientation(img)
            return _pil_to_bgr(upright)
    except Exception as exc:
        raise ValueError("Invalid image bytes") from exc


def load_image_file(path: Union[str, Path]) -> np.ndarray:
    """Load an image file into an upright BGR array."""
    with Image.open(path) as img:
        img.load()
        return _pil_to_bgr(normalize_orientation(img))


def encode_png(frame: np.ndarray) -> bytes:
    ok, buf = cv2.imencode(".png", frame)
    if not ok:
        raise RuntimeError("Failed to encode PNG")
    return buf.tobytes()


def encode_jpeg(frame: np.ndarray, quality: int = 90) -> bytes:
    ok, buf = cv2.imencode(".jpg", frame, [int(cv2.IMWRITE_JPEG_QUALITY), int(quality)])
    if not ok:
        raise RuntimeError("Failed to encode JPEG")
    return buf.tobytes()


def _draw_caption(canvas: np.ndarray, text: str, x1: int, y1: int, color: Tuple[int, int, int]) -> None:
    font = cv2.FONT_HERSHEY_SIMPLEX
    font_scale = 0.5
    thickness = 1
    (text_w, text_h), _ = cv2.getTextSize(text, font, font_scale, thickness)
    top = max(y1 - text_h - 6, 0)
    cv2.rectangle(canvas, (x1, top), (x1 + text_w + 4, top + text_h + 6), color, -1)
    cv2.putText(canvas, text, (x1 + 2, top + text_h + 2), font, font_scale, (255, 255, 255), thickness)


def _clip(value: float, low: int, high: int) -> int:
    return int(round(min(max(value, low), high)))


def annotate_image(
    frame: np.ndarray,
    detections: Sequence[PixelDetection],
    style: OverlayStyle = OverlayStyle(),
) -> np.ndarray:
    """
    Stroke each pixel detection onto a copy of frame.

    The input array is left untouched.
    """
    canvas = frame.copy()
    color = style.bgr
    h, w = canvas.shape[:2]
    # Corners beyond the canvas by more than the stroke are never visible.
    pad = style.stroke_width + 1
    for det in detections:
        if not all(math.isfinite(v) for v in det.rect.as_tuple()):
            logging.warning(f"Skipping non-finite box for {det.label}: {det.rect}")
            continue
        x1, y1, x2, y2 = (
            _clip(det.rect.x, -pad, w + pad),
            _clip(det.rect.y, -pad, h + pad),
            _clip(det.rect.x2, -pad, w + pad),
            _clip(det.rect.y2, -pad, h + pad),
        )
        cv2.rectangle(canvas, (x1, y1), (x2, y2), color, style.stroke_width)
        if style.draw_labels:
            _draw_caption(canvas, det.caption, x1, y1, color)
    return canvas


def render_debug_image(
    frame: np.ndarray,
    detections: Iterable[Detection],
    style: OverlayStyle = OverlayStyle(),
) -> bytes:
    """Project detections into the frame's pixel space, annotate and encode as PNG."""
    h, w = frame.shape[:2]
    pixel_dets = to_pixels(detections, (w, h))
    return encode_png(annotate_image(frame, pixel_dets, style))
