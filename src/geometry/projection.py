"""
Projection of normalized detection rectangles into pixel spaces.

Detectors report rectangles in unit space with a bottom-left origin. Both the
on-screen overlay and the burned-in debug image need top-left pixel
rectangles; they differ only in the target frame (the display FitRect versus
the full image), so both go through project_rect.
"""

from __future__ import annotations

from typing import Iterable, List, Tuple, Union

from models.detection import (
    Detection,
    DisplayDetection,
    NormalizedRect,
    PixelDetection,
    PixelRect,
)
from .fit import FitRect

Frame = Union[FitRect, PixelRect, Tuple[float, float, float, float]]


def _frame_tuple(frame: Frame) -> Tuple[float, float, float, float]:
    if isinstance(frame, (FitRect, PixelRect)):
        return (frame.x, frame.y, frame.width, frame.height)
    fx, fy, fw, fh = frame
    return (fx, fy, fw, fh)


def project_rect(rect: NormalizedRect, frame: Frame) -> PixelRect:
    """
    Map a unit-space, bottom-left rect into a top-left pixel frame.

    The top edge in unit space is 1 - max_y once the vertical axis is flipped.
    Values outside [0, 1] are passed through unclamped.
    """
    fx, fy, fw, fh = _frame_tuple(frame)
    return PixelRect(
        x=fx + rect.min_x * fw,
        y=fy + (1.0 - rect.max_y) * fh,
        width=rect.width * fw,
        height=rect.height * fh,
    )


def unproject_rect(rect: PixelRect, frame: Frame) -> NormalizedRect:
    """Inverse of project_rect: pixel rect inside frame back to unit space."""
    fx, fy, fw, fh = _frame_tuple(frame)
    width = rect.width / fw
    height = rect.height / fh
    top = (rect.y - fy) / fh
    return NormalizedRect(
        min_x=(rect.x - fx) / fw,
        min_y=1.0 - top - height,
        width=width,
        height=height,
    )


def to_display(detections: Iterable[Detection], fit_rect: FitRect) -> List[DisplayDetection]:
    """Project detections into display-area coordinates inside fit_rect."""
    if fit_rect.placeholder:
        raise ValueError("Cannot project detections into a placeholder fit rect")
    return [DisplayDetection(detection=d, rect=project_rect(d.rect, fit_rect)) for d in detections]


def to_pixels(detections: Iterable[Detection], image_size: Tuple[float, float]) -> List[PixelDetection]:
    """Project detections into the source image's own pixel coordinates."""
    iw, ih = image_size
    frame = (0.0, 0.0, float(iw), float(ih))
    return [PixelDetection(detection=d, rect=project_rect(d.rect, frame)) for d in detections]
