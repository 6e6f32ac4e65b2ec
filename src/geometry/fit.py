"""
Aspect-fit rectangle calculation.

Finds where an image is drawn inside a display area so that it is fully
visible, keeps its aspect ratio and is centered (letterboxed on one axis).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from models.detection import PixelRect

Size = Tuple[float, float]

DEFAULT_PREVIEW_ASPECT = 4.0 / 3.0


@dataclass(frozen=True)
class FitRect:
    """
    Rectangle at which an image is drawn inside the display area.

    Display pixel coordinates, top-left origin. A placeholder covers the whole
    display area and stands in for the "no image" state; it must never be
    used to project detections.
    """
    x: float
    y: float
    width: float
    height: float
    placeholder: bool = False

    @property
    def aspect(self) -> float:
        if self.placeholder or self.height == 0:
            return 1.0
        return self.width / self.height

    def as_pixel_rect(self) -> PixelRect:
        return PixelRect(x=self.x, y=self.y, width=self.width, height=self.height)

    def contains(self, rect: PixelRect, tol: float = 1e-9) -> bool:
        """Whether rect lies entirely inside this fit rect."""
        return (
            rect.x >= self.x - tol
            and rect.y >= self.y - tol
            and rect.x2 <= self.x + self.width + tol
            and rect.y2 <= self.y + self.height + tol
        )


def placeholder_rect(area_size: Size) -> FitRect:
    aw, ah = area_size
    return FitRect(x=0.0, y=0.0, width=float(aw), height=float(ah), placeholder=True)


def _fit_aspect(aspect: float, area_size: Size) -> FitRect:
    aw, ah = float(area_size[0]), float(area_size[1])
    area_aspect = aw / ah

    if aspect > area_aspect:
        # Wider than the area: width is flush, letterbox top and bottom.
        width = aw
        height = aw / aspect
    else:
        height = ah
        width = ah * aspect

    return FitRect(x=(aw - width) / 2, y=(ah - height) / 2, width=width, height=height)


def compute_fit_rect(image_size: Optional[Size], area_size: Size) -> FitRect:
    """
    Aspect-fit an image of image_size (width, height) into area_size.

    Args:
        image_size: Source image (width, height) in pixels, or None when no
            image is available yet.
        area_size: Display area (width, height) in pixels.

    Returns:
        The centered FitRect. Missing images and zero dimensions produce the
        full-area placeholder instead of dividing by zero.
    """
    if image_size is None:
        return placeholder_rect(area_size)

    iw, ih = image_size
    aw, ah = area_size
    if iw == 0 or ih == 0 or aw == 0 or ah == 0:
        return placeholder_rect(area_size)

    return _fit_aspect(iw / ih, area_size)


def compute_preview_rect(area_size: Size, preview_aspect: float = DEFAULT_PREVIEW_ASPECT) -> FitRect:
    """Fit rect for the live camera preview, which has no image of its own yet."""
    aw, ah = area_size
    if aw == 0 or ah == 0 or preview_aspect <= 0:
        return placeholder_rect(area_size)
    return _fit_aspect(preview_aspect, area_size)
