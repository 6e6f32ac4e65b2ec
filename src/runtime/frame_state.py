"""
The single immutable "current frame" value shown by the presentation layer.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import List, Optional, Tuple

from geometry.fit import DEFAULT_PREVIEW_ASPECT, FitRect, compute_fit_rect, compute_preview_rect
from geometry.projection import to_display
from models.detection import Detection, DisplayDetection, format_debug_line
from models.frame import FrameData


@dataclass(frozen=True)
class CurrentFrame:
    """
    Image + detections + derived overlay rectangles.

    Every update builds a new instance; derived fields are recomputed through
    the geometry core by with_display().
    """
    display_size: Tuple[float, float]
    fit_rect: FitRect
    image: Optional[FrameData] = None
    detections: Tuple[Detection, ...] = ()
    display_detections: Tuple[DisplayDetection, ...] = ()
    is_detecting: bool = False
    request_id: int = 0
    last_error: Optional[str] = None
    preview_aspect: float = DEFAULT_PREVIEW_ASPECT

    @classmethod
    def empty(cls, display_size: Tuple[float, float], preview_aspect: float = DEFAULT_PREVIEW_ASPECT) -> "CurrentFrame":
        return cls(
            display_size=display_size,
            fit_rect=compute_preview_rect(display_size, preview_aspect),
            preview_aspect=preview_aspect,
        )

    @property
    def has_image(self) -> bool:
        return self.image is not None

    def with_display(self, **changes) -> "CurrentFrame":
        """Apply changes, then recompute fit rect and display detections."""
        updated = replace(self, **changes)
        if updated.image is None:
            fit = compute_preview_rect(updated.display_size, updated.preview_aspect)
            return replace(updated, fit_rect=fit, display_detections=())

        fit = compute_fit_rect(updated.image.size, updated.display_size)
        display: Tuple[DisplayDetection, ...] = ()
        if not fit.placeholder:
            display = tuple(to_display(updated.detections, fit))
        return replace(updated, fit_rect=fit, display_detections=display)

    def debug_lines(self) -> List[str]:
        return [format_debug_line(d) for d in self.detections]
