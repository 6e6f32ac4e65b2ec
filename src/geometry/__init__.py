"""
Detection geometry: aspect-fit layout and coordinate projections.

Everything here is pure and synchronous; safe to call from any thread.
"""

from .fit import FitRect, compute_fit_rect, compute_preview_rect, placeholder_rect
from .projection import project_rect, to_display, to_pixels, unproject_rect

__all__ = [
    "FitRect",
    "compute_fit_rect",
    "compute_preview_rect",
    "placeholder_rect",
    "project_rect",
    "to_display",
    "to_pixels",
    "unproject_rect",
]
