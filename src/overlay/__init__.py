"""
Burned-in annotation of detections and the debug image artifact.
"""

from .annotate import (
    OverlayStyle,
    annotate_image,
    decode_image,
    encode_jpeg,
    encode_png,
    load_image_file,
    normalize_orientation,
    render_debug_image,
)
from .debug_store import DebugImageStore

__all__ = [
    "OverlayStyle",
    "annotate_image",
    "decode_image",
    "encode_jpeg",
    "encode_png",
    "load_image_file",
    "normalize_orientation",
    "render_debug_image",
    "DebugImageStore",
]
