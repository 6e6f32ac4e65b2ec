#!/usr/bin/env python3
"""
Run the configured detector on one image and write the annotated debug PNG.

Prints one line per detection (label, percentage, normalized rect) plus the
pixel rectangle that was stroked into the output image.

Usage:
    python tools/annotate_image.py photo.jpg
    python tools/annotate_image.py photo.heic --config config/config.yaml --out data/debug_bbox.png
"""

import argparse
import os
import sys

# Add project directory to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "src"))

from geometry.projection import to_pixels  # noqa: E402
from inference import create_backend_from_config  # noqa: E402
from main import load_config, validate_config  # noqa: E402
from ops.logging import setup_logging  # noqa: E402
from overlay.annotate import OverlayStyle, load_image_file, render_debug_image  # noqa: E402
from overlay.debug_store import DebugImageStore  # noqa: E402


def main():
    parser = argparse.ArgumentParser(description="Annotate an image with detector output")
    parser.add_argument("image", help="Path to the input image")
    parser.add_argument("--config", default="config/config.yaml", help="Path to configuration file")
    parser.add_argument("--out", default=None, help="Output PNG (default: storage.debug_image_path)")
    args = parser.parse_args()

    config = load_config(args.config)
    is_valid, error = validate_config(config)
    if not is_valid:
        print(f"Invalid configuration: {error}")
        return 1

    setup_logging(None, config.get("log_level", "INFO"))

    frame = load_image_file(args.image)
    h, w = frame.shape[:2]
    print(f"Image: {args.image} ({w}x{h})")

    backend = create_backend_from_config(config["detection"])
    detections = backend.detect(frame)

    for det in to_pixels(detections, (w, h)):
        x1, y1, x2, y2 = det.rect.as_int_tuple()
        print(f"  {det.detection.debug_line()}  -> px ({x1},{y1})-({x2},{y2})")
    print(f"{len(detections)} detection(s)")

    style = OverlayStyle.from_config(config.get("overlay", {}) or {})
    out_path = args.out or config["storage"]["debug_image_path"]
    written = DebugImageStore(out_path).save(render_debug_image(frame, detections, style))
    print(f"Annotated image written to {written}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
