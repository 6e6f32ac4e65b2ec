"""
Pytest configuration and shared fixtures.
"""

import os
import sys

import numpy as np
import pytest

# Add src to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))


@pytest.fixture
def temp_config_dir(tmp_path):
    """Create a temporary config directory with default.yaml."""
    config_dir = tmp_path / "config"
    config_dir.mkdir()

    default_yaml = config_dir / "default.yaml"
    default_yaml.write_text("""
camera:
  backend: "fixture"
  device_id: 0
  resolution: [640, 480]

detection:
  backend: "fixture"
  fixture:
    - label: "cat"
      confidence: 0.5
      rect: [0.1, 0.1, 0.2, 0.2]

display:
  width: 390
  height: 300

storage:
  debug_image_path: "data/debug_bbox.png"

log_path: "logs/test.log"
log_level: "INFO"
""")

    return config_dir


@pytest.fixture
def valid_config(tmp_path):
    """Return a valid configuration dictionary."""
    return {
        "camera": {
            "backend": "fixture",
            "device_id": 0,
            "resolution": [1280, 720],
        },
        "detection": {
            "backend": "fixture",
            "fixture": [
                {"label": "dog", "confidence": 0.87, "rect": [0.2, 0.3, 0.3, 0.3]},
            ],
        },
        "display": {
            "width": 390,
            "height": 300,
            "image_area_ratio": 1.0,
        },
        "overlay": {
            "stroke_width": 2,
            "color": [255, 0, 0],
        },
        "storage": {
            "debug_image_path": str(tmp_path / "data" / "debug_bbox.png"),
        },
        "log_path": "logs/test.log",
        "log_level": "INFO",
    }


@pytest.fixture
def landscape_frame():
    """1200x800 BGR frame (aspect 1.5), mid-gray."""
    return np.full((800, 1200, 3), 128, dtype=np.uint8)
