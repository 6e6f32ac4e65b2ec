"""
Vision Overlay service.

Starts the capture session, the detector and the presenter, then serves the
HTTP API.

Usage:
    python src/main.py --config config/config.yaml

Arguments:
    --config: Path to configuration file
    --host / --port: Override web.host / web.port
"""

import argparse
import logging
import os
import sys
from typing import Any, Dict, Optional, Tuple

import uvicorn

from inference import create_backend_from_config
from models.config import Config
from observation import create_source_from_config
from ops.logging import setup_logging
from overlay.annotate import OverlayStyle
from overlay.debug_store import DebugImageStore
from runtime.presenter import Presenter
from runtime.services import CaptureService, InferenceService
from web.app import create_app
from web.services.config_service import ConfigService

VALID_LOG_LEVELS = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']


def load_config(config_path: str) -> Dict[str, Any]:
    """
    Load configuration with layering:
    - `config/default.yaml` (checked in)
    - `config/config.yaml` (local overrides)
    - plus any explicitly provided `--config` path (treated as overrides)
    """
    try:
        return ConfigService.load_effective_config(
            config_dir=os.path.dirname(config_path) or ".",
            explicit_path=config_path,
        )
    except Exception as e:
        logging.error(f"Failed to load configuration: {e}")
        sys.exit(1)


def _is_positive_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool) and value > 0


def validate_config(config: Dict[str, Any]) -> Tuple[bool, Optional[str]]:
    """
    Validate configuration file structure and values.

    Returns:
        Tuple of (is_valid, error_message)
    """
    required_sections = ['camera', 'detection', 'display', 'storage', 'log_path', 'log_level']
    for section in required_sections:
        if section not in config:
            return False, f"Missing required configuration section: {section}"

    # Camera
    camera = config.get('camera', {}) or {}
    backend = camera.get('backend', 'opencv')
    if backend not in ('opencv', 'fixture'):
        return False, "camera.backend must be one of: opencv, fixture"
    if backend == 'opencv':
        device_id = camera.get('device_id', 0)
        if not isinstance(device_id, (int, str)) or isinstance(device_id, bool):
            return False, "camera.device_id must be an integer (index) or string (URL)"
        if isinstance(device_id, int) and device_id < 0:
            return False, "camera.device_id integer must be non-negative"
    if 'resolution' in camera:
        res = camera['resolution']
        if not isinstance(res, list) or len(res) != 2:
            return False, "camera.resolution must be a list of [width, height]"
        if not all(isinstance(x, int) and x > 0 for x in res):
            return False, "camera.resolution values must be positive integers"
    if 'fps' in camera and camera['fps'] is not None and not _is_positive_number(camera['fps']):
        return False, "camera.fps must be a positive number"
    if camera.get('rotate', 0) not in (0, 90, 180, 270, None):
        return False, "camera.rotate must be one of: 0, 90, 180, 270"

    # Detection
    detection = config.get('detection', {}) or {}
    det_backend = detection.get('backend', 'yolo')
    if det_backend not in ('yolo', 'fixture'):
        return False, "detection.backend must be one of: yolo, fixture"
    if det_backend == 'yolo':
        yolo_cfg = detection.get('yolo', {}) or {}
        if not isinstance(yolo_cfg.get('model'), str) or not yolo_cfg.get('model'):
            return False, "detection.yolo.model is required when detection.backend is 'yolo'"
        for key in ('conf_threshold', 'iou_threshold'):
            if key in yolo_cfg and not isinstance(yolo_cfg[key], (int, float)):
                return False, f"detection.yolo.{key} must be a number"
    else:
        for i, entry in enumerate(detection.get('fixture') or []):
            rect = entry.get('rect') if isinstance(entry, dict) else None
            if not isinstance(rect, list) or len(rect) != 4:
                return False, f"detection.fixture[{i}].rect must be [min_x, min_y, width, height]"

    # Display
    display = config.get('display', {}) or {}
    for key in ('width', 'height'):
        if key in display and not _is_positive_number(display[key]):
            return False, f"display.{key} must be a positive number"
    ratio = display.get('image_area_ratio', 0.9)
    if not isinstance(ratio, (int, float)) or not (0 < ratio <= 1):
        return False, "display.image_area_ratio must be between 0 and 1"
    if 'preview_aspect' in display and not _is_positive_number(display['preview_aspect']):
        return False, "display.preview_aspect must be a positive number"

    # Overlay
    overlay = config.get('overlay', {}) or {}
    if 'stroke_width' in overlay:
        sw = overlay['stroke_width']
        if not isinstance(sw, int) or sw <= 0:
            return False, "overlay.stroke_width must be a positive integer"
    if 'color' in overlay:
        color = overlay['color']
        if not isinstance(color, list) or len(color) != 3 or not all(isinstance(c, int) and 0 <= c <= 255 for c in color):
            return False, "overlay.color must be a list of three integers in 0-255"

    # Storage
    storage = config.get('storage', {}) or {}
    if not isinstance(storage.get('debug_image_path'), str) or not storage.get('debug_image_path'):
        return False, "Missing storage.debug_image_path"

    # Logging
    if config['log_level'] not in VALID_LOG_LEVELS:
        return False, f"log_level must be one of: {', '.join(VALID_LOG_LEVELS)}"

    return True, None


def build_presenter(config: Dict[str, Any]) -> Presenter:
    """Wire capture source, detector, debug store and presenter from config."""
    cfg = Config.from_dict(config)
    capture = CaptureService(create_source_from_config(config['camera']))
    inference = InferenceService(create_backend_from_config(config['detection']))
    return Presenter(
        capture=capture,
        inference=inference,
        debug_store=DebugImageStore(cfg.storage.debug_image_path),
        style=OverlayStyle.from_config(config.get('overlay', {}) or {}),
        display_size=cfg.display.image_area,
        preview_aspect=cfg.display.preview_aspect,
    )


def main():
    parser = argparse.ArgumentParser(description='Vision Overlay - photo detection service')
    parser.add_argument('--config', type=str, default='config/config.yaml',
                        help='Path to configuration file')
    parser.add_argument('--host', type=str, default=None, help='Override web.host')
    parser.add_argument('--port', type=int, default=None, help='Override web.port')
    args = parser.parse_args()

    config = load_config(args.config)

    is_valid, error_msg = validate_config(config)
    if not is_valid:
        logging.error(f"Configuration validation failed: {error_msg}")
        sys.exit(1)

    setup_logging(config['log_path'], config['log_level'])
    logging.info("Starting Vision Overlay")

    web_cfg = config.get('web', {}) or {}
    host = args.host or web_cfg.get('host', '0.0.0.0')
    port = args.port or int(web_cfg.get('port', 5000))

    presenter = None
    try:
        presenter = build_presenter(config)
        try:
            presenter.capture.start()
        except RuntimeError as e:
            # Imports still work without a camera.
            logging.error(f"Capture session failed to start: {e}")

        uvicorn.run(create_app(presenter), host=host, port=port, log_level="info")
    except ImportError as e:
        logging.error(f"Detector backend unavailable: {e}")
        sys.exit(1)
    except KeyboardInterrupt:
        logging.info("Interrupted by user")
    finally:
        if presenter is not None:
            presenter.capture.stop()
            presenter.inference.shutdown(wait=False)
        logging.info("Vision Overlay stopped")


if __name__ == "__main__":
    main()
