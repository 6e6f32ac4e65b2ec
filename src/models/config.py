"""
Typed configuration models matching the YAML config structure.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union


@dataclass
class CameraConfig:
    """Capture source configuration."""
    backend: str = "opencv"
    device_id: Union[int, str] = 0
    resolution: List[int] = field(default_factory=lambda: [1280, 720])
    fps: int = 30
    fixture_image: Optional[str] = None
    swap_rb: bool = False
    rotate: int = 0
    flip_horizontal: bool = False
    flip_vertical: bool = False

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "CameraConfig":
        """Adapter: Create from config dictionary."""
        return cls(
            backend=d.get("backend", "opencv"),
            device_id=d.get("device_id", 0),
            resolution=d.get("resolution", [1280, 720]),
            fps=d.get("fps", 30),
            fixture_image=d.get("fixture_image"),
            swap_rb=d.get("swap_rb", False),
            rotate=d.get("rotate", 0) or 0,
            flip_horizontal=d.get("flip_horizontal", False),
            flip_vertical=d.get("flip_vertical", False),
        )

    def to_dict(self) -> Dict[str, Any]:
        d: Dict[str, Any] = {
            "backend": self.backend,
            "device_id": self.device_id,
            "resolution": self.resolution,
            "fps": self.fps,
            "swap_rb": self.swap_rb,
            "rotate": self.rotate,
            "flip_horizontal": self.flip_horizontal,
            "flip_vertical": self.flip_vertical,
        }
        if self.fixture_image is not None:
            d["fixture_image"] = self.fixture_image
        return d


@dataclass
class YoloConfig:
    """YOLO detector configuration."""
    model: str = ""
    conf_threshold: float = 0.25
    iou_threshold: float = 0.45
    classes: Optional[List[int]] = None
    class_name_overrides: Optional[Dict[int, str]] = None

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "YoloConfig":
        return cls(
            model=d.get("model", ""),
            conf_threshold=d.get("conf_threshold", 0.25),
            iou_threshold=d.get("iou_threshold", 0.45),
            classes=d.get("classes"),
            class_name_overrides=d.get("class_name_overrides"),
        )

    def to_dict(self) -> Dict[str, Any]:
        d: Dict[str, Any] = {
            "model": self.model,
            "conf_threshold": self.conf_threshold,
            "iou_threshold": self.iou_threshold,
        }
        if self.classes is not None:
            d["classes"] = self.classes
        if self.class_name_overrides is not None:
            d["class_name_overrides"] = self.class_name_overrides
        return d


@dataclass
class DetectionConfig:
    """Detector configuration."""
    backend: str = "yolo"
    yolo: Optional[YoloConfig] = None
    fixture: List[Dict[str, Any]] = field(default_factory=list)

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "DetectionConfig":
        yolo_dict = d.get("yolo")
        yolo = YoloConfig.from_dict(yolo_dict) if yolo_dict else None
        return cls(
            backend=d.get("backend", "yolo"),
            yolo=yolo,
            fixture=list(d.get("fixture") or []),
        )

    def to_dict(self) -> Dict[str, Any]:
        d: Dict[str, Any] = {"backend": self.backend}
        if self.yolo:
            d["yolo"] = self.yolo.to_dict()
        if self.fixture:
            d["fixture"] = self.fixture
        return d


@dataclass
class DisplayConfig:
    """Initial display area and preview geometry."""
    width: int = 390
    height: int = 844
    image_area_ratio: float = 0.9
    preview_aspect: float = 4.0 / 3.0

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "DisplayConfig":
        return cls(
            width=d.get("width", 390),
            height=d.get("height", 844),
            image_area_ratio=d.get("image_area_ratio", 0.9),
            preview_aspect=d.get("preview_aspect", 4.0 / 3.0),
        )

    @property
    def image_area(self) -> tuple[float, float]:
        """The portion of the display given to the image (full width, ratio of the height)."""
        return (float(self.width), self.height * self.image_area_ratio)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "width": self.width,
            "height": self.height,
            "image_area_ratio": self.image_area_ratio,
            "preview_aspect": self.preview_aspect,
        }


@dataclass
class OverlayConfig:
    """Annotation style for the debug image."""
    stroke_width: int = 4
    color: List[int] = field(default_factory=lambda: [255, 0, 0])
    draw_labels: bool = False

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "OverlayConfig":
        return cls(
            stroke_width=d.get("stroke_width", 4),
            color=d.get("color", [255, 0, 0]),
            draw_labels=d.get("draw_labels", False),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "stroke_width": self.stroke_width,
            "color": self.color,
            "draw_labels": self.draw_labels,
        }


@dataclass
class StorageConfig:
    """Storage configuration."""
    debug_image_path: str = "data/debug_bbox.png"

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "StorageConfig":
        return cls(debug_image_path=d.get("debug_image_path", "data/debug_bbox.png"))

    def to_dict(self) -> Dict[str, Any]:
        return {"debug_image_path": self.debug_image_path}


@dataclass
class WebConfig:
    """HTTP server configuration."""
    host: str = "0.0.0.0"
    port: int = 5000

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "WebConfig":
        return cls(host=d.get("host", "0.0.0.0"), port=d.get("port", 5000))

    def to_dict(self) -> Dict[str, Any]:
        return {"host": self.host, "port": self.port}


@dataclass
class Config:
    """
    Complete application configuration.

    This is a typed representation of the YAML config structure.
    """
    camera: CameraConfig = field(default_factory=CameraConfig)
    detection: DetectionConfig = field(default_factory=DetectionConfig)
    display: DisplayConfig = field(default_factory=DisplayConfig)
    overlay: OverlayConfig = field(default_factory=OverlayConfig)
    storage: StorageConfig = field(default_factory=StorageConfig)
    web: WebConfig = field(default_factory=WebConfig)
    log_path: str = "logs/vision_overlay.log"
    log_level: str = "INFO"

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "Config":
        """Adapter: Create Config from raw dictionary (e.g., from load_config)."""
        return cls(
            camera=CameraConfig.from_dict(d.get("camera", {}) or {}),
            detection=DetectionConfig.from_dict(d.get("detection", {}) or {}),
            display=DisplayConfig.from_dict(d.get("display", {}) or {}),
            overlay=OverlayConfig.from_dict(d.get("overlay", {}) or {}),
            storage=StorageConfig.from_dict(d.get("storage", {}) or {}),
            web=WebConfig.from_dict(d.get("web", {}) or {}),
            log_path=d.get("log_path", "logs/vision_overlay.log"),
            log_level=d.get("log_level", "INFO"),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert back to dictionary."""
        return {
            "camera": self.camera.to_dict(),
            "detection": self.detection.to_dict(),
            "display": self.display.to_dict(),
            "overlay": self.overlay.to_dict(),
            "storage": self.storage.to_dict(),
            "web": self.web.to_dict(),
            "log_path": self.log_path,
            "log_level": self.log_level,
        }
