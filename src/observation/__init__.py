"""
Observation layer: where photos come from.

Each source implements the ObservationSource interface and returns FrameData
objects. create_source_from_config picks the live or fixture variant.
"""

from typing import Any, Dict

from .base import ObservationSource, ObservationConfig
from .fixture_source import FixtureSource, FixtureSourceConfig
from .opencv_source import OpenCVSource, OpenCVSourceConfig


def create_source_from_config(camera_cfg: Dict[str, Any]) -> ObservationSource:
    """Build the source named by camera.backend ("opencv" or "fixture")."""
    backend = camera_cfg.get("backend", "opencv")
    if backend == "opencv":
        return OpenCVSource(OpenCVSourceConfig.from_camera_config(camera_cfg))
    if backend == "fixture":
        return FixtureSource(FixtureSourceConfig.from_camera_config(camera_cfg))
    raise ValueError(f"Unknown camera backend: {backend}")


__all__ = [
    "ObservationSource",
    "ObservationConfig",
    "FixtureSource",
    "FixtureSourceConfig",
    "OpenCVSource",
    "OpenCVSourceConfig",
    "create_source_from_config",
]
