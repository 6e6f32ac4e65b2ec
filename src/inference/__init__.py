"""
Detector backends.
"""

from typing import Any, Dict

from .backend import InferenceBackend
from .cpu_backend import CpuYoloConfig, UltralyticsCpuBackend
from .fixture_backend import FixtureBackend


def create_backend_from_config(detection_cfg: Dict[str, Any]) -> InferenceBackend:
    """Build the detector named by detection.backend ("yolo" or "fixture")."""
    backend = detection_cfg.get("backend", "yolo")
    if backend == "yolo":
        return UltralyticsCpuBackend(CpuYoloConfig.from_dict(detection_cfg.get("yolo", {}) or {}))
    if backend == "fixture":
        return FixtureBackend.from_config(detection_cfg.get("fixture") or [])
    raise ValueError(f"Unknown detection backend: {backend}")


__all__ = [
    "InferenceBackend",
    "CpuYoloConfig",
    "UltralyticsCpuBackend",
    "FixtureBackend",
    "create_backend_from_config",
]
