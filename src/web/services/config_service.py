from __future__ import annotations

import os
from typing import Any, Dict, Optional

import yaml


class ConfigService:
    """
    Layered config:
    - config/default.yaml (checked in)
    - config/config.yaml (local overrides)
    - an explicit path, when given (applied last)
    """

    DEFAULT_NAME = "default.yaml"
    OVERRIDES_NAME = "config.yaml"

    @staticmethod
    def deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
        """Recursively merge override into base and return base."""
        for k, v in (override or {}).items():
            if isinstance(v, dict) and isinstance(base.get(k), dict):
                ConfigService.deep_merge(base[k], v)
            else:
                base[k] = v
        return base

    @staticmethod
    def read_yaml(path: str) -> Dict[str, Any]:
        if not os.path.exists(path):
            return {}
        with open(path, "r") as f:
            return yaml.safe_load(f) or {}

    @staticmethod
    def load_effective_config(config_dir: str = "config", explicit_path: Optional[str] = None) -> Dict[str, Any]:
        merged = ConfigService.read_yaml(os.path.join(config_dir, ConfigService.DEFAULT_NAME))
        overrides_path = os.path.join(config_dir, ConfigService.OVERRIDES_NAME)
        merged = ConfigService.deep_merge(merged, ConfigService.read_yaml(overrides_path))

        if explicit_path and os.path.abspath(explicit_path) != os.path.abspath(overrides_path):
            merged = ConfigService.deep_merge(merged, ConfigService.read_yaml(explicit_path))
        return merged

    @staticmethod
    def save_overrides(overrides: Dict[str, Any], config_dir: str = "config") -> None:
        os.makedirs(config_dir or ".", exist_ok=True)
        with open(os.path.join(config_dir, ConfigService.OVERRIDES_NAME), "w") as f:
            yaml.safe_dump(overrides or {}, f, sort_keys=False)
