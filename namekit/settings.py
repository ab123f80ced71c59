#!/usr/bin/env python3
"""
NameKit Settings
================
Defaults live in namekit/configs/app.yaml, shipped with the package.

Setting NAMEKIT_CONFIG to another YAML file overlays it on those defaults;
nested sections are merged key by key, so an override file only needs the
values it changes:

    # my-namekit.yaml
    generation:
      max_retries: 50

Values are read with get_setting("generation.max_retries", 1000). The merged
result is cached; call reload_settings() after changing the environment.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Any
import os

import yaml

PACKAGE_ROOT = Path(__file__).resolve().parent
CONFIG_DIR = PACKAGE_ROOT / "configs"
APP_CONFIG_PATH = CONFIG_DIR / "app.yaml"
OVERRIDE_ENV = "NAMEKIT_CONFIG"


def _read_yaml(path: Path) -> dict:
    if not path.exists():
        raise FileNotFoundError(f"Missing settings file: {path}")
    data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Settings file {path} must contain a mapping")
    return data


def _merge(base: dict, override: dict) -> dict:
    merged = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


@lru_cache(maxsize=1)
def load_app_config() -> dict:
    data = _read_yaml(APP_CONFIG_PATH)
    override = os.environ.get(OVERRIDE_ENV)
    if override:
        data = _merge(data, _read_yaml(resolve_path(override)))
    return data


def reload_settings() -> dict:
    """Drop the cached settings and read them again."""
    load_app_config.cache_clear()
    return load_app_config()


def get_setting(path: str, default: Any = None) -> Any:
    """Get nested setting by dotted path."""
    current: Any = load_app_config()
    for part in path.split('.'):
        if not isinstance(current, dict) or part not in current:
            return default
        current = current[part]
    return current


def resolve_path(value: str, base: Path | None = None) -> Path:
    """Resolve a user-supplied path against base (default: the working directory)."""
    if value is None:
        raise ValueError("path value is required")
    path = Path(os.path.expanduser(str(value)))
    if not path.is_absolute():
        path = ((base or Path.cwd()) / path).resolve()
    return path


__all__ = [
    "load_app_config",
    "reload_settings",
    "get_setting",
    "resolve_path",
    "PACKAGE_ROOT",
    "APP_CONFIG_PATH",
    "OVERRIDE_ENV",
]
