"""YAML loader for the config subsystem.

``load_app_config`` consumes one YAML file, validates it via models.py and
returns a typed :class:`AppConfig`. Every section is optional so a blank file
yields a working configuration pointing at a local dashboard.
"""
from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict, Mapping

import yaml

from .models import AppConfig

_DEFAULT_CONFIG_DIR = Path("config")
CONFIG_PATH_ENV = "TV_DISPLAY_CONFIG"
BASE_URL_ENV = "DASHBOARD_BASE_URL"


def _read_yaml(path: Path) -> Mapping:
    """Read a YAML file and return a mapping (empty dict if file is blank)."""

    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")
    with path.open("r", encoding="utf-8") as fp:
        data = yaml.safe_load(fp) or {}
    if not isinstance(data, Mapping):
        raise ValueError(f"YAML root must be a mapping in {path}")
    return data


def resolve_config_path(default: Path | str = _DEFAULT_CONFIG_DIR / "display.yml") -> Path:
    """Return the config path, honoring the ``TV_DISPLAY_CONFIG`` override."""

    env_path = os.environ.get(CONFIG_PATH_ENV)
    if env_path:
        return Path(env_path)
    return Path(default)


def load_app_config(path: Path | str = _DEFAULT_CONFIG_DIR / "display.yml") -> AppConfig:
    """Load display.yml (dashboard, polling, display, telemetry sections).

    ``DASHBOARD_BASE_URL`` in the environment replaces ``dashboard.base_url``
    so the same file can be shipped to several shops.
    """

    data: Dict[str, Any] = dict(_read_yaml(Path(path)))
    base_url = os.environ.get(BASE_URL_ENV)
    if base_url:
        dashboard = dict(data.get("dashboard") or {})
        dashboard["base_url"] = base_url
        data["dashboard"] = dashboard
    return AppConfig.model_validate(data)
