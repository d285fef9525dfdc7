"""
Application settings (Pydantic).

Settings are loaded from `src/geodata/config/defaults.yaml`, then optionally overridden by:
- an external YAML file via `GEODATA_CONFIG_PATH`
- environment variables (`GEODATA_LOG_LEVEL`, `GEODATA_DATA_PATH`)
"""

from __future__ import annotations

import os
from functools import lru_cache
from importlib import resources
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, Field

from geodata.core.env import load_dotenv_if_present


def _read_package_yaml(filename: str) -> dict[str, Any]:
    """Read a YAML file packaged inside `geodata.config`."""
    text = resources.files("geodata.config").joinpath(filename).read_text(encoding="utf-8")
    data = yaml.safe_load(text) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Invalid YAML root object for {filename}; expected a mapping.")
    return data


def _read_yaml_file(path: str | Path) -> dict[str, Any]:
    """Read a YAML file from disk and return its mapping root."""
    data = yaml.safe_load(Path(path).read_text(encoding="utf-8")) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Invalid YAML root object for {path}; expected a mapping.")
    return data


class AppSettings(BaseModel):
    name: str = "GeoData"
    log_level: str = "INFO"


class GeometrySettings(BaseModel):
    earth_radius_km: float = Field(6371.0, gt=0)


class QuerySettings(BaseModel):
    nearest_on_invalid: Literal["skip", "error"] = "skip"


class DataSettings(BaseModel):
    path: str = "data/data.geojson"


class Settings(BaseModel):
    app: AppSettings = Field(default_factory=AppSettings)
    geometry: GeometrySettings = Field(default_factory=GeometrySettings)
    query: QuerySettings = Field(default_factory=QuerySettings)
    data: DataSettings = Field(default_factory=DataSettings)


def _apply_env_overrides(data: dict[str, Any]) -> dict[str, Any]:
    """Overlay selected environment variables onto raw settings payload."""
    data = dict(data)
    log_level = os.getenv("GEODATA_LOG_LEVEL")
    if log_level:
        data.setdefault("app", {})["log_level"] = log_level

    data_path = os.getenv("GEODATA_DATA_PATH")
    if data_path:
        data.setdefault("data", {})["path"] = data_path

    return data


@lru_cache
def get_settings() -> Settings:
    """Load and validate settings (cached)."""
    load_dotenv_if_present()
    config_path = os.getenv("GEODATA_CONFIG_PATH")
    raw = _read_yaml_file(config_path) if config_path else _read_package_yaml("defaults.yaml")
    raw = _apply_env_overrides(raw)
    return Settings.model_validate(raw)


@lru_cache
def get_logging_config() -> dict[str, Any]:
    """Load logging configuration (cached)."""
    return _read_package_yaml("logging.yaml")
