# src/gpxreduce/config/settings.py
"""
Application settings (Pydantic).

Settings are loaded from `src/gpxreduce/config/defaults.yaml`, then optionally overridden by:
- environment variables (e.g., `GPXREDUCE_INPUT_DIR`, `GPXREDUCE_LOG_LEVEL`)
- an external YAML file via `GPXREDUCE_CONFIG_PATH`

Design rule:
- Settings are read by entrypoints (CLI/API) only. The simplifier and statistics core take
  no configuration; the file-processing layer receives an explicit `ProcessingConfig`.
"""

from __future__ import annotations

import os
from functools import lru_cache
from importlib import resources
from pathlib import Path
from typing import Any
from gpxreduce.core.env import load_dotenv_if_present

import yaml
from pydantic import BaseModel, Field


def _read_package_yaml(filename: str) -> dict[str, Any]:
    """Read a YAML file packaged inside `gpxreduce.config`."""
    text = resources.files("gpxreduce.config").joinpath(filename).read_text(encoding="utf-8")
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
    name: str = "gpxreduce"
    log_level: str = "INFO"


class IoSettings(BaseModel):
    input_dir: str = "input"
    output_dir: str = "output"
    write_gpx: bool = True
    statistics_file: str = "statistics.json"


class GpxSettings(BaseModel):
    creator: str = "gpxreduce"
    speed_extension_suffix: str = "speed"


class Settings(BaseModel):
    app: AppSettings = Field(default_factory=AppSettings)
    io: IoSettings = Field(default_factory=IoSettings)
    gpx: GpxSettings = Field(default_factory=GpxSettings)


def _apply_env_overrides(data: dict[str, Any]) -> dict[str, Any]:
    """Overlay selected environment variables onto raw settings payload."""
    load_dotenv_if_present()
    data = dict(data)

    log_level = os.getenv("GPXREDUCE_LOG_LEVEL")
    if log_level:
        data.setdefault("app", {})["log_level"] = log_level

    input_dir = os.getenv("GPXREDUCE_INPUT_DIR")
    if input_dir:
        data.setdefault("io", {})["input_dir"] = input_dir

    output_dir = os.getenv("GPXREDUCE_OUTPUT_DIR")
    if output_dir:
        data.setdefault("io", {})["output_dir"] = output_dir

    return data


@lru_cache
def get_settings() -> Settings:
    """Load and validate settings (cached)."""
    load_dotenv_if_present()
    config_path = os.getenv("GPXREDUCE_CONFIG_PATH")
    raw = _read_yaml_file(config_path) if config_path else _read_package_yaml("defaults.yaml")
    raw = _apply_env_overrides(raw)
    return Settings.model_validate(raw)


@lru_cache
def get_logging_config() -> dict[str, Any]:
    """Load logging configuration (cached)."""
    return _read_package_yaml("logging.yaml")
