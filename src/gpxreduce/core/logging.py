"""
Logging configuration.

We use a YAML logging config (`src/gpxreduce/config/logging.yaml`) and then apply
runtime overrides from settings (e.g., `GPXREDUCE_LOG_LEVEL`).
"""

from __future__ import annotations

import logging.config

from gpxreduce.config.settings import get_logging_config, get_settings


def configure_logging(level: str | None = None) -> None:
    """Configure the Python logging system from packaged YAML config + settings.

    An explicit `level` (e.g. from a `--verbose` CLI flag) wins over settings.
    """
    settings = get_settings()
    config = dict(get_logging_config())

    level = (level or settings.app.log_level).upper()
    config.setdefault("root", {})["level"] = level
    for handler in config.get("handlers", {}).values():
        if isinstance(handler, dict) and "level" in handler:
            handler["level"] = level

    logging.config.dictConfig(config)
