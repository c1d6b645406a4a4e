"""
Logging configuration.

We use a YAML logging config (`src/tripdistance/config/logging.yaml`) and then apply
the level from settings (e.g., `TRIPDISTANCE_LOG_LEVEL`) to the root logger and handlers.
The HTTP client libraries keep their own, quieter levels from the YAML file so request
URLs (which may carry a geocoder key) are not echoed at INFO.
"""

from __future__ import annotations

import logging.config

from tripdistance.config.settings import Settings, get_logging_config, get_settings


def configure_logging(settings: Settings | None = None) -> None:
    """Configure the Python logging system from packaged YAML config + `settings`."""
    settings = settings or get_settings()
    config = dict(get_logging_config())

    level = settings.app.log_level.upper()
    config["root"] = {**config.get("root", {}), "level": level}
    config["handlers"] = {
        name: {**handler, "level": level} if isinstance(handler, dict) and "level" in handler else handler
        for name, handler in config.get("handlers", {}).items()
    }

    logging.config.dictConfig(config)
