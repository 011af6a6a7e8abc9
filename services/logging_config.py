"""
Logging setup for the ticket service.

Console output always; with LOG_DIR set, three files as well:
- error.log: ERROR and above
- warnings.log: WARNING and above
- info.log: INFO and above

Modules log through `logging.getLogger(__name__)` and attach context such as the
transaction id with `extra={...}`.
"""

from __future__ import annotations

import logging
import logging.config
from typing import Any, Dict

from services.settings import Settings

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

_FILE_LEVELS = {
    "error": "ERROR",
    "warnings": "WARNING",
    "info": "INFO",
}


def build_logging_config(settings: Settings) -> Dict[str, Any]:
    handlers: Dict[str, Dict[str, Any]] = {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "default",
            "level": settings.log_level,
        },
    }

    if settings.log_dir is not None:
        for name, level in _FILE_LEVELS.items():
            handlers[f"{name}_file"] = {
                "class": "logging.FileHandler",
                "formatter": "default",
                "level": level,
                "filename": str(settings.log_dir / f"{name}.log"),
                "encoding": "utf-8",
                "delay": True,
            }

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {"default": {"format": LOG_FORMAT}},
        "handlers": handlers,
        "root": {
            "level": settings.log_level,
            "handlers": list(handlers),
        },
    }


def configure_logging(settings: Settings) -> None:
    """Install handlers on the root logger. Test environments are silenced."""

    if settings.is_test:
        logging.disable(logging.CRITICAL)
        return

    if settings.log_dir is not None:
        settings.log_dir.mkdir(parents=True, exist_ok=True)

    logging.config.dictConfig(build_logging_config(settings))


__all__ = ["LOG_FORMAT", "build_logging_config", "configure_logging"]
