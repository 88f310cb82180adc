# src/trees_api/core/logging/builder.py
"""
Logging builder: create and apply a dictConfig logging configuration.

 - `make_dict_config(settings)` builds a dictConfig-compatible mapping from Settings.
 - `setup_logging(settings)` creates LOG_DIR when files are used, applies the
   mapping and installs a RequestIdFilter on the root logger.

Handler selection:

| LOG_TO_STDOUT | Active handlers                   |
| ------------- | --------------------------------- |
| true          | console + error_console           |
| false         | console + file + error_file       |
"""

from __future__ import annotations

from pathlib import Path
import logging
import logging.config
from trees_api.utils.logging import get_project_name

from .formatters import JsonFormatter, ColorFormatter
from .filters import RequestIdFilter, RedactFilter
from .handlers import (
    get_console_handler,
    get_file_handler,
    get_error_file_handler,
    get_error_console_handler,
)

# Settings type (avoid calling get_settings() here to prevent import-time side effects)
from trees_api.config.settings import Settings


def _loggers(settings: Settings, all_handlers: list[str]) -> dict:
    loggers = {
        "": {"handlers": all_handlers, "level": settings.LOG_LEVEL, "propagate": True},
        "uvicorn.error": {"handlers": all_handlers, "level": settings.LOG_LEVEL, "propagate": False},
    }
    # SQL statements may contain row data; off unless asked for
    sql_level = "INFO" if settings.ENABLE_SQL_LOGGING else "WARNING"
    for name, level in (("uvicorn.access", "INFO"), ("sqlalchemy.engine", sql_level), ("alembic", "INFO")):
        loggers[name] = {"handlers": ["console"], "level": level, "propagate": False}
    return loggers


def make_dict_config(settings: Settings) -> dict:
    """
    Build the dictConfig mapping using the provided settings.

    The returned mapping includes:
      - formatters: "standard" (colored in text mode) and "json"
      - filters: "request_id", "redact"
      - handlers: console plus file/error_file or error_console
      - loggers: root, uvicorn.error, uvicorn.access, sqlalchemy.engine, alembic
    """
    formatters = {
        "standard": {
            "()": ColorFormatter if settings.LOG_FORMAT == "text" else logging.Formatter,
            "format": "%(asctime)s | %(levelname)s | %(name)s | %(request_id)s | %(message)s",
        },
        "json": {
            "()": JsonFormatter,
            "env": settings.ENV,
            "service": get_project_name(),
        },
    }

    filters = {
        "request_id": {"()": RequestIdFilter},
        "redact": {"()": RedactFilter},
    }

    handlers: dict[str, dict] = {"console": get_console_handler(settings)}

    if (not settings.LOG_TO_STDOUT) and settings.LOG_DIR:
        handlers["file"] = get_file_handler(settings)
        handlers["error_file"] = get_error_file_handler(settings)
    else:
        handlers["error_console"] = get_error_console_handler(settings)

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": formatters,
        "filters": filters,
        "handlers": handlers,
        "loggers": _loggers(settings, list(handlers)),
    }


def setup_logging(settings: Settings) -> None:
    """
    Initialize logging from settings. Safe to call more than once; each call
    replaces the previous configuration.
    """
    if (not settings.LOG_TO_STDOUT) and settings.LOG_DIR:
        Path(settings.LOG_DIR).mkdir(parents=True, exist_ok=True)

    logging.config.dictConfig(make_dict_config(settings))

    # Safety net so %(request_id)s never raises for records created on the root logger
    root = logging.getLogger()
    if not any(isinstance(f, RequestIdFilter) for f in root.filters):
        root.addFilter(RequestIdFilter())
