"""Logging configuration helpers for Waki."""

from __future__ import annotations

import json
import logging
import os
from datetime import datetime, timezone
from logging.config import dictConfig
from typing import Any, Dict


_DEV_ENVIRONMENTS = {"local", "dev", "development", "test"}

COLOR_ENABLED = os.getenv("WAKI_LOG_COLOR", "")
if not COLOR_ENABLED:
    COLOR_ENABLED = "1" if os.getenv("WAKI_ENVIRONMENT", "dev").lower() in _DEV_ENVIRONMENTS else "0"
COLOR_ENABLED = COLOR_ENABLED == "1"

_COLOR_CODES = {
    "red": "\033[31m",
    "yellow": "\033[33m",
    "green": "\033[32m",
}

_RESERVED_ATTRS = {
    "msg", "args", "levelname", "levelno", "pathname", "filename", "module",
    "exc_info", "exc_text", "stack_info", "lineno", "funcName", "created",
    "msecs", "relativeCreated", "thread", "threadName", "processName", "process",
    "taskName", "name",
}


def colorize(text: str, color: str = "red") -> str:
    if not COLOR_ENABLED:
        return text
    prefix = _COLOR_CODES.get(color, "")
    suffix = "\033[0m" if prefix else ""
    return f"{prefix}{text}{suffix}"


class JsonFormatter(logging.Formatter):
    """Single-line JSON records; ``extra=`` fields are carried as top-level keys."""

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key, value in record.__dict__.items():
            if key in _RESERVED_ATTRS or key in payload:
                continue
            payload[key] = value
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False, default=str)


class ColorTextFormatter(logging.Formatter):
    """Human-friendly console output, warnings in yellow and errors in red."""

    def format(self, record: logging.LogRecord) -> str:
        formatted = super().format(record)
        if record.levelno >= logging.ERROR:
            return colorize(formatted, "red")
        if record.levelno >= logging.WARNING:
            return colorize(formatted, "yellow")
        return formatted


def build_logging_config(log_level: str, log_format: str) -> Dict[str, Any]:
    """dictConfig payload with one console handler.

    httpx logs every identity lookup at INFO, so it is held at WARNING.
    """

    if log_format == "text":
        formatter: Dict[str, Any] = {
            "()": ColorTextFormatter,
            "format": "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        }
    else:
        formatter = {"()": JsonFormatter}
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {"console": formatter},
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "console",
                "level": log_level,
            }
        },
        "loggers": {"httpx": {"level": "WARNING"}},
        "root": {"handlers": ["console"], "level": log_level},
    }


def configure_logging() -> None:
    """Configure global logging from environment."""

    environment = os.getenv("WAKI_ENVIRONMENT", "dev").lower()
    default_level = "DEBUG" if environment in _DEV_ENVIRONMENTS else "INFO"
    log_level = os.getenv("WAKI_LOG_LEVEL", default_level).upper()
    log_format = os.getenv("WAKI_LOG_FORMAT", "json").lower()
    dictConfig(build_logging_config(log_level, log_format))


__all__ = [
    "ColorTextFormatter",
    "JsonFormatter",
    "build_logging_config",
    "colorize",
    "configure_logging",
]
