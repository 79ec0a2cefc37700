"""Structured logging helpers shared across the backend."""

from __future__ import annotations

import json
import logging
from typing import Any, Mapping

__all__ = ["StructuredFormatter", "configure_logging", "get_logger"]

ROOT_LOGGER_NAME = "backend"
DEFAULT_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"

# Attributes present on every LogRecord; anything else arrived through `extra`.
_RESERVED_ATTRS = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", None, None)).keys()
) | {"message", "asctime"}


def get_logger(name: str) -> logging.Logger:
    """Return a module logger."""

    return logging.getLogger(name)


class StructuredFormatter(logging.Formatter):
    """Render `extra={...}` fields after the event name.

    With ``as_json`` each record becomes one JSON object per line, otherwise
    the extras are appended as ``key=value`` pairs.
    """

    def __init__(self, *, as_json: bool = False, fmt: str = DEFAULT_FORMAT) -> None:
        super().__init__(fmt=fmt)
        self._as_json = as_json

    def format(self, record: logging.LogRecord) -> str:
        extras = _extract_extras(record)
        if self._as_json:
            payload: dict[str, Any] = {
                "timestamp": self.formatTime(record),
                "level": record.levelname,
                "logger": record.name,
                "event": record.getMessage(),
                **extras,
            }
            if record.exc_info:
                payload["exc_info"] = self.formatException(record.exc_info)
            return json.dumps(payload, default=str)
        base = super().format(record)
        if not extras:
            return base
        rendered = " ".join(f"{key}={value!r}" for key, value in extras.items())
        return f"{base} {rendered}"


def configure_logging(config: Mapping[str, Any] | None = None) -> logging.Logger:
    """Install the structured formatter on the backend logger tree."""

    config = config or {}
    level_name = str(config.get("level", "INFO")).upper()
    level = logging.getLevelName(level_name)
    if not isinstance(level, int):
        raise RuntimeError(f"Unknown log level '{level_name}'")

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(level)
    for handler in list(logger.handlers):
        if getattr(handler, "_bitacora_handler", False):
            logger.removeHandler(handler)
    handler = logging.StreamHandler()
    handler.setFormatter(StructuredFormatter(as_json=bool(config.get("json"))))
    handler._bitacora_handler = True  # type: ignore[attr-defined]
    logger.addHandler(handler)
    return logger


def _extract_extras(record: logging.LogRecord) -> dict[str, Any]:
    return {
        key: value
        for key, value in vars(record).items()
        if key not in _RESERVED_ATTRS and not key.startswith("_")
    }
