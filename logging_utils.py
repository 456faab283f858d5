"""Tagged console logging for knobring.

Every module logs through ``log_event`` so output reads as
``[LEVEL][Tag] message | key=value``.
"""
from __future__ import annotations

import logging
from typing import Any

_LOGGER_NAME = "knobring"
_FORMAT = "[%(levelname)s][%(tag)s] %(message)s"


def _build_logger() -> logging.Logger:
    logger = logging.getLogger(_LOGGER_NAME)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(_FORMAT))
        logger.addHandler(handler)
        logger.setLevel(logging.INFO)
    return logger


def _level(name: str | None) -> int:
    level = getattr(logging, (name or "INFO").upper(), None)
    return level if isinstance(level, int) else logging.INFO


class _TagAdapter(logging.LoggerAdapter):
    """Moves the ``tag`` keyword into ``extra`` for the formatter."""

    def process(self, msg: Any, kwargs: dict[str, Any]):
        extra = dict(kwargs.get("extra") or {})
        extra["tag"] = kwargs.pop("tag", "App")
        kwargs["extra"] = extra
        return msg, kwargs


_logger = _build_logger()
_adapter = _TagAdapter(_logger, {})


def get_logger() -> logging.Logger:
    return _logger


def log_event(level: str, tag: str, message: str, **fields: Any) -> None:
    if fields:
        message += " | " + " ".join(f"{key}={value}" for key, value in fields.items())
    _adapter.log(_level(level), message, tag=tag)


def set_log_level(level: str) -> None:
    """DEBUG / INFO / WARNING / ERROR; anything else means INFO."""
    _logger.setLevel(_level(level))


def get_log_level() -> str:
    return logging.getLevelName(_logger.level)
