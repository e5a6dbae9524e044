"""Centralised logging helpers for chainform."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

_LOGGER_CACHE: Dict[str, logging.Logger] = {}

_DEFAULT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def get_logger(name: str = "chainform") -> logging.Logger:
    """Return a cached :class:`logging.Logger` instance."""

    if name not in _LOGGER_CACHE:
        _LOGGER_CACHE[name] = logging.getLogger(name)
    return _LOGGER_CACHE[name]


def configure_logging(level: str = "WARNING", *, fmt: Optional[str] = None) -> logging.Logger:
    """Attach a stream handler to the package root logger.

    Safe to call repeatedly; the handler is only installed once.
    """

    root = get_logger("chainform")
    resolved = logging.getLevelName(str(level).upper())
    if not isinstance(resolved, int):
        resolved = logging.WARNING
    root.setLevel(resolved)
    if not any(getattr(handler, "_chainform_handler", False) for handler in root.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(fmt or _DEFAULT_FORMAT))
        handler._chainform_handler = True  # type: ignore[attr-defined]
        root.addHandler(handler)
    return root


def log_event(
    event: str,
    message: str,
    *,
    level: int = logging.INFO,
    logger: Optional[logging.Logger] = None,
    **data: Any,
) -> None:
    """Emit a structured log entry."""

    target_logger = logger or get_logger()
    target_logger.log(
        level,
        message,
        extra={"chainform_event": event, "chainform_data": data},
    )
