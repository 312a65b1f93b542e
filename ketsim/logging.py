# ketsim/logging.py
from __future__ import annotations

import logging
import os
import sys
from typing import Optional

_FORMAT = "[%(levelname)s] %(name)s: %(message)s"

def _parse_level(level) -> int:
    if isinstance(level, str):
        return getattr(logging, level.upper(), logging.WARNING)
    return int(level)

_DEFAULT_LEVEL = _parse_level(os.getenv("KETSIM_LOG_LEVEL", "WARNING"))

_loggers: dict[str, logging.Logger] = {}

def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return the cached ``ketsim.*`` logger for ``name``.

    >>> from ketsim.logging import get_logger
    >>> log = get_logger(__name__)
    """
    if name is None:
        name = "ketsim"
    logger_name = name if name == "ketsim" or name.startswith("ketsim.") else f"ketsim.{name}"

    if logger_name in _loggers:
        return _loggers[logger_name]

    logger = logging.getLogger(logger_name)
    if not logger.handlers:
        logger.setLevel(_DEFAULT_LEVEL)
        handler = logging.StreamHandler(sys.stderr)
        handler.setLevel(_DEFAULT_LEVEL)
        handler.setFormatter(logging.Formatter(_FORMAT))
        logger.addHandler(handler)
        logger.propagate = False

    _loggers[logger_name] = logger
    return logger

def set_log_level(level: int | str) -> None:
    """Set the level of every ketsim logger, existing and future."""
    global _DEFAULT_LEVEL
    level = _parse_level(level)
    for logger in _loggers.values():
        logger.setLevel(level)
        for handler in logger.handlers:
            handler.setLevel(level)
    _DEFAULT_LEVEL = level

def configure_logging(
    level: int | str = logging.WARNING,
    format_string: Optional[str] = None,
    stream: Optional[object] = None,
) -> None:
    """Replace handlers on all ketsim loggers with one stream handler."""
    global _DEFAULT_LEVEL
    level = _parse_level(level)
    formatter = logging.Formatter(format_string or _FORMAT)
    for logger in _loggers.values():
        logger.setLevel(level)
        for handler in logger.handlers[:]:
            logger.removeHandler(handler)
        handler = logging.StreamHandler(stream or sys.stderr)
        handler.setLevel(level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)
    _DEFAULT_LEVEL = level
