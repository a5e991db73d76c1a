"""Application logging helpers.

Every module logger lives under the ``locallibrary`` namespace
(``get_logger("routes.books")`` -> ``locallibrary.routes.books``). Only the
namespace root carries a handler and a level; module loggers propagate to it.
"""
from __future__ import annotations

import logging
import threading
from typing import Optional

from locallibrary import config as app_config

ROOT_LOGGER_NAME = app_config.APP_NAME
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"

_LOCK = threading.Lock()
_root_logger: Optional[logging.Logger] = None


def qualified_name(name: str) -> str:
    if name == ROOT_LOGGER_NAME or name.startswith(ROOT_LOGGER_NAME + "."):
        return name
    return f"{ROOT_LOGGER_NAME}.{name}"


def _configure_root() -> logging.Logger:
    global _root_logger
    if _root_logger is not None:
        return _root_logger
    with _LOCK:
        if _root_logger is None:
            logger = logging.getLogger(ROOT_LOGGER_NAME)
            logger.setLevel(getattr(logging, app_config.log_level_name(), logging.INFO))
            if not logger.handlers:
                handler = logging.StreamHandler()
                handler.setFormatter(logging.Formatter(LOG_FORMAT))
                logger.addHandler(handler)
            logger.propagate = False
            _root_logger = logger
    return _root_logger


def get_logger(name: str = ROOT_LOGGER_NAME) -> logging.Logger:
    root = _configure_root()
    qualified = qualified_name(name)
    if qualified == root.name:
        return root
    return logging.getLogger(qualified)


__all__ = ["ROOT_LOGGER_NAME", "LOG_FORMAT", "qualified_name", "get_logger"]
