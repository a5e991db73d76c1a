"""Database layer root.

Engine/session management plus the storage error types raised by the
repositories.
"""

from .engine import (
    init_engine_once,
    get_engine,
    get_session_factory,
    get_scoped_session,
    app_session,
)
from .errors import StoreError, RecordInUseError

__all__ = [
    "init_engine_once",
    "get_engine",
    "get_session_factory",
    "get_scoped_session",
    "app_session",
    "StoreError",
    "RecordInUseError",
]
