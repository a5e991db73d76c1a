"""Database engine & session management for the catalog store."""
from __future__ import annotations

import os, threading
try:  # POSIX file locking for gunicorn multi-worker safety
    import fcntl  # type: ignore
except ImportError:  # pragma: no cover - non-POSIX fallback
    fcntl = None  # type: ignore
from contextlib import contextmanager
from typing import Optional, Iterator, Callable

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.exc import OperationalError, SQLAlchemyError
from sqlalchemy.orm import sessionmaker, scoped_session, Session as SASession
from sqlalchemy.pool import StaticPool

from locallibrary.utils.logging import get_logger
from locallibrary.db.errors import StoreError
from locallibrary.db.models import Base
from locallibrary import config as app_config

_engine: Optional[Engine] = None
_SessionFactory: Optional[Callable[[], SASession]] = None
_scoped: Optional[scoped_session] = None
_LOCK = threading.Lock()

LOG = get_logger("db")


def _enable_sqlite_foreign_keys(dbapi_connection, _connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def _build_engine(db_path: str) -> Engine:
    if db_path == ":memory:":
        # One shared connection, otherwise every pooled connection sees its own empty database.
        engine = create_engine(
            "sqlite://",
            future=True,
            poolclass=StaticPool,
            connect_args={"check_same_thread": False},
        )
    else:
        parent_dir = os.path.dirname(os.path.abspath(db_path)) or "."
        os.makedirs(parent_dir, exist_ok=True)
        if not os.access(parent_dir, os.W_OK):
            raise RuntimeError(f"catalog DB directory not writable: {parent_dir}")
        engine = create_engine(f"sqlite:///{db_path}", future=True)
    event.listen(engine, "connect", _enable_sqlite_foreign_keys)
    return engine


def init_engine_once() -> None:
    global _engine, _SessionFactory, _scoped
    if _engine is not None:
        return
    with _LOCK:
        if _engine is not None:
            return
        db_path = app_config.get_db_path()
        LOG.info("Initializing catalog database engine at %s", db_path)
        _engine = _build_engine(db_path)
        _SessionFactory = sessionmaker(bind=_engine, expire_on_commit=False, class_=SASession)
        _scoped = scoped_session(_SessionFactory)
        if db_path != ":memory:" and fcntl is not None:
            # Several workers may start at once; serialize the DDL.
            lock_path = os.path.join(os.path.dirname(os.path.abspath(db_path)) or ".", ".locallibrary_schema.lock")
            with open(lock_path, "w") as lf:
                try:
                    fcntl.flock(lf, fcntl.LOCK_EX)
                    _safe_create_schema()
                finally:
                    fcntl.flock(lf, fcntl.LOCK_UN)
        else:
            _safe_create_schema()
        LOG.debug("catalog schema ready")


def _safe_create_schema() -> None:
    """Run metadata.create_all, tolerating a concurrent creator.

    SQLite may raise OperationalError "table X already exists" when two
    processes pass the existence check at the same time.
    """
    if _engine is None:
        return
    try:
        Base.metadata.create_all(_engine)
    except OperationalError as e:  # pragma: no cover - concurrency edge
        if "already exists" in str(e).lower():
            LOG.warning("Schema create encountered existing tables (benign race)")
        else:
            raise


def get_engine() -> Engine:
    if _engine is None:
        init_engine_once()
    return _engine  # type: ignore[return-value]


def get_session_factory() -> Callable[[], SASession]:
    if _SessionFactory is None:
        init_engine_once()
    return _SessionFactory  # type: ignore[return-value]


def get_scoped_session() -> scoped_session:
    if _scoped is None:
        init_engine_once()
    if _scoped is None:
        raise RuntimeError("Scoped session could not be initialized.")
    return _scoped  # type: ignore[return-value]


@contextmanager
def app_session() -> Iterator[SASession]:
    """Yield the thread's session; commit on success, roll back on failure.

    SQLAlchemy failures surface as `StoreError`; any other exception raised
    by the caller is re-raised unchanged after the rollback.
    """
    scoped = get_scoped_session()
    sess = scoped()
    try:
        yield sess
        sess.commit()
    except SQLAlchemyError as exc:
        sess.rollback()
        raise StoreError(str(exc)) from exc
    except Exception:
        sess.rollback()
        raise
    finally:
        sess.close()


def create_schema() -> None:
    """Create missing tables (used by the ``init-db`` CLI command)."""
    init_engine_once()
    _safe_create_schema()


def reset_for_tests(drop: bool = False) -> None:
    global _engine, _SessionFactory, _scoped
    with _LOCK:
        if _scoped is not None:
            _scoped.remove()
        if _engine is not None:
            if drop:
                try:
                    Base.metadata.drop_all(_engine)
                except SQLAlchemyError:
                    LOG.warning("Failed dropping tables during reset", exc_info=True)
            _engine.dispose()
        _engine = None
        _SessionFactory = None
        _scoped = None


__all__ = [
    "init_engine_once",
    "get_engine",
    "get_session_factory",
    "get_scoped_session",
    "app_session",
    "create_schema",
    "reset_for_tests",
]
