"""Application configuration accessors.

Centralizes environment variable parsing & defaults so the rest of the
package never reads ``os.environ`` directly.
"""
from __future__ import annotations

import os
from functools import lru_cache

APP_NAME = "locallibrary"
APP_VERSION = "0.1.0"
APP_DESCRIPTION = "Local library catalog (authors, genres, books, copies)"

DEFAULT_DB_PATH = "locallibrary.db"
DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_FANOUT_WORKERS = 4
DEFAULT_LOCALE = "en"
_TRUE = {"1", "true", "yes", "on"}


def _raw_env(name: str, default: str | None = None) -> str | None:
    val = os.getenv(name)
    return val if val is not None else default


def env_bool(name: str, default: bool = False) -> bool:
    raw = _raw_env(name, str(default).lower())
    if raw is None:
        return default
    return raw.lower() in _TRUE


def get_db_path() -> str:
    raw = _raw_env("LOCALLIBRARY_DB_PATH", DEFAULT_DB_PATH)
    if raw and raw != ":memory:" and not os.path.isabs(raw):
        data_dir = os.getenv("LOCALLIBRARY_DATA_DIR")
        if data_dir:
            return os.path.join(data_dir, raw)
    return raw  # type: ignore[return-value]


def log_level_name() -> str:
    return _raw_env("LOCALLIBRARY_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper()  # type: ignore[union-attr]


def secret_key() -> str:
    value = (os.getenv("LOCALLIBRARY_SECRET_KEY") or "").strip()
    return value or "dev-secret-change-me"


def csrf_enabled() -> bool:
    return env_bool("LOCALLIBRARY_CSRF_ENABLED", default=True)


def fanout_max_workers() -> int:
    """Upper bound for concurrent reads issued by a single request.

    Environment Variable: LOCALLIBRARY_FANOUT_WORKERS
    A value of 1 runs grouped reads inline, one after another.
    """
    raw = os.getenv("LOCALLIBRARY_FANOUT_WORKERS")
    if not raw:
        return DEFAULT_FANOUT_WORKERS
    try:
        value = int(raw.strip())
    except ValueError:
        return DEFAULT_FANOUT_WORKERS
    return max(1, value)


def default_locale() -> str:
    value = (os.getenv("LOCALLIBRARY_DEFAULT_LOCALE") or "").strip()
    return value or DEFAULT_LOCALE


@lru_cache(maxsize=1)
def metadata() -> dict:
    return {
        "name": APP_NAME,
        "version": APP_VERSION,
        "description": APP_DESCRIPTION,
    }


def summarize_runtime_config() -> dict:
    return {
        "db_path": get_db_path(),
        "log_level": log_level_name(),
        "csrf_enabled": csrf_enabled(),
        "fanout_workers": fanout_max_workers(),
        "default_locale": default_locale(),
    }


__all__ = [
    "APP_NAME",
    "APP_VERSION",
    "APP_DESCRIPTION",
    "env_bool",
    "get_db_path",
    "log_level_name",
    "secret_key",
    "csrf_enabled",
    "fanout_max_workers",
    "default_locale",
    "metadata",
    "summarize_runtime_config",
]
