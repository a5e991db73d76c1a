"""Local library catalog web application.

Server-rendered Flask UI over a SQLAlchemy store for authors, genres,
books and book copies. `create_app` is the WSGI application factory
(``flask --app locallibrary run``).
"""
from __future__ import annotations

from typing import Any, Mapping, Optional

from flask import Flask


def create_app(config_overrides: Optional[Mapping[str, Any]] = None) -> Flask:
    from locallibrary.startup.wiring import init_app

    app = Flask(__name__)
    if config_overrides:
        app.config.update(config_overrides)
    init_app(app)
    return app


__all__ = [
    "create_app",
]
