"""Application initialization / wiring.

Orchestrates: config, i18n, CSRF, DB init, template filters, route
registration and CLI commands.
"""
from __future__ import annotations
from typing import Any

import click
from flask_wtf import CSRFProtect

from locallibrary import config as app_config
from locallibrary.db import init_engine_once
from locallibrary.db.engine import create_schema
from locallibrary.i18n import configure_translations
from locallibrary.routes.inject import register_all as register_routes
from locallibrary.utils.display import register_display_filters
from locallibrary.utils.logging import get_logger

LOG = get_logger("startup")

csrf = CSRFProtect()


def _apply_config(app: Any) -> None:
    app.config.setdefault("SECRET_KEY", app_config.secret_key())
    app.config.setdefault("WTF_CSRF_ENABLED", app_config.csrf_enabled())


def _register_cli(app: Any) -> None:
    @app.cli.command("init-db")
    def init_db_command():
        """Create the catalog tables if they do not exist."""
        create_schema()
        click.echo(f"Initialized catalog database at {app_config.get_db_path()}")


def init_app(app: Any) -> None:
    LOG.debug("init_app starting")
    _apply_config(app)
    configure_translations(app)
    csrf.init_app(app)
    init_engine_once()
    LOG.debug("DB engine initialized")
    register_display_filters(app)
    register_routes(app)
    _register_cli(app)
    LOG.info("App startup wiring complete %s", app_config.summarize_runtime_config())

__all__ = ["init_app", "csrf"]
