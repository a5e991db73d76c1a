"""Top-level error boundary: not-found and store failures become error pages."""
from __future__ import annotations

from typing import Any

from flask import render_template, request
from flask_babel import gettext as _
from flask_wtf.csrf import CSRFError
from werkzeug.exceptions import HTTPException, NotFound

from locallibrary.db.errors import StoreError
from locallibrary.services.errors import RecordNotFoundError
from locallibrary.utils.logging import get_logger

LOG = get_logger("routes.errors")

_NOT_FOUND_MESSAGES = {
    "author": "Author not found",
    "genre": "Genre not found",
    "book": "Book not found",
    "bookinstance": "Book copy not found",
}


def _render_not_found(message: str):
    return render_template("errors/404.html", title=_("Not Found"), message=message), 404


def handle_record_not_found(exc: RecordNotFoundError):
    LOG.info("%s %s not found path=%s", exc.kind, exc.record_id, request.path)
    return _render_not_found(_(_NOT_FOUND_MESSAGES.get(exc.kind, "Not found")))


def handle_not_found(_exc: NotFound):
    return _render_not_found(_("Page not found"))


def _render_server_error():
    return render_template("errors/error.html", title=_("Error"), message=_("Something went wrong.")), 500


def handle_store_error(exc: StoreError):
    LOG.exception("Store failure path=%s: %s", request.path, exc)
    return _render_server_error()


def handle_unexpected_error(exc: Exception):
    if isinstance(exc, HTTPException):
        return exc
    LOG.exception("Unhandled error path=%s: %s", request.path, exc)
    return _render_server_error()


def handle_csrf_error(exc: CSRFError):
    LOG.warning("CSRF check failed path=%s: %s", request.path, exc.description)
    return render_template("errors/error.html", title=_("Bad Request"), message=exc.description), 400


def register_error_handlers(app: Any) -> None:
    app.register_error_handler(RecordNotFoundError, handle_record_not_found)
    app.register_error_handler(NotFound, handle_not_found)
    app.register_error_handler(StoreError, handle_store_error)
    app.register_error_handler(CSRFError, handle_csrf_error)
    app.register_error_handler(Exception, handle_unexpected_error)
    LOG.debug("error handlers registered")


__all__ = ["register_error_handlers"]
