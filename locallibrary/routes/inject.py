"""Route registration.

Called from startup to register every blueprint and the error boundary.
"""
from __future__ import annotations
from typing import Any

from .authors import register_authors
from .book_instances import register_book_instances
from .books import register_books
from .catalog import register_catalog
from .converters import register_converters
from .errors import register_error_handlers
from .genres import register_genres
from .health import register_health


def register_all(app: Any) -> None:
    register_converters(app)
    register_catalog(app)
    register_authors(app)
    register_genres(app)
    register_books(app)
    register_book_instances(app)
    register_health(app)
    register_error_handlers(app)

__all__ = ["register_all"]
