"""Utility helpers (logging, display derivations)."""
from .display import (
    author_name,
    author_lifespan,
    record_url,
    register_display_filters,
)

__all__ = [
    "author_name",
    "author_lifespan",
    "record_url",
    "register_display_filters",
]
