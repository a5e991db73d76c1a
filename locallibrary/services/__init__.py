"""Service exports."""

from .errors import (
    RecordNotFoundError,
    FormValidationError,
    RecordInUseError,
    StoreError,
)
from . import (
    authors_service,
    book_instances_service,
    books_service,
    catalog_service,
    fanout,
    genres_service,
    validation,
)

__all__ = [
    "RecordNotFoundError",
    "FormValidationError",
    "RecordInUseError",
    "StoreError",
    "authors_service",
    "book_instances_service",
    "books_service",
    "catalog_service",
    "fanout",
    "genres_service",
    "validation",
]
