"""Author catalog operations: listing, detail, form handling and guarded delete."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional

from locallibrary.db.models import Author, Book
from locallibrary.db.repositories import authors_repo, books_repo
from locallibrary.services import fanout
from locallibrary.services.errors import FormValidationError, RecordNotFoundError
from locallibrary.services.validation import (
    FieldRule,
    alphanumeric,
    iso_date,
    max_length,
    optional_date,
    process_form,
    required,
)
from locallibrary.utils.logging import get_logger

LOG = get_logger("services.authors")

AUTHOR_FORM_RULES = (
    FieldRule("first_name", (
        required("First name must be specified"),
        max_length(100, "First name must be at most 100 characters"),
        alphanumeric("First name has non-alphanumeric characters."),
    )),
    FieldRule("family_name", (
        required("Family name must be specified"),
        max_length(100, "Family name must be at most 100 characters"),
        alphanumeric("Family name has non-alphanumeric characters."),
    )),
    FieldRule("date_of_birth", (iso_date("Invalid date of birth"),)),
    FieldRule("date_of_death", (iso_date("Invalid date of death"),)),
)


@dataclass
class AuthorWithBooks:
    author: Author
    books: List[Book]


def list_authors() -> List[Author]:
    return authors_repo.list_authors()


def get_author(author_id: int) -> Author:
    author = authors_repo.get_author(author_id)
    if author is None:
        raise RecordNotFoundError("author", author_id)
    return author


def _load_with_books(author_id: int) -> tuple[Optional[Author], List[Book]]:
    results = fanout.gather(
        author=lambda: authors_repo.get_author(author_id),
        books=lambda: books_repo.list_books_by_author(author_id),
    )
    return results["author"], results["books"]


def get_author_detail(author_id: int) -> AuthorWithBooks:
    author, books = _load_with_books(author_id)
    if author is None:
        raise RecordNotFoundError("author", author_id)
    return AuthorWithBooks(author=author, books=books)


def form_values(author: Author) -> Dict[str, Any]:
    return {
        "first_name": author.first_name,
        "family_name": author.family_name,
        "date_of_birth": author.date_of_birth.isoformat() if author.date_of_birth else "",
        "date_of_death": author.date_of_death.isoformat() if author.date_of_death else "",
    }


def _validated_fields(form: Mapping[str, Any]) -> Dict[str, Any]:
    values, errors = process_form(form, AUTHOR_FORM_RULES)
    if errors:
        LOG.debug("Author form rejected fields=%s", [e.field for e in errors])
        raise FormValidationError(values, errors)
    return {
        "first_name": values["first_name"],
        "family_name": values["family_name"],
        "date_of_birth": optional_date(values["date_of_birth"]),
        "date_of_death": optional_date(values["date_of_death"]),
    }


def create_author(form: Mapping[str, Any]) -> Author:
    fields = _validated_fields(form)
    author = authors_repo.create_author(**fields)
    LOG.info("Created author id=%s family_name=%s", author.id, author.family_name)
    return author


def update_author(author_id: int, form: Mapping[str, Any]) -> Author:
    get_author(author_id)
    fields = _validated_fields(form)
    author = authors_repo.update_author(author_id, **fields)
    if author is None:
        raise RecordNotFoundError("author", author_id)
    LOG.info("Updated author id=%s", author_id)
    return author


def get_delete_context(author_id: int) -> Optional[AuthorWithBooks]:
    """Author plus the books that would block its deletion; None when absent."""
    author, books = _load_with_books(author_id)
    if author is None:
        return None
    return AuthorWithBooks(author=author, books=books)


def delete_author(author_id: int) -> bool:
    """Delete the author; raises RecordInUseError while books reference it."""
    removed = authors_repo.delete_author(author_id)
    if removed:
        LOG.info("Deleted author id=%s", author_id)
    return removed


__all__ = [
    "AUTHOR_FORM_RULES",
    "AuthorWithBooks",
    "list_authors",
    "get_author",
    "get_author_detail",
    "form_values",
    "create_author",
    "update_author",
    "get_delete_context",
    "delete_author",
]
