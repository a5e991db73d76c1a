"""Book catalog operations.

Book forms need the author and genre option lists; those are fetched
together (and together with the book on edit) through `fanout.gather`.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional

from flask_babel import gettext as _

from locallibrary.db.models import Author, Book, BookInstance, Genre
from locallibrary.db.repositories import authors_repo, book_instances_repo, books_repo, genres_repo
from locallibrary.services import fanout
from locallibrary.services.errors import FormValidationError, RecordNotFoundError
from locallibrary.services.validation import FieldError, FieldRule, integer_id, parse_record_id, process_form, required
from locallibrary.utils.logging import get_logger

LOG = get_logger("services.books")

BOOK_FORM_RULES = (
    FieldRule("title", (required("Title must not be empty"),)),
    FieldRule("author", (required("Author must not be empty"), integer_id("Author does not exist"))),
    FieldRule("summary", (required("Summary must not be empty"),)),
    FieldRule("isbn", (required("ISBN must not be empty"),)),
    FieldRule("genre", multiple=True),
)


@dataclass
class BookFormOptions:
    authors: List[Author]
    genres: List[Genre]


@dataclass
class BookEditContext:
    book: Book
    options: BookFormOptions


@dataclass
class BookWithInstances:
    book: Book
    instances: List[BookInstance]


def list_books() -> List[Book]:
    return books_repo.list_books()


def get_book_detail(book_id: int) -> BookWithInstances:
    results = fanout.gather(
        book=lambda: books_repo.get_book(book_id),
        instances=lambda: book_instances_repo.list_instances_for_book(book_id),
    )
    if results["book"] is None:
        raise RecordNotFoundError("book", book_id)
    return BookWithInstances(book=results["book"], instances=results["instances"])


def get_form_options() -> BookFormOptions:
    results = fanout.gather(
        authors=authors_repo.list_authors,
        genres=genres_repo.list_genres,
    )
    return BookFormOptions(authors=results["authors"], genres=results["genres"])


def get_edit_context(book_id: int) -> BookEditContext:
    results = fanout.gather(
        book=lambda: books_repo.get_book(book_id),
        authors=authors_repo.list_authors,
        genres=genres_repo.list_genres,
    )
    if results["book"] is None:
        raise RecordNotFoundError("book", book_id)
    return BookEditContext(
        book=results["book"],
        options=BookFormOptions(authors=results["authors"], genres=results["genres"]),
    )


def form_values(book: Book) -> Dict[str, Any]:
    return {
        "title": book.title,
        "author": str(book.author_id),
        "summary": book.summary,
        "isbn": book.isbn,
        "genre": [str(g.id) for g in book.genres],
    }


def _genre_ids(raw: List[str]) -> List[int]:
    ids = (parse_record_id(v) for v in raw)
    return [i for i in ids if i is not None]


def _validated_fields(form: Mapping[str, Any]) -> Dict[str, Any]:
    values, errors = process_form(form, BOOK_FORM_RULES)
    if not any(e.field == "author" for e in errors):
        if authors_repo.get_author(int(values["author"])) is None:
            errors.append(FieldError("author", _("Author does not exist")))
    if errors:
        LOG.debug("Book form rejected fields=%s", [e.field for e in errors])
        raise FormValidationError(values, errors)
    return {
        "title": values["title"],
        "author_id": int(values["author"]),
        "summary": values["summary"],
        "isbn": values["isbn"],
        "genre_ids": _genre_ids(values["genre"]),
    }


def create_book(form: Mapping[str, Any]) -> Book:
    fields = _validated_fields(form)
    book = books_repo.create_book(**fields)
    LOG.info("Created book id=%s title=%s", book.id, book.title)
    return book


def update_book(book_id: int, form: Mapping[str, Any]) -> Book:
    if books_repo.get_book(book_id) is None:
        raise RecordNotFoundError("book", book_id)
    fields = _validated_fields(form)
    book = books_repo.update_book(book_id, **fields)
    if book is None:
        raise RecordNotFoundError("book", book_id)
    LOG.info("Updated book id=%s", book_id)
    return book


def get_delete_context(book_id: int) -> Optional[BookWithInstances]:
    results = fanout.gather(
        book=lambda: books_repo.get_book(book_id),
        instances=lambda: book_instances_repo.list_instances_for_book(book_id),
    )
    if results["book"] is None:
        return None
    return BookWithInstances(book=results["book"], instances=results["instances"])


def delete_book(book_id: int) -> bool:
    """Delete the book; raises RecordInUseError while copies of it exist."""
    removed = books_repo.delete_book(book_id)
    if removed:
        LOG.info("Deleted book id=%s", book_id)
    return removed


__all__ = [
    "BOOK_FORM_RULES",
    "BookFormOptions",
    "BookEditContext",
    "BookWithInstances",
    "list_books",
    "get_book_detail",
    "get_form_options",
    "get_edit_context",
    "form_values",
    "create_book",
    "update_book",
    "get_delete_context",
    "delete_book",
]
