"""Genre catalog operations with name de-duplication."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional

from flask_babel import gettext as _

from locallibrary.db.models import Book, Genre
from locallibrary.db.repositories import books_repo, genres_repo
from locallibrary.services import fanout
from locallibrary.services.errors import FormValidationError, RecordNotFoundError
from locallibrary.services.validation import FieldError, FieldRule, max_length, process_form, required
from locallibrary.utils.logging import get_logger

LOG = get_logger("services.genres")

GENRE_FORM_RULES = (
    FieldRule("name", (
        required("Genre name required"),
        max_length(100, "Genre name must be at most 100 characters"),
    )),
)


@dataclass
class GenreWithBooks:
    genre: Genre
    books: List[Book]


@dataclass
class GenreCreateResult:
    genre: Genre
    created: bool


def list_genres() -> List[Genre]:
    return genres_repo.list_genres()


def get_genre(genre_id: int) -> Genre:
    genre = genres_repo.get_genre(genre_id)
    if genre is None:
        raise RecordNotFoundError("genre", genre_id)
    return genre


def _load_with_books(genre_id: int) -> tuple[Optional[Genre], List[Book]]:
    results = fanout.gather(
        genre=lambda: genres_repo.get_genre(genre_id),
        books=lambda: books_repo.list_books_by_genre(genre_id),
    )
    return results["genre"], results["books"]


def get_genre_detail(genre_id: int) -> GenreWithBooks:
    genre, books = _load_with_books(genre_id)
    if genre is None:
        raise RecordNotFoundError("genre", genre_id)
    return GenreWithBooks(genre=genre, books=books)


def form_values(genre: Genre) -> Dict[str, Any]:
    return {"name": genre.name}


def _validated_name(form: Mapping[str, Any]) -> tuple[Dict[str, Any], str]:
    values, errors = process_form(form, GENRE_FORM_RULES)
    if errors:
        raise FormValidationError(values, errors)
    return values, values["name"]


def create_genre(form: Mapping[str, Any]) -> GenreCreateResult:
    """Create a genre unless one with the exact same name exists.

    ``created`` is False when the existing genre is returned instead.
    """
    _values, name = _validated_name(form)
    existing = genres_repo.find_genre_by_name(name)
    if existing is not None:
        LOG.info("Genre name=%s already exists id=%s; not creating", name, existing.id)
        return GenreCreateResult(genre=existing, created=False)
    genre = genres_repo.create_genre(name)
    LOG.info("Created genre id=%s name=%s", genre.id, genre.name)
    return GenreCreateResult(genre=genre, created=True)


def update_genre(genre_id: int, form: Mapping[str, Any]) -> Genre:
    get_genre(genre_id)
    values, name = _validated_name(form)
    clash = genres_repo.find_genre_by_name(name)
    if clash is not None and clash.id != genre_id:
        raise FormValidationError(values, [FieldError("name", _("Genre name already in use"))])
    genre = genres_repo.update_genre(genre_id, name=name)
    if genre is None:
        raise RecordNotFoundError("genre", genre_id)
    LOG.info("Updated genre id=%s", genre_id)
    return genre


def get_delete_context(genre_id: int) -> Optional[GenreWithBooks]:
    genre, books = _load_with_books(genre_id)
    if genre is None:
        return None
    return GenreWithBooks(genre=genre, books=books)


def delete_genre(genre_id: int) -> bool:
    removed = genres_repo.delete_genre(genre_id)
    if removed:
        LOG.info("Deleted genre id=%s", genre_id)
    return removed


__all__ = [
    "GENRE_FORM_RULES",
    "GenreWithBooks",
    "GenreCreateResult",
    "list_genres",
    "get_genre",
    "get_genre_detail",
    "form_values",
    "create_genre",
    "update_genre",
    "get_delete_context",
    "delete_genre",
]
