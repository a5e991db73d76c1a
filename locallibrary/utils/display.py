"""Derived, never-stored values for catalog records.

Pure functions over the stored record, also exposed to Jinja as filters so
templates can write ``{{ author|author_name }}`` or ``{{ book|url }}``.
"""
from __future__ import annotations

from datetime import date
from typing import Any, Optional

from markupsafe import Markup

from locallibrary.db.models import Author, Book, BookInstance, Genre

NOT_AVAILABLE = "N/A"


def format_date_med(value: Optional[date]) -> str:
    """Medium date such as ``Oct 14, 1983``; empty string for no date."""
    if value is None:
        return ""
    return f"{value:%b} {value.day}, {value.year}"


def author_name(author: Author) -> str:
    return f"{author.family_name}, {author.first_name}"


def author_lifespan(author: Author) -> str:
    birth = format_date_med(author.date_of_birth) or NOT_AVAILABLE
    death = format_date_med(author.date_of_death) or NOT_AVAILABLE
    return f"{birth} - {death}"


def author_url(author: Author) -> str:
    return f"/catalog/author/{author.id}"


def genre_url(genre: Genre) -> str:
    return f"/catalog/genre/{genre.id}"


def book_url(book: Book) -> str:
    return f"/catalog/book/{book.id}"


def book_instance_url(instance: BookInstance) -> str:
    return f"/catalog/bookinstance/{instance.id}"


def due_back_formatted(instance: BookInstance) -> str:
    return format_date_med(instance.due_back)


def formatted_due_back(instance: BookInstance) -> str:
    """ISO ``YYYY-MM-DD`` value for date inputs."""
    return instance.due_back.isoformat() if instance.due_back else ""


_URL_BUILDERS = {
    Author: author_url,
    Genre: genre_url,
    Book: book_url,
    BookInstance: book_instance_url,
}


def record_url(record: Any) -> str:
    builder = _URL_BUILDERS.get(type(record))
    if builder is None:
        raise TypeError(f"No catalog URL for {type(record).__name__}")
    return builder(record)


def sanitized(value: Any) -> Markup:
    """Mark text that was escaped on the way in so templates do not escape it again."""
    if value is None:
        return Markup("")
    return Markup(str(value))


def register_display_filters(app: Any) -> None:
    """Register the derivation helpers as Jinja filters."""
    env = app.jinja_env
    env.filters["sanitized"] = sanitized
    env.filters["author_name"] = author_name
    env.filters["lifespan"] = author_lifespan
    env.filters["url"] = record_url
    env.filters["date_med"] = format_date_med
    env.filters["due_back_formatted"] = due_back_formatted
    env.filters["formatted_due_back"] = formatted_due_back


__all__ = [
    "NOT_AVAILABLE",
    "format_date_med",
    "author_name",
    "author_lifespan",
    "author_url",
    "genre_url",
    "book_url",
    "book_instance_url",
    "due_back_formatted",
    "formatted_due_back",
    "record_url",
    "sanitized",
    "register_display_filters",
]
