"""Repository helpers for Author records."""
from __future__ import annotations

from datetime import date
from typing import List, Optional

from locallibrary.db import app_session
from locallibrary.db.errors import RecordInUseError
from locallibrary.db.models import Author, Book


def list_authors() -> List[Author]:
    with app_session() as session:
        return (
            session.query(Author)
            .order_by(Author.family_name.asc(), Author.first_name.asc(), Author.id.asc())
            .all()
        )


def get_author(author_id: int) -> Optional[Author]:
    with app_session() as session:
        return session.query(Author).filter(Author.id == author_id).one_or_none()


def create_author(
    first_name: str,
    family_name: str,
    date_of_birth: Optional[date] = None,
    date_of_death: Optional[date] = None,
) -> Author:
    author = Author(
        first_name=first_name,
        family_name=family_name,
        date_of_birth=date_of_birth,
        date_of_death=date_of_death,
    )
    with app_session() as session:
        session.add(author)
    return author


def update_author(
    author_id: int,
    *,
    first_name: str,
    family_name: str,
    date_of_birth: Optional[date] = None,
    date_of_death: Optional[date] = None,
) -> Optional[Author]:
    with app_session() as session:
        author = session.query(Author).filter(Author.id == author_id).one_or_none()
        if not author:
            return None
        author.first_name = first_name
        author.family_name = family_name
        author.date_of_birth = date_of_birth
        author.date_of_death = date_of_death
        return author


def delete_author(author_id: int) -> bool:
    """Delete an author that no book references.

    Returns False when the author does not exist. Raises RecordInUseError,
    leaving the author in place, when books still point at it.
    """
    with app_session() as session:
        author = session.query(Author).filter(Author.id == author_id).one_or_none()
        if not author:
            return False
        books = (
            session.query(Book)
            .filter(Book.author_id == author_id)
            .order_by(Book.title.asc())
            .all()
        )
        if not books:
            session.delete(author)
            return True
    raise RecordInUseError("author", author, books)


def count_authors() -> int:
    with app_session() as session:
        return session.query(Author).count()


__all__ = [
    "list_authors",
    "get_author",
    "create_author",
    "update_author",
    "delete_author",
    "count_authors",
]
