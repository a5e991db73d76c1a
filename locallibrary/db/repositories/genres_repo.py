"""Repository helpers for Genre records."""
from __future__ import annotations

from typing import List, Optional

from locallibrary.db import app_session
from locallibrary.db.errors import RecordInUseError
from locallibrary.db.models import Book, Genre


def list_genres() -> List[Genre]:
    with app_session() as session:
        return session.query(Genre).order_by(Genre.name.asc(), Genre.id.asc()).all()


def get_genre(genre_id: int) -> Optional[Genre]:
    with app_session() as session:
        return session.query(Genre).filter(Genre.id == genre_id).one_or_none()


def find_genre_by_name(name: str) -> Optional[Genre]:
    """Exact, case-sensitive name match (first by id when duplicates slipped in)."""
    with app_session() as session:
        return (
            session.query(Genre)
            .filter(Genre.name == name)
            .order_by(Genre.id.asc())
            .first()
        )


def create_genre(name: str) -> Genre:
    genre = Genre(name=name)
    with app_session() as session:
        session.add(genre)
    return genre


def update_genre(genre_id: int, *, name: str) -> Optional[Genre]:
    with app_session() as session:
        genre = session.query(Genre).filter(Genre.id == genre_id).one_or_none()
        if not genre:
            return None
        genre.name = name
        return genre


def delete_genre(genre_id: int) -> bool:
    with app_session() as session:
        genre = session.query(Genre).filter(Genre.id == genre_id).one_or_none()
        if not genre:
            return False
        books = (
            session.query(Book)
            .filter(Book.genres.any(Genre.id == genre_id))
            .order_by(Book.title.asc())
            .all()
        )
        if not books:
            session.delete(genre)
            return True
    raise RecordInUseError("genre", genre, books)


def count_genres() -> int:
    with app_session() as session:
        return session.query(Genre).count()


__all__ = [
    "list_genres",
    "get_genre",
    "find_genre_by_name",
    "create_genre",
    "update_genre",
    "delete_genre",
    "count_genres",
]
