"""Repository helpers for Book records and their genre links."""
from __future__ import annotations

from typing import Iterable, List, Optional

from sqlalchemy.orm import joinedload, selectinload

from locallibrary.db import app_session
from locallibrary.db.errors import RecordInUseError
from locallibrary.db.models import Book, BookInstance, Genre


def _load_genres(session, genre_ids: Iterable[int]) -> List[Genre]:
    ids = sorted({int(g) for g in genre_ids})
    if not ids:
        return []
    return session.query(Genre).filter(Genre.id.in_(ids)).order_by(Genre.name.asc()).all()


def list_books() -> List[Book]:
    with app_session() as session:
        return (
            session.query(Book)
            .options(joinedload(Book.author))
            .order_by(Book.title.asc(), Book.id.asc())
            .all()
        )


def get_book(book_id: int) -> Optional[Book]:
    with app_session() as session:
        return (
            session.query(Book)
            .options(joinedload(Book.author), selectinload(Book.genres))
            .filter(Book.id == book_id)
            .one_or_none()
        )


def list_books_by_author(author_id: int) -> List[Book]:
    with app_session() as session:
        return (
            session.query(Book)
            .filter(Book.author_id == author_id)
            .order_by(Book.title.asc(), Book.id.asc())
            .all()
        )


def list_books_by_genre(genre_id: int) -> List[Book]:
    with app_session() as session:
        return (
            session.query(Book)
            .filter(Book.genres.any(Genre.id == genre_id))
            .order_by(Book.title.asc(), Book.id.asc())
            .all()
        )


def create_book(
    title: str,
    author_id: int,
    summary: str,
    isbn: str,
    genre_ids: Iterable[int] = (),
) -> Book:
    with app_session() as session:
        book = Book(title=title, author_id=author_id, summary=summary, isbn=isbn)
        book.genres = _load_genres(session, genre_ids)
        session.add(book)
    return book


def update_book(
    book_id: int,
    *,
    title: str,
    author_id: int,
    summary: str,
    isbn: str,
    genre_ids: Iterable[int] = (),
) -> Optional[Book]:
    with app_session() as session:
        book = (
            session.query(Book)
            .options(selectinload(Book.genres))
            .filter(Book.id == book_id)
            .one_or_none()
        )
        if not book:
            return None
        book.title = title
        book.author_id = author_id
        book.summary = summary
        book.isbn = isbn
        book.genres = _load_genres(session, genre_ids)
        return book


def delete_book(book_id: int) -> bool:
    """Delete a book without copies; copies block the delete with RecordInUseError."""
    with app_session() as session:
        book = session.query(Book).filter(Book.id == book_id).one_or_none()
        if not book:
            return False
        instances = (
            session.query(BookInstance)
            .filter(BookInstance.book_id == book_id)
            .order_by(BookInstance.id.asc())
            .all()
        )
        if not instances:
            session.delete(book)
            return True
    raise RecordInUseError("book", book, instances)


def count_books() -> int:
    with app_session() as session:
        return session.query(Book).count()


__all__ = [
    "list_books",
    "get_book",
    "list_books_by_author",
    "list_books_by_genre",
    "create_book",
    "update_book",
    "delete_book",
    "count_books",
]
