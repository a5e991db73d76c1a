"""ORM models for the library catalog (authors, genres, books, copies)."""
from __future__ import annotations

import datetime

from sqlalchemy import (
    Column,
    Date,
    ForeignKey,
    Integer,
    String,
    Table,
    Text,
)
from sqlalchemy.orm import declarative_base, relationship

Base = declarative_base()

BOOK_INSTANCE_STATUSES = ("Available", "Maintenance", "Loaned", "Reserved")
DEFAULT_BOOK_INSTANCE_STATUS = "Maintenance"

book_genres = Table(
    "book_genres",
    Base.metadata,
    Column("book_id", Integer, ForeignKey("books.id", ondelete="CASCADE"), primary_key=True),
    Column("genre_id", Integer, ForeignKey("genres.id"), primary_key=True),
)


class Author(Base):
    """A person credited with one or more books."""

    __tablename__ = "authors"

    id = Column(Integer, primary_key=True, autoincrement=True)
    first_name = Column(String(100), nullable=False)
    family_name = Column(String(100), nullable=False, index=True)
    date_of_birth = Column(Date, nullable=True)
    date_of_death = Column(Date, nullable=True)

    books = relationship("Book", back_populates="author")

    def __repr__(self) -> str:  # pragma: no cover
        return f"<Author id={self.id} family_name={self.family_name} first_name={self.first_name}>"


class Genre(Base):
    """Book category. Names are unique by write-time check, not by constraint."""

    __tablename__ = "genres"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), nullable=False, index=True)

    books = relationship("Book", secondary=book_genres, back_populates="genres")

    def __repr__(self) -> str:  # pragma: no cover
        return f"<Genre id={self.id} name={self.name}>"


class Book(Base):
    __tablename__ = "books"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(255), nullable=False, index=True)
    author_id = Column(Integer, ForeignKey("authors.id"), nullable=False, index=True)
    summary = Column(Text, nullable=False)
    isbn = Column(String(32), nullable=False)

    author = relationship("Author", back_populates="books")
    genres = relationship("Genre", secondary=book_genres, back_populates="books", order_by="Genre.name")
    instances = relationship("BookInstance", back_populates="book")

    def __repr__(self) -> str:  # pragma: no cover
        return f"<Book id={self.id} title={self.title}>"


class BookInstance(Base):
    """A physical copy of a book that can be borrowed."""

    __tablename__ = "book_instances"

    id = Column(Integer, primary_key=True, autoincrement=True)
    book_id = Column(Integer, ForeignKey("books.id"), nullable=False, index=True)
    imprint = Column(String(255), nullable=False)
    status = Column(String(16), nullable=False, default=DEFAULT_BOOK_INSTANCE_STATUS, index=True)
    due_back = Column(Date, nullable=False, default=datetime.date.today)

    book = relationship("Book", back_populates="instances")

    def __repr__(self) -> str:  # pragma: no cover
        return f"<BookInstance id={self.id} book_id={self.book_id} status={self.status}>"


__all__ = [
    "Base",
    "Author",
    "Genre",
    "Book",
    "BookInstance",
    "book_genres",
    "BOOK_INSTANCE_STATUSES",
    "DEFAULT_BOOK_INSTANCE_STATUS",
]
