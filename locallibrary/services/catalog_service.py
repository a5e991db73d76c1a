"""Dashboard summary for the catalog home page."""
from __future__ import annotations

from dataclasses import dataclass

from locallibrary.db.repositories import authors_repo, book_instances_repo, books_repo, genres_repo
from locallibrary.services import fanout


@dataclass
class CatalogCounts:
    book_count: int
    book_instance_count: int
    book_instance_available_count: int
    author_count: int
    genre_count: int


def catalog_counts() -> CatalogCounts:
    results = fanout.gather(
        book_count=books_repo.count_books,
        book_instance_count=book_instances_repo.count_instances,
        book_instance_available_count=lambda: book_instances_repo.count_instances(status="Available"),
        author_count=authors_repo.count_authors,
        genre_count=genres_repo.count_genres,
    )
    return CatalogCounts(**results)


__all__ = ["CatalogCounts", "catalog_counts"]
