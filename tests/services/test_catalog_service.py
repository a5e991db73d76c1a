"""Tests for the home page counts."""
from __future__ import annotations

import pytest

from locallibrary.db.engine import init_engine_once, reset_for_tests
from locallibrary.db.errors import StoreError
from locallibrary.db.repositories import authors_repo, book_instances_repo, books_repo, genres_repo
from locallibrary.services import catalog_service
from locallibrary.services.catalog_service import CatalogCounts


@pytest.fixture(autouse=True)
def file_db(monkeypatch, tmp_path):
    reset_for_tests(drop=True)
    monkeypatch.setenv("LOCALLIBRARY_DB_PATH", str(tmp_path / "catalog.db"))
    init_engine_once()
    yield
    reset_for_tests(drop=True)


def test_catalog_counts_empty_store():
    assert catalog_service.catalog_counts() == CatalogCounts(0, 0, 0, 0, 0)


@pytest.mark.parametrize("workers", ["1", "4"])
def test_catalog_counts(monkeypatch, workers):
    monkeypatch.setenv("LOCALLIBRARY_FANOUT_WORKERS", workers)
    author = authors_repo.create_author("Frank", "Herbert")
    genres_repo.create_genre("Science Fiction")
    book = books_repo.create_book("Dune", author.id, "Spice.", "1")
    book_instances_repo.create_instance(book.id, "Ace", status="Available")
    book_instances_repo.create_instance(book.id, "Ace", status="Loaned")

    counts = catalog_service.catalog_counts()

    assert counts.book_count == 1
    assert counts.book_instance_count == 2
    assert counts.book_instance_available_count == 1
    assert counts.author_count == 1
    assert counts.genre_count == 1


def test_catalog_counts_propagates_store_failure(monkeypatch):
    def broken():
        raise StoreError("disk I/O error")

    monkeypatch.setattr(catalog_service.genres_repo, "count_genres", broken)

    with pytest.raises(StoreError):
        catalog_service.catalog_counts()
