"""Tests for the genre pages."""
from __future__ import annotations

import pytest

from locallibrary import create_app
from locallibrary.db.engine import init_engine_once, reset_for_tests
from locallibrary.db.repositories import authors_repo, books_repo, genres_repo


@pytest.fixture(autouse=True)
def file_db(monkeypatch, tmp_path):
    reset_for_tests(drop=True)
    monkeypatch.setenv("LOCALLIBRARY_DB_PATH", str(tmp_path / "catalog.db"))
    init_engine_once()
    yield
    reset_for_tests(drop=True)


@pytest.fixture
def client():
    app = create_app({"TESTING": True, "WTF_CSRF_ENABLED": False})
    return app.test_client()


def test_create_duplicate_genre_redirects_to_existing(client):
    first = client.post("/catalog/genre/create", data={"name": "Fantasy"})
    second = client.post("/catalog/genre/create", data={"name": "Fantasy"})

    [genre] = genres_repo.list_genres()
    assert first.headers["Location"].endswith(f"/catalog/genre/{genre.id}")
    assert second.headers["Location"] == first.headers["Location"]


def test_empty_genre_name_is_rejected(client):
    resp = client.post("/catalog/genre/create", data={"name": ""})

    assert resp.status_code == 200
    assert "Genre name required" in resp.get_data(as_text=True)
    assert genres_repo.count_genres() == 0


def test_genre_name_with_markup_displays_literally(client):
    client.post("/catalog/genre/create", data={"name": "<b>Bold</b>"})

    html = client.get("/catalog/genres").get_data(as_text=True)

    assert "&lt;b&gt;Bold&lt;/b&gt;" in html
    assert "<b>Bold</b>" not in html


def test_genre_detail_lists_its_books(client):
    genre = genres_repo.create_genre("Fantasy")
    author = authors_repo.create_author("Patrick", "Rothfuss")
    books_repo.create_book("The Name of the Wind", author.id, "Kvothe.", "1", genre_ids=[genre.id])

    resp = client.get(f"/catalog/genre/{genre.id}")

    assert resp.status_code == 200
    html = resp.get_data(as_text=True)
    assert "Fantasy" in html
    assert "The Name of the Wind" in html


def test_missing_genre_detail_is_not_found(client):
    resp = client.get("/catalog/genre/5")

    assert resp.status_code == 404
    assert "Genre not found" in resp.get_data(as_text=True)


def test_rename_genre_to_existing_name_is_rejected(client):
    genres_repo.create_genre("Fantasy")
    poetry = genres_repo.create_genre("Poetry")

    resp = client.post(f"/catalog/genre/{poetry.id}/update", data={"name": "Fantasy"})

    assert resp.status_code == 200
    assert "Genre name already in use" in resp.get_data(as_text=True)


def test_delete_genre_in_use_is_refused(client):
    genre = genres_repo.create_genre("Fantasy")
    author = authors_repo.create_author("Patrick", "Rothfuss")
    books_repo.create_book("The Name of the Wind", author.id, "Kvothe.", "1", genre_ids=[genre.id])

    resp = client.post(f"/catalog/genre/{genre.id}/delete", data={"genreid": str(genre.id)})

    assert resp.status_code == 200
    assert "The Name of the Wind" in resp.get_data(as_text=True)
    assert genres_repo.get_genre(genre.id) is not None


def test_delete_unused_genre(client):
    genre = genres_repo.create_genre("Fantasy")

    resp = client.post(f"/catalog/genre/{genre.id}/delete", data={"genreid": str(genre.id)})

    assert resp.status_code == 302
    assert genres_repo.count_genres() == 0
