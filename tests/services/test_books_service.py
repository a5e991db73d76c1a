"""Tests for book form handling, genre selection and delete guard."""
from __future__ import annotations

import pytest

from locallibrary.db.engine import init_engine_once, reset_for_tests
from locallibrary.db.repositories import authors_repo, book_instances_repo, books_repo, genres_repo
from locallibrary.services import books_service
from locallibrary.services.errors import FormValidationError, RecordInUseError, RecordNotFoundError


@pytest.fixture(autouse=True)
def file_db(monkeypatch, tmp_path):
    reset_for_tests(drop=True)
    monkeypatch.setenv("LOCALLIBRARY_DB_PATH", str(tmp_path / "catalog.db"))
    init_engine_once()
    yield
    reset_for_tests(drop=True)


@pytest.fixture
def author():
    return authors_repo.create_author("Ursula", "LeGuin")


def _form(author_id, **overrides):
    form = {
        "title": "The Dispossessed",
        "author": str(author_id),
        "summary": "An ambiguous utopia.",
        "isbn": "9780061054884",
        "genre": [],
    }
    form.update(overrides)
    return form


def test_create_book_with_genres(author):
    sf = genres_repo.create_genre("Science Fiction")
    other = genres_repo.create_genre("Other")

    book = books_service.create_book(_form(author.id, genre=[str(sf.id), "not-a-number"]))

    detail = books_service.get_book_detail(book.id)
    assert [g.id for g in detail.book.genres] == [sf.id]
    assert other.id not in [g.id for g in detail.book.genres]
    assert detail.instances == []


def test_create_book_reports_every_empty_field():
    with pytest.raises(FormValidationError) as excinfo:
        books_service.create_book({})

    assert [e.message for e in excinfo.value.errors] == [
        "Title must not be empty",
        "Author must not be empty",
        "Summary must not be empty",
        "ISBN must not be empty",
    ]
    assert books_repo.count_books() == 0


def test_create_book_rejects_unknown_author(author):
    with pytest.raises(FormValidationError) as excinfo:
        books_service.create_book(_form(author.id + 100))

    assert excinfo.value.messages_for("author") == ["Author does not exist"]


def test_form_values_carry_selected_genre_ids(author):
    fantasy = genres_repo.create_genre("Fantasy")
    book = books_service.create_book(_form(author.id, genre=[str(fantasy.id)]))

    context = books_service.get_edit_context(book.id)
    values = books_service.form_values(context.book)

    assert values["author"] == str(author.id)
    assert values["genre"] == [str(fantasy.id)]
    assert [a.id for a in context.options.authors] == [author.id]
    assert [g.id for g in context.options.genres] == [fantasy.id]


def test_update_book_clears_genres_when_none_selected(author):
    fantasy = genres_repo.create_genre("Fantasy")
    book = books_service.create_book(_form(author.id, genre=[str(fantasy.id)]))

    books_service.update_book(book.id, _form(author.id, title="Changed"))

    fetched = books_repo.get_book(book.id)
    assert fetched.title == "Changed"
    assert fetched.genres == []


def test_update_missing_book_raises_not_found(author):
    with pytest.raises(RecordNotFoundError):
        books_service.update_book(999, _form(author.id))


def test_delete_book_refused_while_copies_exist(author):
    book = books_service.create_book(_form(author.id))
    book_instances_repo.create_instance(book.id, "Harper, 1974")

    context = books_service.get_delete_context(book.id)
    assert len(context.instances) == 1
    with pytest.raises(RecordInUseError):
        books_service.delete_book(book.id)


def test_get_book_detail_missing_raises_not_found():
    with pytest.raises(RecordNotFoundError) as excinfo:
        books_service.get_book_detail(5)

    assert excinfo.value.kind == "book"


@pytest.mark.parametrize("raw_author", ["²", "99999999999999999999999"])
def test_create_book_rejects_unusable_author_id(author, raw_author):
    with pytest.raises(FormValidationError) as excinfo:
        books_service.create_book(_form(author.id, author=raw_author))

    assert excinfo.value.messages_for("author") == ["Author does not exist"]
    assert books_repo.count_books() == 0


def test_create_book_ignores_unusable_genre_ids(author):
    fantasy = genres_repo.create_genre("Fantasy")

    book = books_service.create_book(
        _form(author.id, genre=["²", "99999999999999999999999", str(fantasy.id)])
    )

    assert [g.id for g in books_repo.get_book(book.id).genres] == [fantasy.id]
