"""Tests for author form handling and guarded delete."""
from __future__ import annotations

from datetime import date

import pytest

from locallibrary.db.engine import init_engine_once, reset_for_tests
from locallibrary.db.repositories import authors_repo, books_repo
from locallibrary.services import authors_service
from locallibrary.services.errors import FormValidationError, RecordInUseError, RecordNotFoundError


@pytest.fixture(autouse=True)
def file_db(monkeypatch, tmp_path):
    reset_for_tests(drop=True)
    monkeypatch.setenv("LOCALLIBRARY_DB_PATH", str(tmp_path / "catalog.db"))
    init_engine_once()
    yield
    reset_for_tests(drop=True)


def test_create_author_parses_dates():
    author = authors_service.create_author({
        "first_name": " Isaac ",
        "family_name": "Asimov",
        "date_of_birth": "1920-01-02",
        "date_of_death": "",
    })

    assert author.first_name == "Isaac"
    assert author.date_of_birth == date(1920, 1, 2)
    assert author.date_of_death is None


def test_create_author_rejects_and_keeps_submitted_values():
    with pytest.raises(FormValidationError) as excinfo:
        authors_service.create_author({
            "first_name": "Jean-Luc",
            "family_name": "",
            "date_of_birth": "1999-02-30",
        })

    exc = excinfo.value
    assert exc.values["first_name"] == "Jean-Luc"
    assert exc.messages_for("first_name") == ["First name has non-alphanumeric characters."]
    assert exc.messages_for("family_name") == ["Family name must be specified"]
    assert exc.messages_for("date_of_birth") == ["Invalid date of birth"]
    assert authors_repo.count_authors() == 0


def test_overlong_name_reports_length_not_charset():
    with pytest.raises(FormValidationError) as excinfo:
        authors_service.create_author({"first_name": "a" * 101, "family_name": "Ok"})

    assert excinfo.value.messages_for("first_name") == ["First name must be at most 100 characters"]


def test_update_author_missing_record_raises_not_found_before_validation():
    with pytest.raises(RecordNotFoundError) as excinfo:
        authors_service.update_author(404, {"first_name": ""})

    assert excinfo.value.kind == "author"


def test_update_author_round_trips_form_values():
    author = authors_repo.create_author("Ben", "Bova", date_of_birth=date(1932, 11, 8))
    values = authors_service.form_values(author)
    assert values["date_of_birth"] == "1932-11-08"
    assert values["date_of_death"] == ""

    values["date_of_death"] = "2020-11-29"
    updated = authors_service.update_author(author.id, values)

    assert updated.date_of_death == date(2020, 11, 29)


def test_author_detail_lists_books():
    author = authors_repo.create_author("Bob", "Billings")
    books_repo.create_book("Zeta", author.id, "s", "1")
    books_repo.create_book("Alpha", author.id, "s", "2")

    detail = authors_service.get_author_detail(author.id)

    assert detail.author.id == author.id
    assert [b.title for b in detail.books] == ["Alpha", "Zeta"]


def test_author_detail_missing_raises_not_found():
    with pytest.raises(RecordNotFoundError):
        authors_service.get_author_detail(12)


def test_delete_context_absent_author_is_none():
    assert authors_service.get_delete_context(12) is None


def test_delete_author_refused_while_books_exist():
    author = authors_repo.create_author("Bob", "Billings")
    books_repo.create_book("Alpha", author.id, "s", "2")

    with pytest.raises(RecordInUseError):
        authors_service.delete_author(author.id)
    assert authors_repo.get_author(author.id) is not None
