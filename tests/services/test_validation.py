"""Tests for form sanitization and the field validators."""
from __future__ import annotations

from datetime import date

import pytest
from werkzeug.datastructures import MultiDict

from locallibrary.services.validation import (
    FieldRule,
    alphanumeric,
    iso_date,
    integer_id,
    max_length,
    MAX_RECORD_ID,
    parse_iso_date,
    parse_record_id,
    process_form,
    required,
    sanitize_text,
)

RULES = (
    FieldRule("name", (
        required("Name required"),
        max_length(5, "Name too long"),
        alphanumeric("Name has non-alphanumeric characters."),
    )),
    FieldRule("born", (iso_date("Invalid date"),)),
    FieldRule("tags", multiple=True),
)


def test_sanitize_text_trims_and_escapes():
    assert sanitize_text("  <b>Tom & Jerry</b> ") == "&lt;b&gt;Tom &amp; Jerry&lt;/b&gt;"
    assert sanitize_text(None) == ""


def test_process_form_collects_one_error_per_field_in_rule_order():
    values, errors = process_form({"name": "", "born": "yesterday"}, RULES)

    assert values["name"] == ""
    assert [(e.field, e.message) for e in errors] == [
        ("name", "Name required"),
        ("born", "Invalid date"),
    ]


def test_field_validation_stops_at_first_failure():
    _values, errors = process_form({"name": "a-b-c-d-e-f"}, RULES)

    assert [e.message for e in errors] == ["Name too long"]


def test_markup_characters_fail_alphanumeric_after_escaping():
    values, errors = process_form({"name": "<i>"}, (FieldRule("name", (alphanumeric("bad"),)),))

    assert values["name"] == "&lt;i&gt;"
    assert [e.message for e in errors] == ["bad"]


def test_multiple_field_accepts_absent_single_and_repeated_values():
    assert process_form({}, RULES)[0]["tags"] == []
    assert process_form({"tags": "1"}, RULES)[0]["tags"] == ["1"]
    form = MultiDict([("tags", "1"), ("tags", " 2 ")])
    assert process_form(form, RULES)[0]["tags"] == ["1", "2"]


def test_empty_optional_date_is_valid():
    _values, errors = process_form({"name": "ok", "born": ""}, RULES)

    assert errors == []


@pytest.mark.parametrize("raw", ["2024-13-40", "2023-02-29", "31/12/2020", "soon"])
def test_impossible_or_malformed_dates_are_rejected(raw):
    _values, errors = process_form({"name": "ok", "born": raw}, RULES)

    assert [e.field for e in errors] == ["born"]


def test_parse_iso_date_truncates_datetimes():
    assert parse_iso_date("1983-10-14") == date(1983, 10, 14)
    assert parse_iso_date("1983-10-14T08:30:00") == date(1983, 10, 14)


def test_parse_record_id_accepts_ascii_digits_within_range():
    assert parse_record_id("42") == 42
    assert parse_record_id(str(MAX_RECORD_ID)) == MAX_RECORD_ID


@pytest.mark.parametrize("raw", ["", "-1", "4.2", "²", "٣", str(MAX_RECORD_ID + 1), "99999999999999999999999"])
def test_parse_record_id_rejects_non_ascii_and_oversized(raw):
    assert parse_record_id(raw) is None


def test_integer_id_reports_unstorable_ids():
    check = integer_id("Book does not exist")

    assert check("") is None
    assert check("7") is None
    assert check("²") == "Book does not exist"
    assert check("99999999999999999999999") == "Book does not exist"
