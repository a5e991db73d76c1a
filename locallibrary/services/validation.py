"""Form sanitization and field validation.

Each form is described by an ordered list of `FieldRule`s. A rule names a
field and the validators to apply to its sanitized value; a validator is a
plain function returning an error message (untranslated) or ``None``.
Validation of one field stops at its first failure, every field is checked,
and the caller decides accept/reject from the collected `FieldError`s.
"""
from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from flask_babel import gettext as _
from markupsafe import escape

Validator = Callable[[Any], Optional[str]]

_ALNUM_RE = re.compile(r"^[0-9A-Za-z]+$")

# Largest value a SQLite INTEGER primary key can hold.
MAX_RECORD_ID = 2**63 - 1


@dataclass(frozen=True)
class FieldError:
    field: str
    message: str


@dataclass(frozen=True)
class FieldRule:
    name: str
    validators: Sequence[Validator] = field(default_factory=tuple)
    multiple: bool = False


def sanitize_text(raw: Any) -> str:
    """Trim surrounding whitespace and escape markup-significant characters."""
    if raw is None:
        return ""
    return str(escape(str(raw).strip()))


def as_list(raw: Any) -> List[str]:
    """Normalize an absent, single or repeated form value to a list."""
    if raw is None:
        return []
    if isinstance(raw, (list, tuple, set)):
        return [str(v) for v in raw]
    return [str(raw)]


def _raw_values(form: Mapping[str, Any], name: str) -> List[str]:
    getlist = getattr(form, "getlist", None)
    if callable(getlist):
        return [str(v) for v in getlist(name)]
    return as_list(form.get(name))


def parse_iso_date(value: str) -> date:
    """Parse an ISO 8601 calendar date (a datetime is truncated to its date).

    Raises ValueError for anything else, including impossible dates such as
    2024-13-40.
    """
    try:
        return date.fromisoformat(value)
    except ValueError:
        return datetime.fromisoformat(value).date()


def parse_record_id(value: Any) -> Optional[int]:
    """Integer record id from ASCII digits within the storable range, else None."""
    text = str(value)
    if not (text.isascii() and text.isdigit()):
        return None
    record_id = int(text)
    if record_id > MAX_RECORD_ID:
        return None
    return record_id


def optional_date(value: Optional[str]) -> Optional[date]:
    """Parse a validated optional date field; empty means no date."""
    if not value:
        return None
    return parse_iso_date(value)


# --- validator factories -------------------------------------------------

def required(message: str) -> Validator:
    def _check(value: Any) -> Optional[str]:
        return None if value else message
    return _check


def max_length(limit: int, message: str) -> Validator:
    def _check(value: Any) -> Optional[str]:
        if value and len(value) > limit:
            return message
        return None
    return _check


def alphanumeric(message: str) -> Validator:
    def _check(value: Any) -> Optional[str]:
        if value and not _ALNUM_RE.match(value):
            return message
        return None
    return _check


def iso_date(message: str) -> Validator:
    def _check(value: Any) -> Optional[str]:
        if not value:
            return None
        try:
            parse_iso_date(value)
        except ValueError:
            return message
        return None
    return _check


def integer_id(message: str) -> Validator:
    def _check(value: Any) -> Optional[str]:
        if not value:
            return None
        if parse_record_id(value) is None:
            return message
        return None
    return _check


def one_of(choices: Iterable[str], message: str) -> Validator:
    allowed = tuple(choices)

    def _check(value: Any) -> Optional[str]:
        if value and value not in allowed:
            return message
        return None
    return _check


# --- form processing -----------------------------------------------------

def sanitize_form(form: Mapping[str, Any], rules: Sequence[FieldRule]) -> Dict[str, Any]:
    values: Dict[str, Any] = {}
    for rule in rules:
        raw = _raw_values(form, rule.name)
        if rule.multiple:
            values[rule.name] = [sanitize_text(v) for v in raw]
        else:
            values[rule.name] = sanitize_text(raw[0] if raw else None)
    return values


def validate_values(values: Mapping[str, Any], rules: Sequence[FieldRule]) -> List[FieldError]:
    errors: List[FieldError] = []
    for rule in rules:
        value = values.get(rule.name)
        for validator in rule.validators:
            message = validator(value)
            if message:
                errors.append(FieldError(rule.name, _(message)))
                break
    return errors


def process_form(
    form: Mapping[str, Any],
    rules: Sequence[FieldRule],
) -> Tuple[Dict[str, Any], List[FieldError]]:
    """Sanitize then validate ``form``; returns (values, errors)."""
    values = sanitize_form(form, rules)
    return values, validate_values(values, rules)


__all__ = [
    "FieldError",
    "FieldRule",
    "Validator",
    "sanitize_text",
    "as_list",
    "parse_iso_date",
    "optional_date",
    "MAX_RECORD_ID",
    "parse_record_id",
    "required",
    "max_length",
    "alphanumeric",
    "iso_date",
    "integer_id",
    "one_of",
    "sanitize_form",
    "validate_values",
    "process_form",
]
