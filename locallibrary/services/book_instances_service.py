"""BookInstance (physical copy) operations."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any, Dict, List, Mapping

from flask_babel import gettext as _

from locallibrary.db.models import BOOK_INSTANCE_STATUSES, DEFAULT_BOOK_INSTANCE_STATUS, Book, BookInstance
from locallibrary.db.repositories import book_instances_repo, books_repo
from locallibrary.services import fanout
from locallibrary.services.errors import FormValidationError, RecordNotFoundError
from locallibrary.services.validation import (
    FieldError,
    FieldRule,
    integer_id,
    iso_date,
    one_of,
    optional_date,
    process_form,
    required,
)
from locallibrary.utils.logging import get_logger

LOG = get_logger("services.book_instances")

BOOK_INSTANCE_FORM_RULES = (
    FieldRule("book", (required("Book must be specified"), integer_id("Book does not exist"))),
    FieldRule("imprint", (required("Imprint must be specified"),)),
    FieldRule("status", (one_of(BOOK_INSTANCE_STATUSES, "Invalid status"),)),
    FieldRule("due_back", (iso_date("Invalid date"),)),
)


@dataclass
class BookInstanceEditContext:
    instance: BookInstance
    books: List[Book]


def statuses() -> List[str]:
    return list(BOOK_INSTANCE_STATUSES)


def list_instances() -> List[BookInstance]:
    return book_instances_repo.list_instances()


def get_instance(instance_id: int) -> BookInstance:
    instance = book_instances_repo.get_instance(instance_id)
    if instance is None:
        raise RecordNotFoundError("bookinstance", instance_id)
    return instance


def list_book_options() -> List[Book]:
    return books_repo.list_books()


def get_edit_context(instance_id: int) -> BookInstanceEditContext:
    results = fanout.gather(
        instance=lambda: book_instances_repo.get_instance(instance_id),
        books=books_repo.list_books,
    )
    if results["instance"] is None:
        raise RecordNotFoundError("bookinstance", instance_id)
    return BookInstanceEditContext(instance=results["instance"], books=results["books"])


def form_values(instance: BookInstance) -> Dict[str, Any]:
    return {
        "book": str(instance.book_id),
        "imprint": instance.imprint,
        "status": instance.status,
        "due_back": instance.due_back.isoformat() if instance.due_back else "",
    }


def _validated_fields(form: Mapping[str, Any]) -> Dict[str, Any]:
    values, errors = process_form(form, BOOK_INSTANCE_FORM_RULES)
    if not any(e.field == "book" for e in errors):
        if books_repo.get_book(int(values["book"])) is None:
            errors.append(FieldError("book", _("Book does not exist")))
    if errors:
        LOG.debug("Book instance form rejected fields=%s", [e.field for e in errors])
        raise FormValidationError(values, errors)
    return {
        "book_id": int(values["book"]),
        "imprint": values["imprint"],
        "status": values["status"] or DEFAULT_BOOK_INSTANCE_STATUS,
        "due_back": optional_date(values["due_back"]),
    }


def create_instance(form: Mapping[str, Any]) -> BookInstance:
    fields = _validated_fields(form)
    instance = book_instances_repo.create_instance(**fields)
    LOG.info("Created book instance id=%s book_id=%s status=%s", instance.id, instance.book_id, instance.status)
    return instance


def update_instance(instance_id: int, form: Mapping[str, Any]) -> BookInstance:
    get_instance(instance_id)
    fields = _validated_fields(form)
    if fields["due_back"] is None:
        fields["due_back"] = date.today()
    instance = book_instances_repo.update_instance(instance_id, **fields)
    if instance is None:
        raise RecordNotFoundError("bookinstance", instance_id)
    LOG.info("Updated book instance id=%s", instance_id)
    return instance


def delete_instance(instance_id: int) -> bool:
    removed = book_instances_repo.delete_instance(instance_id)
    if removed:
        LOG.info("Deleted book instance id=%s", instance_id)
    return removed


__all__ = [
    "BOOK_INSTANCE_FORM_RULES",
    "BookInstanceEditContext",
    "statuses",
    "list_instances",
    "get_instance",
    "list_book_options",
    "get_edit_context",
    "form_values",
    "create_instance",
    "update_instance",
    "delete_instance",
]
