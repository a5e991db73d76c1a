"""Error types raised by the catalog services."""
from __future__ import annotations

from typing import Any, Dict, List, Sequence

from locallibrary.db.errors import RecordInUseError, StoreError
from locallibrary.services.validation import FieldError


class RecordNotFoundError(LookupError):
    """Raised when a requested catalog record does not exist."""

    def __init__(self, kind: str, record_id: Any):
        super().__init__(f"{kind} {record_id} not found")
        self.kind = kind
        self.record_id = record_id


class FormValidationError(ValueError):
    """Raised when a submitted form fails validation.

    Carries the sanitized submitted values so the form can be rendered
    again, plus the field errors in field order.
    """

    def __init__(self, values: Dict[str, Any], errors: Sequence[FieldError]):
        super().__init__("; ".join(f"{e.field}: {e.message}" for e in errors))
        self.values = dict(values)
        self.errors: List[FieldError] = list(errors)

    def messages_for(self, field: str) -> List[str]:
        return [e.message for e in self.errors if e.field == field]


__all__ = [
    "RecordNotFoundError",
    "FormValidationError",
    "RecordInUseError",
    "StoreError",
]
