"""Storage-level error types shared by the repositories."""
from __future__ import annotations

from typing import Any, Sequence


class StoreError(RuntimeError):
    """Raised when the underlying database operation fails."""


class RecordInUseError(RuntimeError):
    """Raised when a delete is refused because other records still reference the target.

    ``record`` is the parent that was kept, ``dependents`` the referencing
    children found inside the same transaction.
    """

    def __init__(self, kind: str, record: Any, dependents: Sequence[Any]):
        super().__init__(f"{kind} {getattr(record, 'id', '?')} is referenced by {len(dependents)} record(s)")
        self.kind = kind
        self.record = record
        self.dependents = list(dependents)


__all__ = ["StoreError", "RecordInUseError"]
