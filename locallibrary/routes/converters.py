"""URL converters for catalog record ids."""
from __future__ import annotations

from typing import Any

from werkzeug.routing import IntegerConverter

from locallibrary.services.validation import MAX_RECORD_ID


class RecordIdConverter(IntegerConverter):
    """Non-negative integer id no larger than the store can hold.

    Larger values do not match the route, so they answer 404 like any
    other unknown id.
    """

    def __init__(self, url_map: Any, *args: Any, **kwargs: Any) -> None:
        kwargs.setdefault("max", MAX_RECORD_ID)
        super().__init__(url_map, *args, **kwargs)


def register_converters(app: Any) -> None:
    app.url_map.converters.setdefault("record_id", RecordIdConverter)


__all__ = ["RecordIdConverter", "register_converters"]
