"""ORM models aggregate exports."""
from .catalog import (  # noqa: F401
	Base,
	Author,
	Genre,
	Book,
	BookInstance,
	book_genres,
	BOOK_INSTANCE_STATUSES,
	DEFAULT_BOOK_INSTANCE_STATUS,
)

__all__ = [
	"Base",
	"Author",
	"Genre",
	"Book",
	"BookInstance",
	"book_genres",
	"BOOK_INSTANCE_STATUSES",
	"DEFAULT_BOOK_INSTANCE_STATUS",
]
