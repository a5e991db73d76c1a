"""Repository helpers for BookInstance (physical copy) records."""
from __future__ import annotations

from datetime import date
from typing import List, Optional

from sqlalchemy.orm import joinedload

from locallibrary.db import app_session
from locallibrary.db.models import Book, BookInstance


def list_instances() -> List[BookInstance]:
    with app_session() as session:
        return (
            session.query(BookInstance)
            .join(BookInstance.book)
            .options(joinedload(BookInstance.book))
            .order_by(Book.title.asc(), BookInstance.id.asc())
            .all()
        )


def get_instance(instance_id: int) -> Optional[BookInstance]:
    with app_session() as session:
        return (
            session.query(BookInstance)
            .options(joinedload(BookInstance.book))
            .filter(BookInstance.id == instance_id)
            .one_or_none()
        )


def list_instances_for_book(book_id: int) -> List[BookInstance]:
    with app_session() as session:
        return (
            session.query(BookInstance)
            .filter(BookInstance.book_id == book_id)
            .order_by(BookInstance.id.asc())
            .all()
        )


def create_instance(
    book_id: int,
    imprint: str,
    status: Optional[str] = None,
    due_back: Optional[date] = None,
) -> BookInstance:
    payload = {"book_id": book_id, "imprint": imprint}
    # Omitted keys fall back to the column defaults (Maintenance / today).
    if status is not None:
        payload["status"] = status
    if due_back is not None:
        payload["due_back"] = due_back
    instance = BookInstance(**payload)
    with app_session() as session:
        session.add(instance)
    return instance


def update_instance(
    instance_id: int,
    *,
    book_id: int,
    imprint: str,
    status: str,
    due_back: date,
) -> Optional[BookInstance]:
    with app_session() as session:
        instance = session.query(BookInstance).filter(BookInstance.id == instance_id).one_or_none()
        if not instance:
            return None
        instance.book_id = book_id
        instance.imprint = imprint
        instance.status = status
        instance.due_back = due_back
        return instance


def delete_instance(instance_id: int) -> bool:
    with app_session() as session:
        instance = session.query(BookInstance).filter(BookInstance.id == instance_id).one_or_none()
        if not instance:
            return False
        session.delete(instance)
        return True


def count_instances(status: Optional[str] = None) -> int:
    with app_session() as session:
        query = session.query(BookInstance)
        if status is not None:
            query = query.filter(BookInstance.status == status)
        return query.count()


__all__ = [
    "list_instances",
    "get_instance",
    "list_instances_for_book",
    "create_instance",
    "update_instance",
    "delete_instance",
    "count_instances",
]
