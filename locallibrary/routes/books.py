"""Book pages under /catalog."""
from __future__ import annotations

from typing import Any, Dict, Iterable, Optional

from flask import Blueprint, redirect, render_template, request, url_for
from flask_babel import gettext as _

from locallibrary.services import books_service
from locallibrary.services.books_service import BookFormOptions
from locallibrary.services.errors import FormValidationError, RecordInUseError
from locallibrary.utils.logging import get_logger

LOG = get_logger("routes.books")

bp = Blueprint("books", __name__, url_prefix="/catalog")


def _render_form(
    title: str,
    options: BookFormOptions,
    values: Optional[Dict[str, Any]] = None,
    errors: Iterable = (),
):
    values = values or {}
    return render_template(
        "book_form.html",
        title=title,
        authors=options.authors,
        genres=options.genres,
        selected_genres=set(values.get("genre") or ()),
        values=values,
        errors=list(errors),
    )


def _render_delete(book, instances):
    return render_template("book_delete.html", title=_("Delete Book"), book=book, book_instances=instances)


@bp.route("/books", methods=["GET"])
def book_list():
    return render_template("book_list.html", title=_("Book List"), book_list=books_service.list_books())


@bp.route("/book/<record_id:book_id>", methods=["GET"])
def book_detail(book_id: int):
    detail = books_service.get_book_detail(book_id)
    return render_template(
        "book_detail.html",
        title=detail.book.title,
        book=detail.book,
        book_instances=detail.instances,
    )


@bp.route("/book/create", methods=["GET", "POST"])
def book_create():
    title = _("Create Book")
    if request.method == "GET":
        return _render_form(title, books_service.get_form_options())
    try:
        book = books_service.create_book(request.form)
    except FormValidationError as exc:
        return _render_form(title, books_service.get_form_options(), exc.values, exc.errors)
    return redirect(url_for("books.book_detail", book_id=book.id))


@bp.route("/book/<record_id:book_id>/update", methods=["GET", "POST"])
def book_update(book_id: int):
    title = _("Update Book")
    if request.method == "GET":
        context = books_service.get_edit_context(book_id)
        return _render_form(title, context.options, books_service.form_values(context.book))
    try:
        book = books_service.update_book(book_id, request.form)
    except FormValidationError as exc:
        return _render_form(title, books_service.get_form_options(), exc.values, exc.errors)
    return redirect(url_for("books.book_detail", book_id=book.id))


@bp.route("/book/<record_id:book_id>/delete", methods=["GET", "POST"])
def book_delete(book_id: int):
    if request.method == "GET":
        context = books_service.get_delete_context(book_id)
        if context is None:
            return redirect(url_for("books.book_list"))
        return _render_delete(context.book, context.instances)
    try:
        books_service.delete_book(book_id)
    except RecordInUseError as exc:
        LOG.info("Refused to delete book id=%s: %s copies exist", book_id, len(exc.dependents))
        return _render_delete(exc.record, exc.dependents)
    return redirect(url_for("books.book_list"))


def register_books(app: Any) -> None:
    if getattr(app, "_books_bp", None):
        return
    app.register_blueprint(bp)
    setattr(app, "_books_bp", bp)
    LOG.debug("books blueprint registered")


__all__ = ["bp", "register_books"]
