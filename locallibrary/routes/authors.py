"""Author pages under /catalog: list, detail, create, update, delete."""
from __future__ import annotations

from typing import Any, Dict, Iterable, Optional

from flask import Blueprint, redirect, render_template, request, url_for
from flask_babel import gettext as _

from locallibrary.services import authors_service
from locallibrary.services.errors import FormValidationError, RecordInUseError
from locallibrary.utils.logging import get_logger

LOG = get_logger("routes.authors")

bp = Blueprint("authors", __name__, url_prefix="/catalog")


def _render_form(title: str, values: Optional[Dict[str, Any]] = None, errors: Iterable = ()):
    return render_template("author_form.html", title=title, values=values or {}, errors=list(errors))


def _render_delete(author, books):
    return render_template("author_delete.html", title=_("Delete Author"), author=author, author_books=books)


@bp.route("/authors", methods=["GET"])
def author_list():
    return render_template("author_list.html", title=_("Author List"), author_list=authors_service.list_authors())


@bp.route("/author/<record_id:author_id>", methods=["GET"])
def author_detail(author_id: int):
    detail = authors_service.get_author_detail(author_id)
    return render_template(
        "author_detail.html",
        title=_("Author Detail"),
        author=detail.author,
        author_books=detail.books,
    )


@bp.route("/author/create", methods=["GET", "POST"])
def author_create():
    title = _("Create Author")
    if request.method == "GET":
        return _render_form(title)
    try:
        author = authors_service.create_author(request.form)
    except FormValidationError as exc:
        return _render_form(title, exc.values, exc.errors)
    return redirect(url_for("authors.author_detail", author_id=author.id))


@bp.route("/author/<record_id:author_id>/update", methods=["GET", "POST"])
def author_update(author_id: int):
    title = _("Update Author")
    if request.method == "GET":
        author = authors_service.get_author(author_id)
        return _render_form(title, authors_service.form_values(author))
    try:
        author = authors_service.update_author(author_id, request.form)
    except FormValidationError as exc:
        return _render_form(title, exc.values, exc.errors)
    return redirect(url_for("authors.author_detail", author_id=author.id))


@bp.route("/author/<record_id:author_id>/delete", methods=["GET", "POST"])
def author_delete(author_id: int):
    if request.method == "GET":
        context = authors_service.get_delete_context(author_id)
        if context is None:
            return redirect(url_for("authors.author_list"))
        return _render_delete(context.author, context.books)
    try:
        authors_service.delete_author(author_id)
    except RecordInUseError as exc:
        LOG.info("Refused to delete author id=%s: %s book(s) reference it", author_id, len(exc.dependents))
        return _render_delete(exc.record, exc.dependents)
    return redirect(url_for("authors.author_list"))


def register_authors(app: Any) -> None:
    if getattr(app, "_authors_bp", None):  # idempotent
        return
    app.register_blueprint(bp)
    setattr(app, "_authors_bp", bp)
    LOG.debug("authors blueprint registered")


__all__ = ["bp", "register_authors"]
