"""BookInstance (copy) pages under /catalog."""
from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional

from flask import Blueprint, redirect, render_template, request, url_for
from flask_babel import gettext as _

from locallibrary.services import book_instances_service
from locallibrary.services.errors import FormValidationError
from locallibrary.utils.logging import get_logger

LOG = get_logger("routes.book_instances")

bp = Blueprint("book_instances", __name__, url_prefix="/catalog")


def _render_form(
    title: str,
    books: List[Any],
    values: Optional[Dict[str, Any]] = None,
    errors: Iterable = (),
):
    return render_template(
        "bookinstance_form.html",
        title=title,
        book_list=books,
        statuses=book_instances_service.statuses(),
        values=values or {},
        errors=list(errors),
    )


@bp.route("/bookinstances", methods=["GET"])
def bookinstance_list():
    return render_template(
        "bookinstance_list.html",
        title=_("Book Instance List"),
        bookinstance_list=book_instances_service.list_instances(),
    )


@bp.route("/bookinstance/<record_id:instance_id>", methods=["GET"])
def bookinstance_detail(instance_id: int):
    instance = book_instances_service.get_instance(instance_id)
    return render_template(
        "bookinstance_detail.html",
        title=_("Copy: %(title)s", title=instance.book.title),
        bookinstance=instance,
    )


@bp.route("/bookinstance/create", methods=["GET", "POST"])
def bookinstance_create():
    title = _("Create BookInstance")
    if request.method == "GET":
        return _render_form(title, book_instances_service.list_book_options())
    try:
        instance = book_instances_service.create_instance(request.form)
    except FormValidationError as exc:
        return _render_form(title, book_instances_service.list_book_options(), exc.values, exc.errors)
    return redirect(url_for("book_instances.bookinstance_detail", instance_id=instance.id))


@bp.route("/bookinstance/<record_id:instance_id>/update", methods=["GET", "POST"])
def bookinstance_update(instance_id: int):
    title = _("Update BookInstance")
    if request.method == "GET":
        context = book_instances_service.get_edit_context(instance_id)
        return _render_form(title, context.books, book_instances_service.form_values(context.instance))
    try:
        instance = book_instances_service.update_instance(instance_id, request.form)
    except FormValidationError as exc:
        return _render_form(title, book_instances_service.list_book_options(), exc.values, exc.errors)
    return redirect(url_for("book_instances.bookinstance_detail", instance_id=instance.id))


@bp.route("/bookinstance/<record_id:instance_id>/delete", methods=["GET", "POST"])
def bookinstance_delete(instance_id: int):
    if request.method == "GET":
        instance = book_instances_service.get_instance(instance_id)
        return render_template("bookinstance_delete.html", title=_("Delete BookInstance"), bookinstance=instance)
    book_instances_service.delete_instance(instance_id)
    return redirect(url_for("book_instances.bookinstance_list"))


def register_book_instances(app: Any) -> None:
    if getattr(app, "_book_instances_bp", None):
        return
    app.register_blueprint(bp)
    setattr(app, "_book_instances_bp", bp)
    LOG.debug("book instances blueprint registered")


__all__ = ["bp", "register_book_instances"]
