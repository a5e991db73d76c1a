"""Genre pages under /catalog."""
from __future__ import annotations

from typing import Any, Dict, Iterable, Optional

from flask import Blueprint, redirect, render_template, request, url_for
from flask_babel import gettext as _

from locallibrary.services import genres_service
from locallibrary.services.errors import FormValidationError, RecordInUseError
from locallibrary.utils.logging import get_logger

LOG = get_logger("routes.genres")

bp = Blueprint("genres", __name__, url_prefix="/catalog")


def _render_form(title: str, values: Optional[Dict[str, Any]] = None, errors: Iterable = ()):
    return render_template("genre_form.html", title=title, values=values or {}, errors=list(errors))


def _render_delete(genre, books):
    return render_template("genre_delete.html", title=_("Delete Genre"), genre=genre, genre_books=books)


@bp.route("/genres", methods=["GET"])
def genre_list():
    return render_template("genre_list.html", title=_("Genre List"), genre_list=genres_service.list_genres())


@bp.route("/genre/<record_id:genre_id>", methods=["GET"])
def genre_detail(genre_id: int):
    detail = genres_service.get_genre_detail(genre_id)
    return render_template(
        "genre_detail.html",
        title=_("Genre Detail"),
        genre=detail.genre,
        genre_books=detail.books,
    )


@bp.route("/genre/create", methods=["GET", "POST"])
def genre_create():
    title = _("Create Genre")
    if request.method == "GET":
        return _render_form(title)
    try:
        result = genres_service.create_genre(request.form)
    except FormValidationError as exc:
        return _render_form(title, exc.values, exc.errors)
    return redirect(url_for("genres.genre_detail", genre_id=result.genre.id))


@bp.route("/genre/<record_id:genre_id>/update", methods=["GET", "POST"])
def genre_update(genre_id: int):
    title = _("Update Genre")
    if request.method == "GET":
        genre = genres_service.get_genre(genre_id)
        return _render_form(title, genres_service.form_values(genre))
    try:
        genre = genres_service.update_genre(genre_id, request.form)
    except FormValidationError as exc:
        return _render_form(title, exc.values, exc.errors)
    return redirect(url_for("genres.genre_detail", genre_id=genre.id))


@bp.route("/genre/<record_id:genre_id>/delete", methods=["GET", "POST"])
def genre_delete(genre_id: int):
    if request.method == "GET":
        context = genres_service.get_delete_context(genre_id)
        if context is None:
            return redirect(url_for("genres.genre_list"))
        return _render_delete(context.genre, context.books)
    try:
        genres_service.delete_genre(genre_id)
    except RecordInUseError as exc:
        LOG.info("Refused to delete genre id=%s: %s book(s) use it", genre_id, len(exc.dependents))
        return _render_delete(exc.record, exc.dependents)
    return redirect(url_for("genres.genre_list"))


def register_genres(app: Any) -> None:
    if getattr(app, "_genres_bp", None):
        return
    app.register_blueprint(bp)
    setattr(app, "_genres_bp", bp)
    LOG.debug("genres blueprint registered")


__all__ = ["bp", "register_genres"]
