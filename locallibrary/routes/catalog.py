"""Catalog home page with record counts."""
from __future__ import annotations

from typing import Any

from flask import Blueprint, redirect, render_template, url_for
from flask_babel import gettext as _

from locallibrary.services import catalog_service
from locallibrary.utils.logging import get_logger

LOG = get_logger("routes.catalog")

bp = Blueprint("catalog", __name__)


@bp.route("/", methods=["GET"])
def root():
    return redirect(url_for("catalog.index"))


@bp.route("/catalog/", methods=["GET"])
def index():
    counts = catalog_service.catalog_counts()
    return render_template("index.html", title=_("Local Library Home"), data=counts)


def register_catalog(app: Any) -> None:
    if getattr(app, "_catalog_bp", None):
        return
    app.register_blueprint(bp)
    setattr(app, "_catalog_bp", bp)
    LOG.debug("catalog blueprint registered")


__all__ = ["bp", "register_catalog"]
