"""Flask-Babel setup for the catalog UI."""
from __future__ import annotations

from pathlib import Path
from typing import Any, List

from flask import request
from flask_babel import Babel

from locallibrary import config as app_config
from locallibrary.utils.logging import get_logger

LOG = get_logger("i18n")

_TRANSLATIONS_ROOT = Path(__file__).resolve().parents[1] / "translations"
SUPPORTED_LANGUAGES = ("en",)


def _supported_languages() -> List[str]:
    languages = list(SUPPORTED_LANGUAGES)
    default = app_config.default_locale()
    if default not in languages:
        languages.append(default)
    return languages


def select_locale() -> str:
    """Best match from Accept-Language, falling back to the configured default."""
    match = request.accept_languages.best_match(_supported_languages())
    return match or app_config.default_locale()


def configure_translations(app: Any) -> Babel:
    app.config.setdefault("BABEL_DEFAULT_LOCALE", app_config.default_locale())
    if _TRANSLATIONS_ROOT.is_dir():
        app.config.setdefault("BABEL_TRANSLATION_DIRECTORIES", str(_TRANSLATIONS_ROOT))
    babel = Babel(app, locale_selector=select_locale)
    LOG.debug("Flask-Babel configured default_locale=%s", app.config["BABEL_DEFAULT_LOCALE"])
    return babel


__all__ = ["configure_translations", "select_locale", "SUPPORTED_LANGUAGES"]
