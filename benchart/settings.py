"""Django settings for benchart.

benchart runs as a set of management commands; there is no database and no
HTTP surface. Configuration is driven by environment variables.
"""

from __future__ import annotations

import os
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent.parent


def _env_bool(name: str, *, default: bool) -> bool:
    """Parse a boolean environment variable.

    Args:
        name: Environment variable name.
        default: Value when the variable is not set.

    Returns:
        Parsed boolean value.
    """

    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "t", "yes", "y", "on"}


def _env_str(name: str, *, default: str) -> str:
    """Read a string environment variable, ignoring blank values.

    Args:
        name: Environment variable name.
        default: Value when the variable is not set or blank.

    Returns:
        The trimmed value or the default.
    """

    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip()


DEBUG = _env_bool("DJANGO_DEBUG", default=True)

_DEV_SECRET_KEY = "dev-only-insecure-secret-key"
SECRET_KEY = os.getenv("DJANGO_SECRET_KEY") or (_DEV_SECRET_KEY if DEBUG else "")
if not SECRET_KEY:
    raise RuntimeError("DJANGO_SECRET_KEY is required when DJANGO_DEBUG is False.")

ALLOWED_HOSTS: list[str] = []

INSTALLED_APPS = [
    "core.apps.CoreConfig",
]

TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [],
        "APP_DIRS": True,
        "OPTIONS": {},
    }
]

DATABASES: dict[str, dict[str, str]] = {}

LANGUAGE_CODE = "en-us"
TIME_ZONE = "UTC"
USE_I18N = False
USE_TZ = True

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

BENCHART_LOG_LEVEL = _env_str("BENCHART_LOG_LEVEL", default="WARNING").upper()
BENCHART_HTML_TEMPLATE = _env_str("BENCHART_HTML_TEMPLATE", default="core/benchart.html")
BENCHART_CHART_JS_URL = _env_str(
    "BENCHART_CHART_JS_URL",
    default="https://cdn.jsdelivr.net/npm/chart.js@4.4.1/dist/chart.umd.min.js",
)

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "plain": {"format": "%(levelname)s %(name)s: %(message)s"},
    },
    "handlers": {
        "console": {"class": "logging.StreamHandler", "formatter": "plain"},
    },
    "loggers": {
        "analysis": {"handlers": ["console"], "level": BENCHART_LOG_LEVEL, "propagate": False},
        "core": {"handlers": ["console"], "level": BENCHART_LOG_LEVEL, "propagate": False},
    },
}
