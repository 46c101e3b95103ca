"""
Citizen Platform – Django Settings (Infrastructure Only)
========================================================
Django serves as the framework container for the HTTP adapter.
Platform architecture is the authority — Django does not dictate structure.

Platform state is held in memory by the runtime; no platform module
registers models.
"""

import os
from pathlib import Path

# ── Paths ─────────────────────────────────────────────────────
BASE_DIR = Path(__file__).resolve().parent.parent

# ── Security ──────────────────────────────────────────────────
SECRET_KEY = os.environ.get("CITIZEN_SECRET_KEY", "citizen-dev-key-replace-before-deployment")

DEBUG = os.environ.get("CITIZEN_DEBUG", "1") == "1"

ALLOWED_HOSTS = ["localhost", "127.0.0.1", "testserver"]

# ── Installed Apps ────────────────────────────────────────────
INSTALLED_APPS = [
    "django.contrib.auth",
    "django.contrib.contenttypes",
]

# ── Middleware ────────────────────────────────────────────────
MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.middleware.common.CommonMiddleware",
]

# ── URL & WSGI ────────────────────────────────────────────────
ROOT_URLCONF = "config.urls"

# ── Database ──────────────────────────────────────────────────
# SQLite for development. Platform records do not live here.
DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": BASE_DIR / "db.sqlite3",
    }
}

# ── Internationalization ──────────────────────────────────────
LANGUAGE_CODE = "en-us"
TIME_ZONE = "UTC"
USE_I18N = True
USE_TZ = True

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

# ── Platform ──────────────────────────────────────────────────
# Overrides for core.config.limits.PlatformLimits. Keys not listed
# fall back to CITIZEN_* environment variables, then defaults.
CITIZEN_PLATFORM_LIMITS = {}

# Liquid balance credited to the platform pool at startup (dev only).
CITIZEN_INITIAL_YIELD_POOL = int(os.environ.get("CITIZEN_INITIAL_YIELD_POOL", "0"))

# ── Logging ───────────────────────────────────────────────────
CITIZEN_LOG_LEVEL = os.environ.get("CITIZEN_LOG_LEVEL", "INFO")

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "plain": {
            "format": "%(asctime)s %(levelname)s %(name)s: %(message)s",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "plain",
        },
    },
    "loggers": {
        "citizen": {
            "handlers": ["console"],
            "level": CITIZEN_LOG_LEVEL,
            "propagate": True,
        },
    },
}
