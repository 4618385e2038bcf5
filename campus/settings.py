"""Django settings for the academic records engine."""
import os
from pathlib import Path

from dotenv import load_dotenv

BASE_DIR = Path(__file__).resolve().parent.parent

load_dotenv(BASE_DIR / ".env")


def env_bool(name, default=False):
    val = os.environ.get(name)
    if val is None:
        return default
    return str(val).strip().lower() in ("1", "true", "yes", "on")


SECRET_KEY = os.environ.get("SECRET_KEY", "django-insecure-academic-records-secret-key")
DEBUG = env_bool("DEBUG", True)
ALLOWED_HOSTS: list[str] = [
    h.strip()
    for h in os.environ.get("ALLOWED_HOSTS", "*").split(",")
    if h.strip()
]

INSTALLED_APPS = [
    "django.contrib.contenttypes",
    "academics.apps.AcademicsConfig",
]

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": os.environ.get("DATABASE_PATH", str(BASE_DIR / "academic_records.db")),
        # Seconds to wait on a locked database before OperationalError.
        "OPTIONS": {"timeout": float(os.environ.get("DB_TIMEOUT", "5"))},
    }
}

LANGUAGE_CODE = "en-us"
TIME_ZONE = os.environ.get("TIME_ZONE", "UTC")
USE_I18N = True
USE_TZ = True

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "simple": {
            "format": "%(asctime)s %(levelname)s %(name)s: %(message)s",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "simple",
        },
    },
    "loggers": {
        "academics": {
            "handlers": ["console"],
            "level": os.environ.get("ACADEMICS_LOG_LEVEL", "INFO"),
            "propagate": True,
        },
    },
}

# Store access: bounded retries for lock timeouts and serialization failures.
ACADEMICS_STORE_RETRY_ATTEMPTS = int(os.environ.get("ACADEMICS_STORE_RETRY_ATTEMPTS", "3"))
ACADEMICS_STORE_RETRY_BACKOFF = float(os.environ.get("ACADEMICS_STORE_RETRY_BACKOFF", "0.05"))

# Grading policy. Anything left unset falls back to academics.conf defaults.
ACADEMICS_PASSING_GRADE = "D"
ACADEMICS_MISSING_RESULT_POLICY = "reject"
ACADEMICS_GPA_STATUSES = ("Completed",)
