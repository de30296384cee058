import os

# Ensure test settings do not trigger production validation.
os.environ.setdefault("DJANGO_DEBUG", "1")
os.environ.setdefault(
    "DJANGO_SECRET_KEY",
    "test-secret-key-0123456789abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ",
)
os.environ.setdefault("LOG_TO_FILE", "0")

from .settings import *  # noqa: F403,F401

DEBUG = True
SECRET_KEY = os.environ["DJANGO_SECRET_KEY"]

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": BASE_DIR / "test_db.sqlite3",  # noqa: F405
    }
}

ALLOWED_HOSTS = ["testserver", "localhost", "k-r.by"]

# Non-manifest static storage: no collectstatic artifacts in tests.
STORAGES = {
    **STORAGES,  # noqa: F405
    "staticfiles": {"BACKEND": "django.contrib.staticfiles.storage.StaticFilesStorage"},
}
