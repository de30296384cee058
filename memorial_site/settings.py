import os
from pathlib import Path
from typing import Iterable

import environ
from django.utils.translation import gettext_lazy as _

BASE_DIR = Path(__file__).resolve().parent.parent


def _unique(items: Iterable[str]) -> list[str]:
    return list(dict.fromkeys(items))


def _ensure_trailing_slash(url: str, default: str) -> str:
    if not url:
        return default
    return url if url.endswith("/") else f"{url}/"


env = environ.Env(
    DJANGO_DEBUG=(bool, False),
    LOG_LEVEL=(str, "INFO"),
    LOG_TO_FILE=(bool, True),
    ALLOWED_HOSTS=(list, ["k-r.by", "www.k-r.by"]),
    ENV_FILE=(str, None),  # Explicit path to .env file (optional)
)

# .env is read only when ENV_FILE points at it or in DEBUG mode;
# production relies on the process environment.
env_file_path = env("ENV_FILE", default=None)
if env_file_path:
    env_file = Path(env_file_path)
elif os.environ.get("DJANGO_DEBUG", "").lower() in ("true", "1"):
    env_file = BASE_DIR / ".env"
else:
    env_file = None

if env_file and env_file.exists():
    environ.Env.read_env(str(env_file))

DEBUG = env.bool("DJANGO_DEBUG", default=False)

SECRET_KEY = env("DJANGO_SECRET_KEY", default="dev-secret-key")

if not DEBUG:
    from django.core.exceptions import ImproperlyConfigured

    errors = []
    if not SECRET_KEY:
        errors.append("SECRET_KEY is required in production")
    elif SECRET_KEY.startswith("django-insecure-"):
        errors.append("SECRET_KEY must not start with 'django-insecure-'")
    elif SECRET_KEY == "dev-secret-key":
        errors.append("SECRET_KEY must not be the default 'dev-secret-key'")
    elif len(SECRET_KEY) < 50:
        errors.append(f"SECRET_KEY must be at least 50 characters long (got {len(SECRET_KEY)})")

    if errors:
        error_msg = "SECRET_KEY validation failed in production:\n" + "\n".join(f"  - {e}" for e in errors)
        error_msg += "\n\nSet DJANGO_SECRET_KEY in .env or EnvironmentFile."
        raise ImproperlyConfigured(error_msg)

LOG_LEVEL = env("LOG_LEVEL", default="INFO")
LOG_TO_FILE = env.bool("LOG_TO_FILE", default=True)

DEFAULT_ALLOWED_HOSTS = [
    "127.0.0.1",
    "localhost",
    "k-r.by",
    "www.k-r.by",
    "testserver",
]
ALLOWED_HOSTS = _unique(env.list("ALLOWED_HOSTS", default=DEFAULT_ALLOWED_HOSTS))

INSTALLED_APPS = [
    "django.contrib.admin",
    "django.contrib.auth",
    "django.contrib.contenttypes",
    "django.contrib.sessions",
    "django.contrib.messages",
    "django.contrib.staticfiles",
    "rest_framework",
    "drf_spectacular",
    "django_filters",
    "catalog",
    "blog",
]

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "whitenoise.middleware.WhiteNoiseMiddleware",
    "memorial_site.middleware.ErrorLoggingMiddleware",
    "django.contrib.sessions.middleware.SessionMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.middleware.csrf.CsrfViewMiddleware",
    "memorial_site.middleware.UploadValidationMiddleware",
    "django.contrib.auth.middleware.AuthenticationMiddleware",
    "django.contrib.messages.middleware.MessageMiddleware",
    "django.middleware.clickjacking.XFrameOptionsMiddleware",
]

ROOT_URLCONF = "memorial_site.urls"

TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [],
        "APP_DIRS": True,
        "OPTIONS": {
            "context_processors": [
                "django.template.context_processors.debug",
                "django.template.context_processors.request",
                "django.contrib.auth.context_processors.auth",
                "django.contrib.messages.context_processors.messages",
            ],
        },
    },
]

WSGI_APPLICATION = "memorial_site.wsgi.application"
ASGI_APPLICATION = "memorial_site.asgi.application"


DATABASE_URL = env("DATABASE_URL", default=None)
if DATABASE_URL:
    DATABASES = {"default": env.db()}
else:
    DATABASES = {
        "default": {
            "ENGINE": "django.db.backends.sqlite3",
            "NAME": BASE_DIR / "db.sqlite3",
        }
    }

LANGUAGE_CODE = env("LANGUAGE_CODE", default="ru")
TIME_ZONE = env("TIME_ZONE", default="Europe/Minsk")
USE_I18N = True
USE_TZ = True

LANGUAGES = [
    ("ru", _("Русский")),
]

STATIC_URL = _ensure_trailing_slash(env("STATIC_URL", default="/static/"), "/static/")
STATIC_ROOT = Path(env("STATIC_ROOT", default=str(BASE_DIR / "staticfiles")))

STORAGES = {
    "default": {"BACKEND": "django.core.files.storage.FileSystemStorage"},
    "staticfiles": {
        "BACKEND": "whitenoise.storage.CompressedManifestStaticFilesStorage",
    },
}
MEDIA_URL = _ensure_trailing_slash(env("MEDIA_URL", default="/media/"), "/media/")
MEDIA_ROOT = Path(env("MEDIA_ROOT", default=str(BASE_DIR / "media")))
LOG_DIR = Path(env("LOG_DIR", default=str(BASE_DIR / "logs")))
if LOG_TO_FILE:
    LOG_DIR.mkdir(parents=True, exist_ok=True)
DJANGO_LOG_FILE = LOG_DIR / "django.log"
ERROR_LOG_FILE = LOG_DIR / "errors.log"

DEFAULT_ALLOWED_IMAGE_EXTENSIONS = ["jpg", "jpeg", "png", "webp"]
DEFAULT_ALLOWED_IMAGE_MIME_TYPES = ["image/jpeg", "image/png", "image/webp"]
MEDIA_ALLOWED_IMAGE_EXTENSIONS = [
    ext.lower().lstrip(".")
    for ext in env.list(
        "MEDIA_ALLOWED_IMAGE_EXTENSIONS",
        default=DEFAULT_ALLOWED_IMAGE_EXTENSIONS,
    )
    if ext
] or DEFAULT_ALLOWED_IMAGE_EXTENSIONS
MEDIA_ALLOWED_IMAGE_MIME_TYPES = [
    mime.lower()
    for mime in env.list(
        "MEDIA_ALLOWED_IMAGE_MIME_TYPES",
        default=DEFAULT_ALLOWED_IMAGE_MIME_TYPES,
    )
    if mime
] or DEFAULT_ALLOWED_IMAGE_MIME_TYPES
MAX_IMAGE_SIZE = env.int("MAX_IMAGE_SIZE", default=5 * 1024 * 1024)  # 5 MB
FILE_UPLOAD_MAX_MEMORY_SIZE = env.int("FILE_UPLOAD_MAX_MEMORY_SIZE", default=MAX_IMAGE_SIZE)
DATA_UPLOAD_MAX_MEMORY_SIZE = env.int("DATA_UPLOAD_MAX_MEMORY_SIZE", default=10 * 1024 * 1024)

# Media sub-folders accepted by the upload and image listing endpoints.
UPLOAD_ALLOWED_FOLDERS = env.list(
    "UPLOAD_ALLOWED_FOLDERS",
    default=[
        "accessories",
        "fences",
        "landscape",
        "promo",
        "products",
        "blog",
        "campaigns",
        "works",
        "monuments",
        "pages",
        "sliders",
    ],
)

# Upper bound of rows a single bulk SEO run touches.
BULK_SEO_MAX_ROWS = env.int("BULK_SEO_MAX_ROWS", default=1000)

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

REST_FRAMEWORK = {
    "DEFAULT_FILTER_BACKENDS": ["django_filters.rest_framework.DjangoFilterBackend"],
    "DEFAULT_SCHEMA_CLASS": "drf_spectacular.openapi.AutoSchema",
    "DEFAULT_RENDERER_CLASSES": [
        "rest_framework.renderers.JSONRenderer",
        "rest_framework.renderers.BrowsableAPIRenderer",
    ],
    "EXCEPTION_HANDLER": "memorial_site.exceptions.api_exception_handler",
}

LOGGING_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOGGING_HANDLERS = {
    "console": {"class": "logging.StreamHandler", "formatter": "verbose"},
}
if LOG_TO_FILE:
    LOGGING_HANDLERS.update(
        {
            "django_file": {
                "class": "logging.handlers.RotatingFileHandler",
                "formatter": "verbose",
                "filename": str(DJANGO_LOG_FILE),
                "maxBytes": 5 * 1024 * 1024,
                "backupCount": 5,
                "delay": True,
            },
            "error_file": {
                "class": "logging.handlers.RotatingFileHandler",
                "formatter": "verbose",
                "filename": str(ERROR_LOG_FILE),
                "maxBytes": 5 * 1024 * 1024,
                "backupCount": 5,
                "delay": True,
            },
        }
    )

LOGGING_FILE_HANDLERS = ["django_file"] if LOG_TO_FILE else []
LOGGING_ERROR_HANDLERS = ["error_file"] if LOG_TO_FILE else ["console"]

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "verbose": {"format": LOGGING_FORMAT},
    },
    "handlers": LOGGING_HANDLERS,
    "root": {"handlers": ["console", *LOGGING_FILE_HANDLERS], "level": LOG_LEVEL},
    "loggers": {
        "django": {"handlers": ["console", *LOGGING_FILE_HANDLERS], "level": LOG_LEVEL},
        "django.request": {
            "handlers": [*LOGGING_ERROR_HANDLERS, *LOGGING_FILE_HANDLERS],
            "level": "INFO",
            "propagate": False,
        },
        "request_errors": {
            "handlers": LOGGING_ERROR_HANDLERS,
            "level": "ERROR",
            "propagate": False,
        },
    },
}

SECURE_PROXY_SSL_HEADER = ("HTTP_X_FORWARDED_PROTO", "https")
SESSION_COOKIE_SECURE = env.bool("SESSION_COOKIE_SECURE", default=not DEBUG)
CSRF_COOKIE_SECURE = env.bool("CSRF_COOKIE_SECURE", default=not DEBUG)
SECURE_CONTENT_TYPE_NOSNIFF = True
X_FRAME_OPTIONS = "DENY"

CACHES = {
    "default": {
        "BACKEND": "django.core.cache.backends.locmem.LocMemCache",
        "LOCATION": "memorial-cache",
    }
}

SPECTACULAR_SETTINGS = {
    "TITLE": "Memorial Catalog API",
    "DESCRIPTION": "API каталога памятников, оград, аксессуаров и благоустройства.",
    "VERSION": "1.0.0",
}
