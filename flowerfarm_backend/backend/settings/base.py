"""
PATH: backend/settings/base.py

BASE SETTINGS (shared by dev + prod)

- Session auth for the shop admin (stock Django User)
- Session gate over /api/admin/ (dev-mode bypass resolved once at startup)
- Two key-value stores: visitor (session) + shared (cache)
- Email relay over Django's mail framework (SMTP)
- Storage bucket CORS policy for product photos
- Throttling for public write endpoints
- Sentry (optional): error visibility in production
"""

from __future__ import annotations

import sys
from pathlib import Path

import environ
from corsheaders.defaults import default_headers, default_methods

# -----------------------------------------
# BASE DIRECTORY
# -----------------------------------------
BASE_DIR = Path(__file__).resolve().parent.parent.parent

# -----------------------------------------
# TEST MODE DETECTION
# -----------------------------------------
TESTING = "test" in sys.argv or "pytest" in sys.modules

# -----------------------------------------
# ENV (django-environ)
# -----------------------------------------
env = environ.Env(
    DEBUG=(bool, True),
    SECRET_KEY=(str, ""),
    TIME_ZONE=(str, "America/Vancouver"),
    ALLOWED_HOSTS=(list, ["localhost", "127.0.0.1"]),
    CORS_ALLOWED_ORIGINS=(list, ["http://localhost:3000"]),
    CSRF_TRUSTED_ORIGINS=(list, ["http://localhost:3000"]),
    DATABASE_URL=(str, f"sqlite:///{BASE_DIR / 'db.sqlite3'}"),
    CACHE_URL=(str, "locmemcache://flowerfarm"),
    LOG_LEVEL=(str, "INFO"),
    # Throttling
    THROTTLE_ANON_RATE=(str, "60/min"),
    THROTTLE_USER_RATE=(str, "600/min"),
    THROTTLE_PUBLIC_WRITE_RATE=(str, "10/min"),
    # Session gate
    DEV_MODE_BYPASS_ENABLED=(bool, False),
    LOGIN_URL=(str, "/login"),
    # Email relay
    EMAIL_URL=(str, "consolemail://"),
    DEFAULT_FROM_EMAIL=(str, "Buttons Flower Farm <orders@buttonsflowerfarm.ca>"),
    SHOP_NAME=(str, "Buttons Flower Farm"),
    SHOP_EMAIL=(str, "buttonsflowerfarm@gmail.com"),
    SHOP_ETRANSFER_EMAIL=(str, "buttonsflowerfarm@telus.net"),
    CONTACT_RECIPIENTS=(list, []),
    EMAIL_MESSAGE_ID_DOMAIN=(str, "buttonsflowerfarm.ca"),
    # Storage bucket
    GCS_PROJECT_ID=(str, ""),
    GCS_BUCKET_NAME=(str, ""),
    GCS_CREDENTIALS_FILE=(str, ""),
    STORAGE_CORS_ORIGINS=(list, ["http://localhost:3000"]),
    STORAGE_CORS_METHODS=(list, ["GET", "HEAD", "OPTIONS"]),
    STORAGE_CORS_RESPONSE_HEADERS=(
        list,
        ["Content-Type", "Content-Length", "Cache-Control", "ETag", "Last-Modified"],
    ),
    STORAGE_CORS_MAX_AGE=(int, 3600),
    # UI state
    UI_STATE_SCOPE_TIMEOUT=(int, 24 * 60 * 60),
    # Sentry (optional; enable by setting SENTRY_DSN)
    SENTRY_DSN=(str, ""),
    SENTRY_ENVIRONMENT=(str, "development"),
    SENTRY_TRACES_SAMPLE_RATE=(float, 0.0),
    SENTRY_SEND_PII=(bool, False),
)

# -----------------------------------------
# LOAD .env
# -----------------------------------------
env_file_1 = BASE_DIR / ".env"
env_file_2 = BASE_DIR.parent / ".env"

if env_file_1.exists():
    env.read_env(str(env_file_1))
elif env_file_2.exists():
    env.read_env(str(env_file_2))

# -----------------------------------------
# CORE SECURITY
# -----------------------------------------
SECRET_KEY = (env("SECRET_KEY") or "dev-insecure-change-me").strip()
DEBUG = env.bool("DEBUG")
ALLOWED_HOSTS = env.list("ALLOWED_HOSTS")

# -----------------------------------------
# I18N / TZ
# -----------------------------------------
LANGUAGE_CODE = "en-us"
TIME_ZONE = (env("TIME_ZONE") or "UTC").strip()
USE_I18N = True
USE_TZ = True

# -----------------------------------------
# INSTALLED APPS
# -----------------------------------------
INSTALLED_APPS = [
    "corsheaders",
    "django.contrib.admin",
    "django.contrib.auth",
    "django.contrib.contenttypes",
    "django.contrib.sessions",
    "django.contrib.messages",
    "django.contrib.staticfiles",
    "rest_framework",
    "drf_spectacular",
    "users.apps.UsersConfig",
    "persistence.apps.PersistenceConfig",
    "uistate.apps.UiStateConfig",
    "notifications.apps.NotificationsConfig",
    "media_storage.apps.MediaStorageConfig",
]

# -----------------------------------------
# MIDDLEWARE
# -----------------------------------------
MIDDLEWARE = [
    "corsheaders.middleware.CorsMiddleware",
    "django.middleware.security.SecurityMiddleware",
    "django.contrib.sessions.middleware.SessionMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.middleware.csrf.CsrfViewMiddleware",
    "django.contrib.auth.middleware.AuthenticationMiddleware",
    # Needs request.session + request.user
    "users.middleware.SessionGateMiddleware",
    "django.contrib.messages.middleware.MessageMiddleware",
    "django.middleware.clickjacking.XFrameOptionsMiddleware",
]

ROOT_URLCONF = "backend.urls"
WSGI_APPLICATION = "backend.wsgi.application"
APPEND_SLASH = True

# -----------------------------------------
# TEMPLATES (Django admin + email templates)
# -----------------------------------------
TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [str(BASE_DIR / "templates")],
        "APP_DIRS": True,
        "OPTIONS": {
            "context_processors": [
                "django.template.context_processors.debug",
                "django.template.context_processors.request",
                "django.contrib.auth.context_processors.auth",
                "django.contrib.messages.context_processors.messages",
            ],
        },
    }
]

# -----------------------------------------
# AUTH
# -----------------------------------------
AUTHENTICATION_BACKENDS = [
    "users.auth_backends.EmailOrUsernameBackend",
]

# Frontend login route the gate redirects to (?next=<requested location>)
LOGIN_URL = (env("LOGIN_URL") or "/login").strip()

# -----------------------------------------
# SESSION GATE
# -----------------------------------------
# Never enable in production: ?devMode=true would skip the login.
DEV_MODE_BYPASS_ENABLED = env.bool("DEV_MODE_BYPASS_ENABLED")
SESSION_GATE_PROTECTED_PREFIXES = ["/api/admin/"]

# -----------------------------------------
# REST FRAMEWORK
# -----------------------------------------
REST_FRAMEWORK = {
    "DEFAULT_AUTHENTICATION_CLASSES": (
        "rest_framework.authentication.SessionAuthentication",
    ),
    "DEFAULT_PERMISSION_CLASSES": ("rest_framework.permissions.AllowAny",),
    "DEFAULT_SCHEMA_CLASS": "drf_spectacular.openapi.AutoSchema",
    "DEFAULT_THROTTLE_CLASSES": (
        "rest_framework.throttling.AnonRateThrottle",
        "rest_framework.throttling.UserRateThrottle",
    ),
    "DEFAULT_THROTTLE_RATES": {
        "anon": env("THROTTLE_ANON_RATE"),
        "user": env("THROTTLE_USER_RATE"),
        "public_write": env("THROTTLE_PUBLIC_WRITE_RATE"),
    },
}

if TESTING:
    # Test suites hammer the same endpoints from one client address.
    REST_FRAMEWORK["DEFAULT_THROTTLE_RATES"] = {
        "anon": "10000/min",
        "user": "10000/min",
        "public_write": "10000/min",
    }

# -----------------------------------------
# DATABASE
# -----------------------------------------
DATABASES = {
    "default": env.db("DATABASE_URL"),
}

# -----------------------------------------
# CACHES / KEY-VALUE STORES
# -----------------------------------------
CACHES = {
    "default": env.cache("CACHE_URL"),
}

# Cache alias behind the shared key-value store (email queues, UI state scopes)
SHARED_STORE_CACHE_ALIAS = "default"

# -----------------------------------------
# UI STATE
# -----------------------------------------
# Idle scroll/pagination scopes expire after this many seconds
UI_STATE_SCOPE_TIMEOUT = env.int("UI_STATE_SCOPE_TIMEOUT")

# -----------------------------------------
# EMAIL RELAY
# -----------------------------------------
vars().update(env.email_url("EMAIL_URL"))

DEFAULT_FROM_EMAIL = env("DEFAULT_FROM_EMAIL")
SERVER_EMAIL = DEFAULT_FROM_EMAIL
SHOP_NAME = env("SHOP_NAME")
SHOP_EMAIL = env("SHOP_EMAIL")
SHOP_ETRANSFER_EMAIL = env("SHOP_ETRANSFER_EMAIL")
CONTACT_RECIPIENTS = env.list("CONTACT_RECIPIENTS") or [SHOP_EMAIL]
EMAIL_MESSAGE_ID_DOMAIN = env("EMAIL_MESSAGE_ID_DOMAIN")
EMAIL_TIMEOUT = 30

# -----------------------------------------
# STORAGE BUCKET (product photos)
# -----------------------------------------
GCS_PROJECT_ID = (env("GCS_PROJECT_ID") or "").strip()
GCS_BUCKET_NAME = (env("GCS_BUCKET_NAME") or "").strip()
GCS_CREDENTIALS_FILE = (env("GCS_CREDENTIALS_FILE") or "").strip()

STORAGE_CORS_ORIGINS = env.list("STORAGE_CORS_ORIGINS")
STORAGE_CORS_METHODS = env.list("STORAGE_CORS_METHODS")
STORAGE_CORS_RESPONSE_HEADERS = env.list("STORAGE_CORS_RESPONSE_HEADERS")
STORAGE_CORS_MAX_AGE = env.int("STORAGE_CORS_MAX_AGE")

# -----------------------------------------
# LOGGING
# -----------------------------------------
LOG_LEVEL = (env("LOG_LEVEL") or "INFO").strip().upper()

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "simple": {"format": "%(asctime)s %(levelname)s %(name)s: %(message)s"},
    },
    "handlers": {
        "console": {"class": "logging.StreamHandler", "formatter": "simple"},
    },
    "root": {"handlers": ["console"], "level": "WARNING"},
    "loggers": {
        "django": {"handlers": ["console"], "level": "INFO", "propagate": False},
        **{
            app: {"handlers": ["console"], "level": LOG_LEVEL, "propagate": False}
            for app in ("users", "persistence", "uistate", "notifications", "media_storage")
        },
    },
}

# -----------------------------------------
# SENTRY (optional)
# -----------------------------------------
SENTRY_DSN = (env("SENTRY_DSN") or "").strip()
SENTRY_ENVIRONMENT = (env("SENTRY_ENVIRONMENT") or "development").strip()
SENTRY_TRACES_SAMPLE_RATE = float(env("SENTRY_TRACES_SAMPLE_RATE"))
SENTRY_SEND_PII = env.bool("SENTRY_SEND_PII")

if SENTRY_DSN:
    import sentry_sdk
    from sentry_sdk.integrations.django import DjangoIntegration

    sentry_sdk.init(
        dsn=SENTRY_DSN,
        environment=SENTRY_ENVIRONMENT,
        integrations=[DjangoIntegration()],
        traces_sample_rate=SENTRY_TRACES_SAMPLE_RATE,
        send_default_pii=SENTRY_SEND_PII,
    )

# -----------------------------------------
# CORS / CSRF
# -----------------------------------------
CORS_ALLOWED_ORIGINS = env.list("CORS_ALLOWED_ORIGINS")
CORS_ALLOW_CREDENTIALS = True
CORS_ALLOW_METHODS = list(default_methods)
CORS_ALLOW_HEADERS = list(default_headers)
# The email relay sends its own permissive CORS headers.
CORS_URLS_REGEX = r"^/api/(?!notifications/).*$"

CSRF_TRUSTED_ORIGINS = env.list("CSRF_TRUSTED_ORIGINS")

# -----------------------------------------
# STATIC FILES
# -----------------------------------------
STATIC_URL = "static/"
DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

# -----------------------------------------
# SWAGGER
# -----------------------------------------
SPECTACULAR_SETTINGS = {
    "TITLE": "Flower Farm Backend API",
    "DESCRIPTION": "Storefront persistence, admin session gate, UI state and email relay",
    "VERSION": "1.0.0",
    "SERVE_INCLUDE_SCHEMA": False,
}
