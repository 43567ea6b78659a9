"""Production settings."""
from django.core.exceptions import ImproperlyConfigured

from .base import *  # noqa: F401,F403

DEBUG = False
ENABLE_DJANGO_ADMIN = env.bool("ENABLE_DJANGO_ADMIN", default=False)  # noqa: F405

# Security
SECURE_CONTENT_TYPE_NOSNIFF = True
SESSION_COOKIE_SECURE = True
CSRF_COOKIE_SECURE = True
SECURE_SSL_REDIRECT = env.bool("SECURE_SSL_REDIRECT", default=True)  # noqa: F405
SECURE_HSTS_SECONDS = 31536000
SECURE_HSTS_INCLUDE_SUBDOMAINS = True
SECURE_HSTS_PRELOAD = True
CSRF_TRUSTED_ORIGINS = env.list("CSRF_TRUSTED_ORIGINS", default=[])  # noqa: F405
USE_X_FORWARDED_HOST = env.bool("USE_X_FORWARDED_HOST", default=True)  # noqa: F405
if env.bool("USE_X_FORWARDED_PROTO", default=True):  # noqa: F405
    SECURE_PROXY_SSL_HEADER = ("HTTP_X_FORWARDED_PROTO", "https")


def _is_weak_secret_key(secret_key: str) -> bool:
    if not secret_key:
        return True
    return (
        len(secret_key) < 50
        or len(set(secret_key)) < 5
        or secret_key.startswith("django-insecure-")
    )


if _is_weak_secret_key(SECRET_KEY):  # noqa: F405
    raise ImproperlyConfigured(
        "SECRET_KEY is too weak for production. Use a long random key.",
    )

if not SECURE_SSL_REDIRECT:
    raise ImproperlyConfigured(
        "SECURE_SSL_REDIRECT must be enabled in production.",
    )

# Logging
LOG_DIR.mkdir(parents=True, exist_ok=True)  # noqa: F405

# Static files
STORAGES = {
    "default": {"BACKEND": "django.core.files.storage.FileSystemStorage"},
    "staticfiles": {"BACKEND": "django.contrib.staticfiles.storage.ManifestStaticFilesStorage"},
}
