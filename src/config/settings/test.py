"""Test settings - uses SQLite for fast local testing."""
from .base import *  # noqa: F401,F403

DEBUG = True

# Use SQLite for tests (no PostgreSQL dependency)
DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": ":memory:",
    }
}
DATABASES["default"]["ATOMIC_REQUESTS"] = False

# Faster password hashing in tests
PASSWORD_HASHERS = [
    "django.contrib.auth.hashers.MD5PasswordHasher",
]

TIME_ZONE = "UTC"

# Disable API throttling in tests for deterministic runs
REST_FRAMEWORK["DEFAULT_THROTTLE_CLASSES"] = []  # noqa: F405
REST_FRAMEWORK["DEFAULT_THROTTLE_RATES"] = {}  # noqa: F405

SERVICEHUB_DEFAULT_BUNDLE_VENDOR_ID = ""

# Disable logging noise during tests
LOGGING["handlers"].pop("file")  # noqa: F405
LOGGING["root"]["level"] = "WARNING"  # noqa: F405
LOGGING["loggers"]["servicehub"]["handlers"] = ["console"]  # noqa: F405
LOGGING["loggers"]["servicehub"]["level"] = "WARNING"  # noqa: F405
