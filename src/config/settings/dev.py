"""Development settings."""
from .base import *  # noqa: F401,F403

DEBUG = True

DATABASES = {
    "default": env.db("DATABASE_URL", default=f"sqlite:///{PROJECT_DIR / 'db.sqlite3'}"),  # noqa: F405
}

if "rest_framework.renderers.BrowsableAPIRenderer" not in DEFAULT_RENDERER_CLASSES:  # noqa: F405
    DEFAULT_RENDERER_CLASSES.append("rest_framework.renderers.BrowsableAPIRenderer")  # noqa: F405

# Logging
LOG_DIR.mkdir(parents=True, exist_ok=True)  # noqa: F405
LOGGING["root"]["level"] = "DEBUG"  # noqa: F405
