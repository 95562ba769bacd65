from .base import *  # noqa: F403

DEBUG = False

# Use a fast password hasher for testing
PASSWORD_HASHERS = [
    "django.contrib.auth.hashers.MD5PasswordHasher",
]

# Use in-memory SQLite for speed
DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": ":memory:",
        "ATOMIC_REQUESTS": True,
    }
}

# Pin the rebalancer settings so tests do not depend on the environment
REBALANCER = {
    "HOLD_TOLERANCE": "0.005",
    "TARGET_SUM_TOLERANCE": "0.1",
    "STRICT_CLASS_TARGETS": False,
    "DEFAULT_CURRENCY": "EUR",
}

# Keep test output quiet; caplog still sees records via propagation to root
LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "handlers": {
        "null": {
            "class": "logging.NullHandler",
        },
    },
    "loggers": {
        "rebalancer": {
            "handlers": ["null"],
            "level": "DEBUG",
        },
    },
}

# structlog.testing.capture_logs needs loggers that re-read the configuration
import structlog  # noqa: E402

structlog.configure(cache_logger_on_first_use=False)
