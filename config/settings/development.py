from .base import *  # noqa: F403

DEBUG = True

TEMPLATES[0]["OPTIONS"]["debug"] = True  # noqa: F405

ALLOWED_HOSTS = ["localhost", "127.0.0.1", "[::1]"]

# Demo users get simple passwords (seed_demo_portfolio --create-user)
AUTH_PASSWORD_VALIDATORS = []

from config.logging import configure_structlog, get_logging_config  # noqa: E402

configure_structlog(debug=True)
LOGGING = get_logging_config(debug=True)
