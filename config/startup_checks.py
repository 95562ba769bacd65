"""
Startup validation for the production environment.

Fails fast with a clear message instead of a cryptic runtime error.
"""

import os
from decimal import Decimal, InvalidOperation

from django.core.exceptions import ImproperlyConfigured

REQUIRED_VARS = [
    "SECRET_KEY",
    "ALLOWED_HOSTS",
    "DB_NAME",
    "DB_USER",
    "DB_PASSWORD",
]


def validate_production_config() -> None:
    """
    Validate environment variables for production deployment.

    Raises:
        ImproperlyConfigured: If a required variable is missing or an
            optional rebalancer override is malformed.
    """
    missing = [var for var in REQUIRED_VARS if not os.getenv(var)]
    if missing:
        raise ImproperlyConfigured(
            f"Missing required environment variables for production: {', '.join(missing)}\n"
            f"Please set these in your environment or .env file."
        )

    allowed_hosts = [h.strip() for h in os.getenv("ALLOWED_HOSTS", "").split(",") if h.strip()]
    if not allowed_hosts:
        raise ImproperlyConfigured(
            "ALLOWED_HOSTS environment variable must contain at least one hostname"
        )

    tolerance = os.getenv("REBALANCER_HOLD_TOLERANCE")
    if tolerance is not None:
        try:
            valid = Decimal(tolerance) >= 0
        except InvalidOperation:
            valid = False
        if not valid:
            raise ImproperlyConfigured(
                f"REBALANCER_HOLD_TOLERANCE must be a non-negative number, got {tolerance!r}"
            )
