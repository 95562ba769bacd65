"""
Logging configuration for the rebalancer.

structlog renders JSON in production and colored console output in
development. Both structlog events and plain stdlib records (Django,
yfinance) go through the same handlers.

Usage:
    from config.logging import configure_structlog, get_logging_config

    configure_structlog(debug=True)
    LOGGING = get_logging_config(debug=True)
"""

import os
import sys
from typing import Any

import structlog

FOREIGN_PRE_CHAIN = [
    structlog.contextvars.merge_contextvars,
    structlog.stdlib.add_log_level,
    structlog.stdlib.add_logger_name,
    structlog.processors.TimeStamper(fmt="iso", utc=True),
]


def configure_structlog(debug: bool = False) -> None:
    """
    Configure structlog. Call early in settings, before anything logs.

    Args:
        debug: Pretty console output with colors when True, JSON otherwise.
    """
    shared_processors = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
    ]

    if debug:
        processors = shared_processors + [structlog.dev.ConsoleRenderer(colors=True)]
    else:
        processors = shared_processors + [
            structlog.processors.format_exc_info,
            structlog.processors.dict_tracebacks,
            structlog.processors.JSONRenderer(),
        ]

    structlog.configure(
        processors=processors,  # type: ignore
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def _logger(level: str) -> dict[str, Any]:
    return {"handlers": ["console"], "level": level, "propagate": False}


def get_logging_config(debug: bool = False) -> dict[str, Any]:
    """
    Return the Django LOGGING dict.

    The ``rebalancer`` logger level can be overridden with the
    ``REBALANCER_LOG_LEVEL`` environment variable.
    """
    formatter = "console" if debug else "json"
    app_level = os.getenv("REBALANCER_LOG_LEVEL", "DEBUG" if debug else "INFO")

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "json": {
                "()": structlog.stdlib.ProcessorFormatter,
                "processor": structlog.processors.JSONRenderer(),
                "foreign_pre_chain": FOREIGN_PRE_CHAIN,
            },
            "console": {
                "()": structlog.stdlib.ProcessorFormatter,
                "processor": structlog.dev.ConsoleRenderer(colors=True),
                "foreign_pre_chain": FOREIGN_PRE_CHAIN,
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": formatter,
                "stream": sys.stdout,
            },
        },
        "root": {
            "handlers": ["console"],
            "level": "INFO",
        },
        "loggers": {
            "rebalancer": _logger(app_level),
            "django": _logger("INFO"),
            "django.request": _logger("WARNING"),
            "django.security": _logger("WARNING"),
            # yfinance is chatty about retries and missing symbols
            "yfinance": _logger("WARNING"),
        },
    }
