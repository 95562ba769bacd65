"""App settings with defaults.

Values are read from ``settings.REBALANCER`` on every access so that tests can
use ``override_settings``.
"""

from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Any

from django.conf import settings
from django.core.exceptions import ImproperlyConfigured

DEFAULTS: dict[str, Any] = {
    "HOLD_TOLERANCE": "0.005",
    "TARGET_SUM_TOLERANCE": "0.1",
    "STRICT_CLASS_TARGETS": False,
    "DEFAULT_CURRENCY": "EUR",
}


def get_setting(name: str) -> Any:
    overrides = getattr(settings, "REBALANCER", {}) or {}
    if name in overrides:
        return overrides[name]
    return DEFAULTS[name]


def get_decimal_setting(name: str) -> Decimal:
    raw = get_setting(name)
    try:
        value = Decimal(str(raw))
    except (InvalidOperation, ValueError) as e:
        raise ImproperlyConfigured(f"REBALANCER[{name!r}] must be a number, got {raw!r}") from e
    if value < 0:
        raise ImproperlyConfigured(f"REBALANCER[{name!r}] must be non-negative, got {raw!r}")
    return value


def hold_tolerance() -> Decimal:
    return get_decimal_setting("HOLD_TOLERANCE")


def target_sum_tolerance() -> Decimal:
    return get_decimal_setting("TARGET_SUM_TOLERANCE")


def strict_class_targets() -> bool:
    return bool(get_setting("STRICT_CLASS_TARGETS"))


def default_currency() -> str:
    return str(get_setting("DEFAULT_CURRENCY"))
