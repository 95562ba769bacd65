"""
Tests for app settings resolution.

Tests: rebalancer/conf.py
"""

from decimal import Decimal

from django.core.exceptions import ImproperlyConfigured
from django.test import override_settings

import pytest

from rebalancer import conf


@pytest.mark.unit
class TestConf:
    @override_settings(REBALANCER={})
    def test_defaults(self) -> None:
        assert conf.hold_tolerance() == Decimal("0.005")
        assert conf.target_sum_tolerance() == Decimal("0.1")
        assert conf.strict_class_targets() is False
        assert conf.default_currency() == "EUR"

    @override_settings(REBALANCER={"HOLD_TOLERANCE": 1, "DEFAULT_CURRENCY": "USD"})
    def test_overrides(self) -> None:
        assert conf.hold_tolerance() == Decimal("1")
        assert conf.default_currency() == "USD"

    @override_settings(REBALANCER={"HOLD_TOLERANCE": "-0.1"})
    def test_negative_tolerance(self) -> None:
        with pytest.raises(ImproperlyConfigured, match="non-negative"):
            conf.hold_tolerance()

    @override_settings(REBALANCER={"TARGET_SUM_TOLERANCE": "wide"})
    def test_non_numeric_tolerance(self) -> None:
        with pytest.raises(ImproperlyConfigured, match="must be a number"):
            conf.target_sum_tolerance()
