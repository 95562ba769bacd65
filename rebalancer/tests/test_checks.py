"""
Tests for rebalancer system checks.

Tests: rebalancer/checks.py
"""

from django.test import override_settings

import pytest

from rebalancer.checks import check_rebalancer_tolerances, check_rebalancer_unknown_keys


@pytest.mark.unit
class TestToleranceCheck:
    def test_valid_settings(self) -> None:
        assert check_rebalancer_tolerances(None) == []

    @override_settings(REBALANCER={"HOLD_TOLERANCE": "abc", "TARGET_SUM_TOLERANCE": "-1"})
    def test_reports_each_bad_tolerance(self) -> None:
        errors = check_rebalancer_tolerances(None)

        assert [e.id for e in errors] == ["rebalancer.E001", "rebalancer.E001"]
        assert "HOLD_TOLERANCE" in errors[0].msg
        assert "non-negative" in errors[1].msg


@pytest.mark.unit
class TestUnknownKeysCheck:
    def test_no_warnings(self) -> None:
        assert check_rebalancer_unknown_keys(None) == []

    @override_settings(REBALANCER={"HOLD_TOLERENCE": "0.01"})
    def test_warns_about_typos(self) -> None:
        (warning,) = check_rebalancer_unknown_keys(None)
        assert warning.id == "rebalancer.W001"
        assert "HOLD_TOLERENCE" in warning.msg
