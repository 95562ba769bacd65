from decimal import Decimal

import pytest

from rebalancer.domain import (
    CASH_LABELS,
    DEFAULT_HOLD_TOLERANCE,
    INVESTMENT_LABELS,
    Action,
    AssetClass,
    TargetMode,
    classify,
    default_label_policy,
)


@pytest.mark.domain
@pytest.mark.unit
class TestClassify:
    def test_positive_delta_buys(self) -> None:
        assert classify(Decimal("2000"), TargetMode.FIXED_AMOUNT) == Action.BUY

    def test_negative_delta_sells(self) -> None:
        assert classify(Decimal("-4620"), TargetMode.PERCENTAGE) == Action.SELL

    def test_zero_delta_holds(self) -> None:
        assert classify(Decimal("0"), TargetMode.PERCENTAGE) == Action.HOLD

    def test_hold_band_is_inclusive(self) -> None:
        assert classify(DEFAULT_HOLD_TOLERANCE, TargetMode.PERCENTAGE) == Action.HOLD
        assert classify(-DEFAULT_HOLD_TOLERANCE, TargetMode.PERCENTAGE) == Action.HOLD

    def test_just_outside_hold_band(self) -> None:
        assert classify(Decimal("0.006"), TargetMode.PERCENTAGE) == Action.BUY
        assert classify(Decimal("-0.006"), TargetMode.PERCENTAGE) == Action.SELL

    def test_off_mode_wins_over_delta(self) -> None:
        assert classify(Decimal("1000"), TargetMode.OFF) == Action.EXCLUDED
        assert classify(Decimal("0"), TargetMode.OFF) == Action.EXCLUDED

    def test_cash_labels(self) -> None:
        assert classify(Decimal("10"), TargetMode.PERCENTAGE, CASH_LABELS) == Action.SAVE
        assert classify(Decimal("-10"), TargetMode.PERCENTAGE, CASH_LABELS) == Action.INVEST

    def test_custom_tolerance(self) -> None:
        tolerance = Decimal("100")
        assert classify(Decimal("99"), TargetMode.PERCENTAGE, tolerance=tolerance) == Action.HOLD
        assert classify(Decimal("101"), TargetMode.PERCENTAGE, tolerance=tolerance) == Action.BUY


@pytest.mark.domain
@pytest.mark.unit
def test_default_label_policy() -> None:
    assert default_label_policy(AssetClass.CASH) == CASH_LABELS
    for asset_class in AssetClass:
        if asset_class != AssetClass.CASH:
            assert default_label_policy(asset_class) == INVESTMENT_LABELS
