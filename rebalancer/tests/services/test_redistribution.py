"""
Tests for percentage redistribution helpers.

Tests: rebalancer/services/redistribution.py
"""

from decimal import Decimal

import pytest

from rebalancer.domain import OFF, AssetClass, FixedAmountTarget, PercentageTarget
from rebalancer.exceptions import ValidationError
from rebalancer.services.redistribution import (
    determine_strategy,
    rebalance_class_percentages,
    redistribute_equally,
    redistribute_percentages,
    redistribute_proportionally,
)

D = Decimal


@pytest.mark.services
@pytest.mark.unit
class TestRedistributionHelpers:
    def test_equal_split(self) -> None:
        assert redistribute_equally(D("60"), 3) == D("20")

    def test_equal_split_without_items(self) -> None:
        assert redistribute_equally(D("60"), 0) == D("0")

    def test_proportional_keeps_ratios(self) -> None:
        assert redistribute_proportionally([D("30"), D("10")], D("80")) == [D("60"), D("20")]

    def test_proportional_all_zero_falls_back_to_equal(self) -> None:
        assert redistribute_proportionally([D("0"), D("0")], D("50")) == [D("25"), D("25")]

    def test_strategy_equal_for_similar_items(self) -> None:
        assert determine_strategy([D("40"), D("30"), D("30")]) == "equal"

    def test_strategy_proportional_when_one_dominates(self) -> None:
        assert determine_strategy([D("70"), D("10"), D("10")]) == "proportional"

    def test_strategy_for_empty_input(self) -> None:
        assert determine_strategy([]) == "equal"

    def test_redistribute_uses_automatic_strategy(self) -> None:
        result = redistribute_percentages([D("70"), D("10")], D("40"))
        assert result == [D("35"), D("5")]

    def test_redistribute_with_explicit_strategy(self) -> None:
        result = redistribute_percentages([D("70"), D("10")], D("40"), strategy="equal")
        assert result == [D("20"), D("20")]

    def test_redistribute_empty(self) -> None:
        assert redistribute_percentages([], D("40")) == []


@pytest.mark.services
@pytest.mark.unit
class TestRebalanceClassPercentages:
    def test_remaining_goes_to_percentage_siblings(self) -> None:
        targets = {
            AssetClass.STOCKS: PercentageTarget(D("60")),
            AssetClass.BONDS: PercentageTarget(D("30")),
            AssetClass.REAL_ESTATE: PercentageTarget(D("10")),
        }
        result = rebalance_class_percentages(targets, AssetClass.STOCKS, D("50"))

        assert result[AssetClass.STOCKS] == PercentageTarget(D("50"))
        assert result[AssetClass.BONDS] == PercentageTarget(D("25"))
        assert result[AssetClass.REAL_ESTATE] == PercentageTarget(D("25"))

    def test_fixed_and_off_classes_untouched(self) -> None:
        targets = {
            AssetClass.STOCKS: PercentageTarget(D("60")),
            AssetClass.BONDS: PercentageTarget(D("40")),
            AssetClass.CASH: FixedAmountTarget(D("5000")),
            AssetClass.CRYPTO: OFF,
        }
        result = rebalance_class_percentages(targets, AssetClass.BONDS, D("30"))

        assert result[AssetClass.STOCKS] == PercentageTarget(D("70"))
        assert result[AssetClass.CASH] == FixedAmountTarget(D("5000"))
        assert result[AssetClass.CRYPTO] is OFF

    def test_editing_a_new_class(self) -> None:
        targets = {AssetClass.STOCKS: PercentageTarget(D("100"))}
        result = rebalance_class_percentages(targets, AssetClass.CRYPTO, D("5"))

        assert result == {
            AssetClass.STOCKS: PercentageTarget(D("95")),
            AssetClass.CRYPTO: PercentageTarget(D("5")),
        }

    def test_input_is_not_mutated(self) -> None:
        targets = {
            AssetClass.STOCKS: PercentageTarget(D("60")),
            AssetClass.BONDS: PercentageTarget(D("40")),
        }
        rebalance_class_percentages(targets, AssetClass.STOCKS, D("80"))
        assert targets[AssetClass.STOCKS] == PercentageTarget(D("60"))

    @pytest.mark.parametrize("percent", ["-1", "100.5"])
    def test_out_of_range(self, percent: str) -> None:
        with pytest.raises(ValidationError):
            rebalance_class_percentages({}, AssetClass.STOCKS, D(percent))
