from decimal import Decimal

import pytest

from rebalancer.domain import (
    Asset,
    AssetClass,
    FixedAmountTarget,
    PercentageTarget,
    SubAssetType,
    TargetMode,
    group_by_class,
)
from rebalancer.exceptions import ValidationError


@pytest.mark.domain
@pytest.mark.unit
class TestAssetFromFields:
    def test_builds_asset(self) -> None:
        asset = Asset.from_fields(
            id=7,
            name="Total Bond Market",
            asset_class="BONDS",
            current_value="15000",
            target_mode="PERCENTAGE",
            target_percent="16.5",
            ticker="BND",
            identifier="",
        )

        assert asset.id == "7"
        assert asset.asset_class is AssetClass.BONDS
        assert asset.current_value == Decimal("15000")
        assert asset.target == PercentageTarget(Decimal("16.5"))
        assert asset.target_mode is TargetMode.PERCENTAGE
        assert asset.identifier is None
        assert asset.sub_asset_type is SubAssetType.NONE

    def test_sub_asset_type(self) -> None:
        asset = Asset.from_fields(
            id=1,
            name="Savings",
            asset_class="CASH",
            current_value="10",
            target_mode="OFF",
            sub_asset_type="SAVINGS_ACCOUNT",
        )
        assert asset.sub_asset_type is SubAssetType.SAVINGS_ACCOUNT

    def test_unknown_sub_asset_type(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            Asset.from_fields(
                id=1,
                name="Gold",
                asset_class="STOCKS",
                current_value="1",
                target_mode="OFF",
                sub_asset_type="BULLION",
            )
        assert exc_info.value.errors == ["Asset Gold has unknown sub-asset type: 'BULLION'"]

    def test_unknown_asset_class(self) -> None:
        with pytest.raises(ValidationError, match="unknown asset class"):
            Asset.from_fields(
                id=1,
                name="Gold",
                asset_class="COMMODITIES",
                current_value="1",
                target_mode="OFF",
            )

    def test_missing_value(self) -> None:
        with pytest.raises(ValidationError, match="has no current value"):
            Asset.from_fields(
                id=1, name="X", asset_class="CASH", current_value="", target_mode="OFF"
            )

    def test_non_finite_value(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            Asset.from_fields(
                id=1, name="X", asset_class="CASH", current_value="NaN", target_mode="OFF"
            )
        assert exc_info.value.errors == ["Asset X: Current value is not a finite number: 'NaN'"]

    def test_target_errors_are_prefixed(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            Asset.from_fields(
                id=1,
                name="Savings",
                asset_class="CASH",
                current_value="10",
                target_mode="FIXED_AMOUNT",
            )
        assert exc_info.value.errors == [
            "Asset Savings: Target value is required in fixed-amount mode"
        ]


@pytest.mark.domain
@pytest.mark.unit
def test_group_by_class_uses_declaration_order(make_asset) -> None:
    assets = [
        make_asset("cash", AssetClass.CASH, "1", FixedAmountTarget(Decimal("1"))),
        make_asset("s1", AssetClass.STOCKS),
        make_asset("s2", AssetClass.STOCKS),
    ]
    grouped = group_by_class(assets)

    assert list(grouped) == [AssetClass.STOCKS, AssetClass.CASH]
    assert [a.id for a in grouped[AssetClass.STOCKS]] == ["s1", "s2"]
