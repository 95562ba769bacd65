from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, TypeAlias

from rebalancer.domain.enums import AssetClass, SubAssetType, TargetMode
from rebalancer.domain.targets import Target, target_from_fields, to_decimal
from rebalancer.exceptions import ValidationError

ClassTargets: TypeAlias = Mapping[AssetClass, Target]


@dataclass(frozen=True)
class Asset:
    """A held position as seen by the allocation engine."""

    id: str
    name: str
    asset_class: AssetClass
    current_value: Decimal
    target: Target
    ticker: str = ""
    identifier: str | None = None
    sub_asset_type: SubAssetType = SubAssetType.NONE

    @property
    def target_mode(self) -> TargetMode:
        return self.target.mode

    @classmethod
    def from_fields(
        cls,
        *,
        id: Any,
        name: str,
        asset_class: AssetClass | str,
        current_value: Any,
        target_mode: str,
        target_percent: Any = None,
        target_value: Any = None,
        ticker: str = "",
        identifier: str | None = None,
        sub_asset_type: SubAssetType | str | None = None,
    ) -> Asset:
        """Build an Asset from flat, untrusted fields.

        A blank sub-asset type means NONE.

        Raises:
            ValidationError: On unknown asset class or sub-asset type,
                missing/non-finite value or target fields inconsistent with
                the mode.
        """

        try:
            asset_class = AssetClass(asset_class)
        except ValueError as e:
            raise ValidationError(f"Asset {name} has unknown asset class: {asset_class!r}") from e

        try:
            sub_type = SubAssetType(sub_asset_type or SubAssetType.NONE)
        except ValueError as e:
            raise ValidationError(
                f"Asset {name} has unknown sub-asset type: {sub_asset_type!r}"
            ) from e

        try:
            value = to_decimal(current_value, "Current value")
        except ValidationError as e:
            raise ValidationError([f"Asset {name}: {msg}" for msg in e.errors]) from e
        if value is None:
            raise ValidationError(f"Asset {name} has no current value")

        try:
            target = target_from_fields(target_mode, target_percent, target_value)
        except ValidationError as e:
            raise ValidationError([f"Asset {name}: {msg}" for msg in e.errors]) from e

        return cls(
            id=str(id),
            name=name,
            asset_class=asset_class,
            current_value=value,
            target=target,
            ticker=ticker or "",
            identifier=identifier or None,
            sub_asset_type=sub_type,
        )


def group_by_class(assets: tuple[Asset, ...] | list[Asset]) -> dict[AssetClass, list[Asset]]:
    """Group assets by asset class, in AssetClass declaration order."""

    grouped: dict[AssetClass, list[Asset]] = {}
    for asset_class in AssetClass:
        members = [a for a in assets if a.asset_class == asset_class]
        if members:
            grouped[asset_class] = members
    return grouped
