"""Immutable engine output."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from rebalancer.domain.enums import Action, AssetClass, TargetMode
from rebalancer.exceptions import ConfigurationError


@dataclass(frozen=True)
class AllocationDelta:
    """Per-asset deviation from target.

    Attributes:
        asset_id: Id of the asset this row describes
        asset_class: Class the asset belongs to
        current_value: Current value of the position
        current_percent: Share of the portfolio total (0-100)
        current_percent_in_class: Share of the asset's class total (0-100)
        target_value: Resolved target amount, None when the asset is excluded
        target_percent: target_value as share of the portfolio total
        delta: target_value - current_value, 0 when excluded
        delta_percent: target_percent - current_percent, 0 when excluded
        action: Recommended action
    """

    asset_id: str
    asset_class: AssetClass
    current_value: Decimal
    current_percent: Decimal
    current_percent_in_class: Decimal
    target_value: Decimal | None
    target_percent: Decimal | None
    delta: Decimal
    delta_percent: Decimal
    action: Action


@dataclass(frozen=True)
class ClassSummary:
    """Per-asset-class aggregate."""

    asset_class: AssetClass
    target_mode: TargetMode
    target_percent: Decimal | None
    current_percent: Decimal
    current_total: Decimal
    target_total: Decimal | None
    delta: Decimal
    action: Action
    asset_count: int = 0


@dataclass(frozen=True)
class PortfolioAllocation:
    """Complete result of one engine run."""

    total_value: Decimal
    class_summaries: tuple[ClassSummary, ...] = ()
    deltas: tuple[AllocationDelta, ...] = ()
    issues: tuple[ConfigurationError, ...] = ()
    warnings: tuple[str, ...] = ()

    def delta_for(self, asset_id: str) -> AllocationDelta | None:
        for delta in self.deltas:
            if delta.asset_id == asset_id:
                return delta
        return None

    def summary_for(self, asset_class: AssetClass) -> ClassSummary | None:
        for summary in self.class_summaries:
            if summary.asset_class == asset_class:
                return summary
        return None

    @property
    def is_empty(self) -> bool:
        return not self.deltas
