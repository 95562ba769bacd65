from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from decimal import Decimal

from rebalancer.domain.assets import Asset, ClassTargets
from rebalancer.domain.enums import AssetClass
from rebalancer.domain.results import AllocationDelta, ClassSummary, PortfolioAllocation
from rebalancer.domain.targets import FixedAmountTarget, OffTarget, PercentageTarget, Target
from rebalancer.templatetags.rebalancer_filters import action_css, money, percent

ASSET_COLUMNS = [
    ("name", "Asset"),
    ("ticker", "Ticker"),
    ("asset_class", "Class"),
    ("target", "Target"),
    ("current_percent", "% Current"),
    ("current_value", "Current"),
    ("target_value", "Target Value"),
    ("delta", "Delta"),
    ("action", "Action"),
]

# Public sort key -> dotted path on AssetTableRow
ASSET_SORT_PATHS = {
    "name": "asset.name",
    "ticker": "asset.ticker",
    "asset_class": "asset.asset_class",
    "target": "target_raw",
    "current_percent": "allocation.current_percent",
    "current_value": "allocation.current_value",
    "target_value": "allocation.target_value",
    "delta": "allocation.delta",
    "action": "allocation.action",
}

CLASS_COLUMNS = [
    ("asset_class", "Asset Class"),
    ("target", "Target"),
    ("current_percent", "% Current"),
    ("current_total", "Current"),
    ("target_total", "Target Value"),
    ("delta", "Delta"),
    ("action", "Action"),
]

CLASS_SORT_PATHS = {
    "asset_class": "summary.asset_class",
    "target": "summary.target_percent",
    "current_percent": "summary.current_percent",
    "current_total": "summary.current_total",
    "target_total": "summary.target_total",
    "delta": "summary.delta",
    "action": "summary.action",
}


@dataclass(frozen=True)
class AssetTableRow:
    asset: Asset
    allocation: AllocationDelta

    # Display strings
    asset_class: str
    target: str
    current_percent: str
    current_value: str
    target_value: str
    delta: str
    action: str
    action_class: str

    # Percent for percentage targets, amount for fixed ones
    target_raw: Decimal | None = None


@dataclass(frozen=True)
class ClassTableRow:
    summary: ClassSummary

    asset_class: str
    target: str
    current_percent: str
    current_total: str
    target_total: str
    delta: str
    action: str
    action_class: str


def describe_target(target: Target | None) -> str:
    match target:
        case PercentageTarget(percent=pct):
            return percent(pct)
        case FixedAmountTarget(amount=None):
            return "Current total"
        case FixedAmountTarget(amount=amount):
            return money(amount)
        case OffTarget() | None:
            return "Off"
    return ""


def _target_raw(target: Target) -> Decimal | None:
    match target:
        case PercentageTarget(percent=pct):
            return pct
        case FixedAmountTarget(amount=amount):
            return amount
    return None


def build_asset_rows(
    assets: Iterable[Asset], allocation: PortfolioAllocation
) -> list[AssetTableRow]:
    """Asset table rows in input order; assets without a delta are skipped."""

    rows = []
    for asset in assets:
        delta = allocation.delta_for(asset.id)
        if delta is None:
            continue
        rows.append(
            AssetTableRow(
                asset=asset,
                allocation=delta,
                asset_class=asset.asset_class.label,
                target=describe_target(asset.target),
                current_percent=percent(delta.current_percent),
                current_value=money(delta.current_value),
                target_value=money(delta.target_value),
                delta=money(delta.delta),
                action=str(delta.action),
                action_class=action_css(delta.action),
                target_raw=_target_raw(asset.target),
            )
        )
    return rows


def build_class_rows(
    allocation: PortfolioAllocation, class_targets: ClassTargets
) -> list[ClassTableRow]:
    """One row per represented asset class, in AssetClass declaration order."""

    rows = []
    for summary in allocation.class_summaries:
        rows.append(
            ClassTableRow(
                summary=summary,
                asset_class=summary.asset_class.label,
                target=describe_target(class_targets.get(summary.asset_class)),
                current_percent=percent(summary.current_percent),
                current_total=money(summary.current_total),
                target_total=money(summary.target_total),
                delta=money(summary.delta),
                action=str(summary.action),
                action_class=action_css(summary.action),
            )
        )
    return rows


def percentage_class_choices(class_targets: ClassTargets) -> list[AssetClass]:
    """Classes whose target can be edited with redistribution."""
    return [ac for ac in AssetClass if isinstance(class_targets.get(ac), PercentageTarget)]
