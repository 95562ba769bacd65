"""Pure allocation engine: (assets, class targets) -> PortfolioAllocation.

No I/O and no shared state; every call builds a fresh result from the input
snapshot. Percentages are expressed on a 0-100 scale.

Percentage-mode assets are anchored at the portfolio total: an asset with a
40% target aims for 40% of the whole portfolio, independent of how its class
target is expressed. Members of an off class, or of a class with no class
target at all, are excluded whatever their own target says.
"""

from __future__ import annotations

from collections.abc import Iterable
from decimal import Decimal

from rebalancer.domain.assets import Asset, ClassTargets, group_by_class
from rebalancer.domain.classifier import (
    DEFAULT_HOLD_TOLERANCE,
    LabelPolicy,
    classify,
    default_label_policy,
)
from rebalancer.domain.enums import Action, AssetClass
from rebalancer.domain.results import AllocationDelta, ClassSummary, PortfolioAllocation
from rebalancer.domain.targets import (
    HUNDRED,
    OFF,
    ZERO,
    FixedAmountTarget,
    OffTarget,
    PercentageTarget,
    Target,
)
from rebalancer.domain.validation import percentage_target_warnings, validate_inputs
from rebalancer.exceptions import ConfigurationError


def percent_of(part: Decimal, whole: Decimal) -> Decimal:
    """Return part as a percentage of whole; 0 when whole is 0."""

    if whole == 0:
        return ZERO
    return part / whole * HUNDRED


def resolve_class_target(target: Target, total: Decimal, current_total: Decimal) -> Decimal | None:
    """Resolve a class target to an amount, or None when the class is off."""

    match target:
        case PercentageTarget(percent=percent):
            return total * percent / HUNDRED
        case FixedAmountTarget(amount=None):
            return current_total
        case FixedAmountTarget(amount=amount):
            return amount
        case OffTarget():
            return None
    raise TypeError(f"Unsupported target: {target!r}")


def resolve_asset_target(target: Target, total: Decimal) -> Decimal | None:
    """Resolve an asset target to an amount, or None when the asset is off."""

    match target:
        case PercentageTarget(percent=percent):
            return total * percent / HUNDRED
        case FixedAmountTarget(amount=amount):
            return amount
        case OffTarget():
            return None
    raise TypeError(f"Unsupported target: {target!r}")


class AllocationEngine:
    """Computes per-class summaries and per-asset deltas.

    Args:
        hold_tolerance: Deltas within +/- this amount are classified HOLD.
        label_policy: Picks the action vocabulary for an asset class.
        strict: Raise ConfigurationError for classes without a class target
            instead of excluding them and recording the issue.
        target_sum_tolerance: Tolerance for the class-percentage sum warning.
    """

    def __init__(
        self,
        hold_tolerance: Decimal = DEFAULT_HOLD_TOLERANCE,
        label_policy: LabelPolicy = default_label_policy,
        strict: bool = False,
        target_sum_tolerance: Decimal = Decimal("0.1"),
    ) -> None:
        self.hold_tolerance = hold_tolerance
        self.label_policy = label_policy
        self.strict = strict
        self.target_sum_tolerance = target_sum_tolerance

    def compute(self, assets: Iterable[Asset], class_targets: ClassTargets) -> PortfolioAllocation:
        """Run the full computation over one snapshot.

        Raises:
            ValidationError: If any asset or class target is malformed. No
                partial result is produced.
            ConfigurationError: Only in strict mode, for a represented class
                missing from ``class_targets``.
        """

        assets = tuple(assets)
        validate_inputs(assets, class_targets)

        total = sum((a.current_value for a in assets), ZERO)
        grouped = group_by_class(assets)

        issues: list[ConfigurationError] = []
        for asset_class in grouped:
            if asset_class not in class_targets:
                issue = ConfigurationError(asset_class)
                if self.strict:
                    raise issue
                issues.append(issue)

        summaries = tuple(
            self._summarize_class(asset_class, members, class_targets.get(asset_class), total)
            for asset_class, members in grouped.items()
        )
        class_totals = {s.asset_class: s.current_total for s in summaries}

        deltas = tuple(
            self._asset_delta(
                asset,
                total,
                class_totals[asset.asset_class],
                excluded=isinstance(class_targets.get(asset.asset_class, OFF), OffTarget),
            )
            for asset in assets
        )

        return PortfolioAllocation(
            total_value=total,
            class_summaries=summaries,
            deltas=deltas,
            issues=tuple(issues),
            warnings=tuple(percentage_target_warnings(class_targets, self.target_sum_tolerance)),
        )

    def _summarize_class(
        self,
        asset_class: AssetClass,
        members: list[Asset],
        target: Target | None,
        total: Decimal,
    ) -> ClassSummary:
        # A class without a configured target is treated as off.
        target = OFF if target is None else target

        current_total = sum((a.current_value for a in members), ZERO)
        target_total = resolve_class_target(target, total, current_total)
        delta = target_total - current_total if target_total is not None else ZERO

        return ClassSummary(
            asset_class=asset_class,
            target_mode=target.mode,
            target_percent=target.percent if isinstance(target, PercentageTarget) else None,
            current_percent=percent_of(current_total, total),
            current_total=current_total,
            target_total=target_total,
            delta=delta,
            action=classify(
                delta, target.mode, self.label_policy(asset_class), self.hold_tolerance
            ),
            asset_count=len(members),
        )

    def _asset_delta(
        self,
        asset: Asset,
        total: Decimal,
        class_total: Decimal,
        excluded: bool,
    ) -> AllocationDelta:
        current_percent = percent_of(asset.current_value, total)
        current_percent_in_class = percent_of(asset.current_value, class_total)

        target = OFF if excluded else asset.target
        target_value = resolve_asset_target(target, total)

        if target_value is None:
            return AllocationDelta(
                asset_id=asset.id,
                asset_class=asset.asset_class,
                current_value=asset.current_value,
                current_percent=current_percent,
                current_percent_in_class=current_percent_in_class,
                target_value=None,
                target_percent=None,
                delta=ZERO,
                delta_percent=ZERO,
                action=Action.EXCLUDED,
            )

        target_percent = percent_of(target_value, total)
        delta = target_value - asset.current_value

        return AllocationDelta(
            asset_id=asset.id,
            asset_class=asset.asset_class,
            current_value=asset.current_value,
            current_percent=current_percent,
            current_percent_in_class=current_percent_in_class,
            target_value=target_value,
            target_percent=target_percent,
            delta=delta,
            delta_percent=target_percent - current_percent,
            action=classify(
                delta, target.mode, self.label_policy(asset.asset_class), self.hold_tolerance
            ),
        )


def compute_allocation(assets: Iterable[Asset], class_targets: ClassTargets) -> PortfolioAllocation:
    """Convenience wrapper using the default engine settings."""

    return AllocationEngine().compute(assets, class_targets)
