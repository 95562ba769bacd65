"""Spread the remaining percentage across sibling targets after one is edited."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from decimal import Decimal
from typing import Literal, TypeAlias

from rebalancer.domain.enums import AssetClass
from rebalancer.domain.targets import HUNDRED, ZERO, PercentageTarget, Target
from rebalancer.exceptions import ValidationError

Strategy: TypeAlias = Literal["equal", "proportional"]

DEFAULT_PREVALENCE_THRESHOLD = Decimal("2.0")


def redistribute_equally(remaining: Decimal, count: int) -> Decimal:
    if count == 0:
        return ZERO
    return remaining / count


def redistribute_proportionally(current: Sequence[Decimal], remaining: Decimal) -> list[Decimal]:
    """Keep the relative proportions of ``current``; equal split if all are zero."""

    total = sum(current, ZERO)
    if total == 0:
        share = redistribute_equally(remaining, len(current))
        return [share for _ in current]
    return [pct / total * remaining for pct in current]


def determine_strategy(
    current: Sequence[Decimal],
    prevalence_threshold: Decimal = DEFAULT_PREVALENCE_THRESHOLD,
) -> Strategy:
    """Equal by default; proportional when one item dominates the average."""

    if not current:
        return "equal"
    average = sum(current, ZERO) / len(current)
    if any(pct > average * prevalence_threshold for pct in current):
        return "proportional"
    return "equal"


def redistribute_percentages(
    current: Sequence[Decimal],
    remaining: Decimal,
    strategy: Strategy | None = None,
) -> list[Decimal]:
    if not current:
        return []

    strategy = strategy or determine_strategy(current)
    if strategy == "equal":
        share = redistribute_equally(remaining, len(current))
        return [share for _ in current]
    return redistribute_proportionally(current, remaining)


def rebalance_class_percentages(
    class_targets: Mapping[AssetClass, Target],
    edited_class: AssetClass,
    new_percent: Decimal,
    strategy: Strategy | None = None,
) -> dict[AssetClass, Target]:
    """Set one class percentage and redistribute the rest across percentage classes.

    Fixed-amount and off classes are left untouched.

    Raises:
        ValidationError: If the new percentage is outside 0-100.
    """

    if not ZERO <= new_percent <= HUNDRED:
        raise ValidationError(f"Target percent must be between 0 and 100, got {new_percent}")

    result: dict[AssetClass, Target] = dict(class_targets)
    result[edited_class] = PercentageTarget(percent=new_percent)

    siblings = [
        asset_class
        for asset_class, target in class_targets.items()
        if asset_class != edited_class and isinstance(target, PercentageTarget)
    ]
    if not siblings:
        return result

    current = [class_targets[ac].percent for ac in siblings]  # type: ignore[union-attr]
    new_values = redistribute_percentages(current, HUNDRED - new_percent, strategy)

    for asset_class, pct in zip(siblings, new_values, strict=True):
        result[asset_class] = PercentageTarget(percent=pct)
    return result
