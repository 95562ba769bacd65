"""Boundary validation for engine input.

Validation is all-or-nothing: every problem is collected and reported in a
single ValidationError, and the engine never computes a partial result.
"""

from __future__ import annotations

from collections.abc import Iterable
from decimal import Decimal

from rebalancer.domain.assets import Asset, ClassTargets
from rebalancer.domain.targets import (
    HUNDRED,
    ZERO,
    FixedAmountTarget,
    OffTarget,
    PercentageTarget,
    Target,
)
from rebalancer.exceptions import ValidationError


def _target_errors(label: str, target: Target, *, allow_missing_amount: bool) -> list[str]:
    errors: list[str] = []
    match target:
        case PercentageTarget(percent=percent):
            if not percent.is_finite():
                errors.append(f"{label} has non-finite target percentage: {percent}")
            elif not ZERO <= percent <= HUNDRED:
                errors.append(f"{label} has target percentage outside 0-100: {percent}")
        case FixedAmountTarget(amount=None):
            if not allow_missing_amount:
                errors.append(f"{label} is missing a target value for fixed-amount mode")
        case FixedAmountTarget(amount=amount):
            if not amount.is_finite():
                errors.append(f"{label} has non-finite target value: {amount}")
            elif amount < 0:
                errors.append(f"{label} has negative target value: {amount}")
    return errors


def collect_asset_errors(assets: Iterable[Asset]) -> list[str]:
    errors: list[str] = []
    seen_ids: set[str] = set()

    for asset in assets:
        if asset.id in seen_ids:
            errors.append(f"Duplicate asset id: {asset.id}")
        seen_ids.add(asset.id)

        if not asset.current_value.is_finite():
            errors.append(f"Asset {asset.name} has non-finite value: {asset.current_value}")
        elif asset.current_value < 0:
            errors.append(f"Asset {asset.name} has negative value: {asset.current_value}")

        errors.extend(
            _target_errors(f"Asset {asset.name}", asset.target, allow_missing_amount=False)
        )

    return errors


def collect_class_target_errors(class_targets: ClassTargets) -> list[str]:
    errors: list[str] = []
    for asset_class, target in class_targets.items():
        errors.extend(
            _target_errors(f"Asset class {asset_class}", target, allow_missing_amount=True)
        )
    return errors


def validate_inputs(assets: Iterable[Asset], class_targets: ClassTargets) -> None:
    """Raise ValidationError listing every problem in the input snapshot."""

    errors = collect_asset_errors(assets) + collect_class_target_errors(class_targets)
    if errors:
        raise ValidationError(errors)


def percentage_target_warnings(
    class_targets: ClassTargets, tolerance: Decimal = Decimal("0.1")
) -> list[str]:
    """Warn when percentage class targets do not add up to 100%.

    Not fatal. A sum below 100 is only flagged when every active class target
    is percentage based, since fixed-amount classes take up the remainder.
    """

    active = [t for t in class_targets.values() if not isinstance(t, OffTarget)]
    percents = [t.percent for t in active if isinstance(t, PercentageTarget)]
    if not percents:
        return []

    total = sum(percents, ZERO)
    all_percentage = len(percents) == len(active)
    if total - HUNDRED > tolerance or (all_percentage and HUNDRED - total > tolerance):
        return [f"Asset class target percentages sum to {total:.2f}%, expected 100%"]
    return []
