"""Allocation targets as a tagged variant.

Each variant carries exactly the payload its mode needs, so there is no
"missing value means off" ambiguity. Percentages use a 0-100 scale.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Any, ClassVar, TypeAlias

from rebalancer.domain.enums import TargetMode
from rebalancer.exceptions import ValidationError

HUNDRED = Decimal("100")
ZERO = Decimal("0")


@dataclass(frozen=True)
class PercentageTarget:
    """Target expressed as a share of the portfolio total."""

    percent: Decimal
    mode: ClassVar[TargetMode] = TargetMode.PERCENTAGE


@dataclass(frozen=True)
class FixedAmountTarget:
    """Target expressed as an absolute amount.

    ``amount`` may only be ``None`` on a class target, where it means the class
    keeps its current total.
    """

    amount: Decimal | None = None
    mode: ClassVar[TargetMode] = TargetMode.FIXED_AMOUNT


@dataclass(frozen=True)
class OffTarget:
    """Excluded from rebalancing."""

    mode: ClassVar[TargetMode] = TargetMode.OFF


Target: TypeAlias = PercentageTarget | FixedAmountTarget | OffTarget

OFF = OffTarget()


def to_decimal(value: Any, field_name: str) -> Decimal | None:
    """Coerce user input to Decimal, treating blank values as missing."""

    if value is None:
        return None
    if isinstance(value, str) and not value.strip():
        return None
    if isinstance(value, Decimal):
        result = value
    else:
        try:
            result = Decimal(str(value).strip())
        except (InvalidOperation, ValueError) as e:
            raise ValidationError(f"{field_name} is not a number: {value!r}") from e
    if not result.is_finite():
        raise ValidationError(f"{field_name} is not a finite number: {value!r}")
    return result


def target_from_fields(
    mode: TargetMode | str,
    percent: Any = None,
    amount: Any = None,
    *,
    allow_missing_amount: bool = False,
) -> Target:
    """Build a Target from the flat (mode, percent, amount) storage shape.

    Exactly one of percent/amount may be populated and it must match the mode;
    an off target carries neither.

    Raises:
        ValidationError: If the fields are inconsistent with the mode.
    """

    try:
        mode = TargetMode(mode)
    except ValueError as e:
        raise ValidationError(f"Unknown target mode: {mode!r}") from e

    percent = to_decimal(percent, "Target percent")
    amount = to_decimal(amount, "Target value")

    if percent is not None and amount is not None:
        raise ValidationError("Target percent and target value cannot both be set")

    match mode:
        case TargetMode.PERCENTAGE:
            if percent is None:
                raise ValidationError("Target percent is required in percentage mode")
            if amount is not None:
                raise ValidationError("Target value is not allowed in percentage mode")
            if not ZERO <= percent <= HUNDRED:
                raise ValidationError(f"Target percent must be between 0 and 100, got {percent}")
            return PercentageTarget(percent=percent)
        case TargetMode.FIXED_AMOUNT:
            if percent is not None:
                raise ValidationError("Target percent is not allowed in fixed-amount mode")
            if amount is None and not allow_missing_amount:
                raise ValidationError("Target value is required in fixed-amount mode")
            if amount is not None and amount < 0:
                raise ValidationError(f"Target value must be non-negative, got {amount}")
            return FixedAmountTarget(amount=amount)
        case TargetMode.OFF:
            if percent is not None or amount is not None:
                raise ValidationError("Off mode cannot carry a target percent or value")
            return OFF


def target_to_fields(target: Target) -> tuple[TargetMode, Decimal | None, Decimal | None]:
    """Flatten a Target into (mode, percent, amount)."""

    match target:
        case PercentageTarget(percent=percent):
            return TargetMode.PERCENTAGE, percent, None
        case FixedAmountTarget(amount=amount):
            return TargetMode.FIXED_AMOUNT, None, amount
        case OffTarget():
            return TargetMode.OFF, None, None
    raise TypeError(f"Unsupported target: {target!r}")
