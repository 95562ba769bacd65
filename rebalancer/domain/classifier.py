from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from decimal import Decimal
from typing import TypeAlias

from rebalancer.domain.enums import Action, AssetClass, TargetMode

# Half of the smallest currency unit; suppresses flapping from rounding noise.
DEFAULT_HOLD_TOLERANCE = Decimal("0.005")


@dataclass(frozen=True)
class LabelSet:
    """Vocabulary used for a positive (underweight) or negative (overweight) delta."""

    underweight: Action
    overweight: Action


INVESTMENT_LABELS = LabelSet(underweight=Action.BUY, overweight=Action.SELL)
CASH_LABELS = LabelSet(underweight=Action.SAVE, overweight=Action.INVEST)

LabelPolicy: TypeAlias = Callable[[AssetClass], LabelSet]


def default_label_policy(asset_class: AssetClass) -> LabelSet:
    """Cash speaks of saving/investing, everything else of buying/selling."""

    return CASH_LABELS if asset_class == AssetClass.CASH else INVESTMENT_LABELS


def classify(
    delta: Decimal,
    mode: TargetMode,
    labels: LabelSet = INVESTMENT_LABELS,
    tolerance: Decimal = DEFAULT_HOLD_TOLERANCE,
) -> Action:
    """Map a signed delta (target - current) to a recommended action.

    Off mode always wins, then the hold band, then the sign of the delta.
    """

    if mode == TargetMode.OFF:
        return Action.EXCLUDED
    if abs(delta) <= tolerance:
        return Action.HOLD
    if delta > 0:
        return labels.underweight
    return labels.overweight
