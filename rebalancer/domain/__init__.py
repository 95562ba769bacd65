"""Framework-free allocation domain.

Public API:
    - AllocationEngine / compute_allocation
    - classify, LabelSet, INVESTMENT_LABELS, CASH_LABELS
    - Asset, target variants and result types
"""

from __future__ import annotations

from .assets import Asset, ClassTargets, group_by_class
from .classifier import (
    CASH_LABELS,
    DEFAULT_HOLD_TOLERANCE,
    INVESTMENT_LABELS,
    LabelSet,
    classify,
    default_label_policy,
)
from .engine import AllocationEngine, compute_allocation, percent_of
from .enums import Action, AssetClass, SubAssetType, TargetMode
from .results import AllocationDelta, ClassSummary, PortfolioAllocation
from .targets import (
    OFF,
    FixedAmountTarget,
    OffTarget,
    PercentageTarget,
    Target,
    target_from_fields,
    target_to_fields,
)

__all__ = [
    "CASH_LABELS",
    "DEFAULT_HOLD_TOLERANCE",
    "INVESTMENT_LABELS",
    "OFF",
    "Action",
    "AllocationDelta",
    "AllocationEngine",
    "Asset",
    "AssetClass",
    "ClassSummary",
    "ClassTargets",
    "FixedAmountTarget",
    "LabelSet",
    "OffTarget",
    "PercentageTarget",
    "PortfolioAllocation",
    "SubAssetType",
    "Target",
    "TargetMode",
    "classify",
    "compute_allocation",
    "default_label_policy",
    "group_by_class",
    "percent_of",
    "target_from_fields",
    "target_to_fields",
]
