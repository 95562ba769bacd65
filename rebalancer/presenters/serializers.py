"""JSON-ready dictionaries for engine results.

Decimals are rendered as strings so no precision is lost in transit.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any

from rebalancer.domain.results import AllocationDelta, ClassSummary, PortfolioAllocation


def _dec(value: Decimal | None) -> str | None:
    return None if value is None else str(value)


def delta_to_dict(delta: AllocationDelta) -> dict[str, Any]:
    return {
        "asset_id": delta.asset_id,
        "asset_class": str(delta.asset_class),
        "current_value": _dec(delta.current_value),
        "current_percent": _dec(delta.current_percent),
        "current_percent_in_class": _dec(delta.current_percent_in_class),
        "target_value": _dec(delta.target_value),
        "target_percent": _dec(delta.target_percent),
        "delta": _dec(delta.delta),
        "delta_percent": _dec(delta.delta_percent),
        "action": str(delta.action),
    }


def summary_to_dict(summary: ClassSummary) -> dict[str, Any]:
    return {
        "asset_class": str(summary.asset_class),
        "target_mode": str(summary.target_mode),
        "target_percent": _dec(summary.target_percent),
        "current_percent": _dec(summary.current_percent),
        "current_total": _dec(summary.current_total),
        "target_total": _dec(summary.target_total),
        "delta": _dec(summary.delta),
        "action": str(summary.action),
        "asset_count": summary.asset_count,
    }


def allocation_to_dict(allocation: PortfolioAllocation) -> dict[str, Any]:
    return {
        "total_value": _dec(allocation.total_value),
        "class_summaries": [summary_to_dict(s) for s in allocation.class_summaries],
        "deltas": [delta_to_dict(d) for d in allocation.deltas],
        "issues": [
            {"asset_class": str(issue.asset_class), "message": str(issue)}
            for issue in allocation.issues
        ],
        "warnings": list(allocation.warnings),
    }
