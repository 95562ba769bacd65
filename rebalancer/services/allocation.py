"""Thin adapter between storage and the pure allocation engine."""

from __future__ import annotations

import structlog

from rebalancer import conf
from rebalancer.domain.engine import AllocationEngine
from rebalancer.domain.results import PortfolioAllocation
from rebalancer.exceptions import ValidationError
from rebalancer.services.repository import (
    AllocationRepository,
    DjangoAllocationRepository,
    PortfolioSnapshot,
)

logger = structlog.get_logger(__name__)


def build_engine() -> AllocationEngine:
    """Engine configured from ``settings.REBALANCER``."""

    return AllocationEngine(
        hold_tolerance=conf.hold_tolerance(),
        strict=conf.strict_class_targets(),
        target_sum_tolerance=conf.target_sum_tolerance(),
    )


class AllocationService:
    """
    Loads a portfolio snapshot and runs the engine on it.

    Uses composition with injected dependencies; owns logging of validation
    failures and configuration issues so the engine itself stays pure.
    """

    def __init__(
        self,
        repository: AllocationRepository | None = None,
        engine: AllocationEngine | None = None,
    ) -> None:
        self.repository = repository or DjangoAllocationRepository()
        self.engine = engine or build_engine()

    def get_snapshot(self, portfolio_id: int) -> PortfolioSnapshot:
        return self.repository.load_snapshot(portfolio_id)

    def get_allocation(self, portfolio_id: int) -> PortfolioAllocation:
        snapshot = self.get_snapshot(portfolio_id)
        return self.compute(snapshot, portfolio_id=portfolio_id)

    def compute(
        self, snapshot: PortfolioSnapshot, portfolio_id: int | None = None
    ) -> PortfolioAllocation:
        log = logger.bind(portfolio_id=portfolio_id)

        try:
            result = self.engine.compute(snapshot.assets, snapshot.class_targets)
        except ValidationError as e:
            log.warning("allocation_validation_failed", errors=e.errors)
            raise

        for issue in result.issues:
            log.warning("asset_class_target_missing", asset_class=str(issue.asset_class))
        for warning in result.warnings:
            log.info("allocation_target_warning", warning=warning)

        log.info(
            "allocation_computed",
            total_value=float(result.total_value),
            asset_count=len(result.deltas),
            class_count=len(result.class_summaries),
        )
        return result
