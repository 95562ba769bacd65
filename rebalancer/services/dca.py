"""Dollar cost averaging helper.

Splits a lump sum across percentage-mode assets following the class targets,
then optionally turns each amount into a (fractional) share count.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field, replace
from datetime import datetime
from decimal import Decimal

import structlog

from rebalancer.domain.assets import Asset, ClassTargets, group_by_class
from rebalancer.domain.enums import AssetClass
from rebalancer.domain.targets import HUNDRED, ZERO, PercentageTarget
from rebalancer.exceptions import ValidationError
from rebalancer.services.market_data import MarketDataService

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class DCAAssetAllocation:
    asset_id: str
    asset_name: str
    ticker: str
    asset_class: AssetClass
    allocation_percent: Decimal
    investment_amount: Decimal
    current_price: Decimal | None = None
    shares: Decimal | None = None
    price_error: str | None = None


@dataclass(frozen=True)
class DCACalculation:
    total_amount: Decimal
    allocations: tuple[DCAAssetAllocation, ...] = ()
    generated_at: datetime = field(default_factory=datetime.now)

    @property
    def total_allocated(self) -> Decimal:
        return sum((a.investment_amount for a in self.allocations), ZERO)


def calculate_dca_allocation(
    assets: Iterable[Asset],
    amount: Decimal,
    class_targets: ClassTargets,
) -> DCACalculation:
    """Distribute ``amount`` according to class and asset percentage targets.

    Only percentage-mode assets in percentage-mode classes take part. Inside a
    class, each asset gets its target percent relative to the sum of the class
    members' target percents.

    Raises:
        ValidationError: If amount is negative.
    """
    if amount < 0:
        raise ValidationError(f"Investment amount must be non-negative, got {amount}")

    percentage_assets = [a for a in assets if isinstance(a.target, PercentageTarget)]
    allocations: list[DCAAssetAllocation] = []

    for asset_class, members in group_by_class(percentage_assets).items():
        class_target = class_targets.get(asset_class)
        if not isinstance(class_target, PercentageTarget) or class_target.percent <= 0:
            continue

        class_amount = class_target.percent / HUNDRED * amount
        percents = [m.target.percent for m in members]  # type: ignore[union-attr]
        class_percent_sum = sum(percents, ZERO)

        for asset in members:
            asset_percent = asset.target.percent  # type: ignore[union-attr]
            share = (
                asset_percent / class_percent_sum * class_amount if class_percent_sum > 0 else ZERO
            )
            allocations.append(
                DCAAssetAllocation(
                    asset_id=asset.id,
                    asset_name=asset.name,
                    ticker=asset.ticker,
                    asset_class=asset_class,
                    allocation_percent=asset_percent,
                    investment_amount=share,
                )
            )

    return DCACalculation(total_amount=amount, allocations=tuple(allocations))


def calculate_shares(
    calculation: DCACalculation, prices: Mapping[str, Decimal | None]
) -> DCACalculation:
    """Attach share counts using the given prices (fractional shares allowed)."""

    updated = []
    for allocation in calculation.allocations:
        price = prices.get(allocation.ticker)
        if price is None:
            updated.append(replace(allocation, price_error="Price unavailable"))
        elif price <= 0:
            updated.append(replace(allocation, price_error="Invalid price"))
        else:
            updated.append(
                replace(
                    allocation,
                    current_price=price,
                    shares=allocation.investment_amount / price,
                )
            )
    return replace(calculation, allocations=tuple(updated))


def price_dca_allocation(
    calculation: DCACalculation,
    market_data: MarketDataService | None = None,
) -> DCACalculation:
    """Fetch prices for every ticker in the calculation and compute shares.

    Raises:
        MarketDataError: If prices cannot be fetched.
    """
    market_data = market_data or MarketDataService()
    tickers = sorted({a.ticker for a in calculation.allocations if a.ticker})
    prices = market_data.get_prices(tickers)

    missing = [t for t in tickers if prices.get(t) is None]
    if missing:
        logger.warning("dca_prices_missing", tickers=missing)

    return calculate_shares(calculation, prices)
