from .allocation import AllocationService, build_engine
from .market_data import MarketDataService
from .repository import (
    AllocationRepository,
    DjangoAllocationRepository,
    InMemoryAllocationRepository,
    PortfolioSnapshot,
)

__all__ = [
    "AllocationRepository",
    "AllocationService",
    "DjangoAllocationRepository",
    "InMemoryAllocationRepository",
    "MarketDataService",
    "PortfolioSnapshot",
    "build_engine",
]
