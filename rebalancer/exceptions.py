from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from rebalancer.domain.enums import AssetClass


class RebalancerError(Exception):
    """Base exception for all rebalancer related errors."""

    pass


class ValidationError(RebalancerError):
    """Raised when assets or targets are malformed.

    Collects every problem found so callers can report them together.
    """

    def __init__(self, errors: str | list[str]) -> None:
        self.errors = [errors] if isinstance(errors, str) else list(errors)
        super().__init__("; ".join(self.errors))


class ImportFormatError(ValidationError):
    """Raised when a portfolio backup file cannot be parsed."""

    pass


class ConfigurationError(RebalancerError):
    """Raised (or recorded) when an asset class has no class target entry."""

    def __init__(self, asset_class: AssetClass, message: str | None = None) -> None:
        self.asset_class = asset_class
        super().__init__(message or f"No class target configured for {asset_class}")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ConfigurationError):
            return NotImplemented
        return self.asset_class == other.asset_class and str(self) == str(other)

    def __hash__(self) -> int:
        return hash((self.asset_class, str(self)))


class MarketDataError(RebalancerError):
    """Raised when there is an issue with pricing data (e.g., missing price)."""

    pass
