from __future__ import annotations

from enum import StrEnum


class AssetClass(StrEnum):
    """Top-level grouping that assets are bucketed into for allocation."""

    STOCKS = "STOCKS"
    BONDS = "BONDS"
    CASH = "CASH"
    CRYPTO = "CRYPTO"
    REAL_ESTATE = "REAL_ESTATE"

    @property
    def label(self) -> str:
        return self.value.replace("_", " ").title()

    @classmethod
    def choices(cls) -> list[tuple[str, str]]:
        return [(member.value, member.label) for member in cls]


class TargetMode(StrEnum):
    """How a target allocation is expressed."""

    PERCENTAGE = "PERCENTAGE"
    FIXED_AMOUNT = "FIXED_AMOUNT"
    OFF = "OFF"

    @property
    def label(self) -> str:
        return {
            TargetMode.PERCENTAGE: "Percentage",
            TargetMode.FIXED_AMOUNT: "Fixed amount",
            TargetMode.OFF: "Off",
        }[self]

    @classmethod
    def choices(cls) -> list[tuple[str, str]]:
        return [(member.value, member.label) for member in cls]


class Action(StrEnum):
    """Recommended action for closing an allocation delta."""

    BUY = "BUY"
    SELL = "SELL"
    SAVE = "SAVE"
    INVEST = "INVEST"
    HOLD = "HOLD"
    EXCLUDED = "EXCLUDED"


class SubAssetType(StrEnum):
    """Finer-grained kind of holding. Informational only, never used in allocation."""

    NONE = "NONE"
    ETF = "ETF"
    SINGLE_STOCK = "SINGLE_STOCK"
    SINGLE_BOND = "SINGLE_BOND"
    MONEY_ETF = "MONEY_ETF"
    SAVINGS_ACCOUNT = "SAVINGS_ACCOUNT"
    CHECKING_ACCOUNT = "CHECKING_ACCOUNT"
    BROKERAGE_ACCOUNT = "BROKERAGE_ACCOUNT"
    COIN = "COIN"
    PROPERTY = "PROPERTY"
    REIT = "REIT"

    @property
    def label(self) -> str:
        return _SUB_ASSET_TYPE_LABELS.get(self.value) or self.value.replace("_", " ").title()

    @classmethod
    def choices(cls) -> list[tuple[str, str]]:
        return [(member.value, member.label) for member in cls]


_SUB_ASSET_TYPE_LABELS = {
    "NONE": "None",
    "ETF": "ETF",
    "MONEY_ETF": "Money market ETF",
    "REIT": "REIT",
}
