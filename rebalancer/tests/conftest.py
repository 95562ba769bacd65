"""
Root-level pytest fixtures for the rebalancer test suite.

Fixture Hierarchy:
- make_asset: builds domain assets without touching the database
- test_user / other_user: users for ownership tests
- test_portfolio: two-class portfolio stored in the database
- logged_in_client: Django test client authenticated as test_user
"""

from decimal import Decimal
from typing import Any

from django.contrib.auth import get_user_model

import pytest

from rebalancer.domain import Asset, AssetClass, PercentageTarget, Target
from rebalancer.domain.enums import TargetMode
from rebalancer.tests.factories import (
    AssetClassTargetFactory,
    AssetFactory,
    PortfolioFactory,
)

User = get_user_model()


# ============================================================================
# DOMAIN FIXTURES
# ============================================================================


@pytest.fixture
def make_asset():
    """
    Factory for domain Asset objects.

    Usage:
        asset = make_asset("a", AssetClass.STOCKS, "1000", PercentageTarget(Decimal("40")))
    """

    def _make(
        asset_id: str,
        asset_class: AssetClass = AssetClass.STOCKS,
        value: str = "0",
        target: Target | None = None,
        **kwargs: Any,
    ) -> Asset:
        return Asset(
            id=asset_id,
            name=kwargs.pop("name", asset_id),
            asset_class=asset_class,
            current_value=Decimal(value),
            target=target if target is not None else PercentageTarget(Decimal("0")),
            **kwargs,
        )

    return _make


@pytest.fixture
def scenario_a_assets(make_asset):
    """STOCKS 14000 @40% and BONDS 9450 @27%; total 23450."""
    return [
        make_asset("stocks", AssetClass.STOCKS, "14000", PercentageTarget(Decimal("40"))),
        make_asset("bonds", AssetClass.BONDS, "9450", PercentageTarget(Decimal("27"))),
    ]


@pytest.fixture
def scenario_a_targets():
    return {
        AssetClass.STOCKS: PercentageTarget(Decimal("60")),
        AssetClass.BONDS: PercentageTarget(Decimal("40")),
    }


# ============================================================================
# USER FIXTURES
# ============================================================================


@pytest.fixture
def test_user(db):
    """
    Standard test user.

    Username: testuser
    Password: password
    """
    return User.objects.create_user(username="testuser", password="password")


@pytest.fixture
def other_user(db):
    return User.objects.create_user(username="otheruser", password="password")


@pytest.fixture
def logged_in_client(client, test_user):
    client.force_login(test_user)
    return client


# ============================================================================
# PORTFOLIO FIXTURES
# ============================================================================


@pytest.fixture
def test_portfolio(test_user):
    """
    Portfolio with a stocks and a bonds asset plus matching class targets.

    VTI 6000 @60%, BND 4000 @40%; STOCKS 60%, BONDS 40%. Already balanced.
    """
    portfolio = PortfolioFactory(user=test_user, name="Main")
    AssetClassTargetFactory(
        portfolio=portfolio, asset_class=AssetClass.STOCKS, target_percent=Decimal("60")
    )
    AssetClassTargetFactory(
        portfolio=portfolio, asset_class=AssetClass.BONDS, target_percent=Decimal("40")
    )
    AssetFactory(
        portfolio=portfolio,
        name="Total Stock Market",
        ticker="VTI",
        asset_class=AssetClass.STOCKS,
        current_value=Decimal("6000"),
        target_percent=Decimal("60"),
    )
    AssetFactory(
        portfolio=portfolio,
        name="Total Bond Market",
        ticker="BND",
        asset_class=AssetClass.BONDS,
        current_value=Decimal("4000"),
        target_percent=Decimal("40"),
    )
    return portfolio


@pytest.fixture
def unbalanced_portfolio(test_user):
    """
    STOCKS overweight, BONDS underweight, CASH fixed and crypto without a class target.

    VTI 8000 @60%, BND 1000 @30%, CASH 1000 fixed 1500, BTC 0 @10% (no CRYPTO class target).
    Total 10000.
    """
    portfolio = PortfolioFactory(user=test_user, name="Unbalanced")
    AssetClassTargetFactory(
        portfolio=portfolio, asset_class=AssetClass.STOCKS, target_percent=Decimal("60")
    )
    AssetClassTargetFactory(
        portfolio=portfolio, asset_class=AssetClass.BONDS, target_percent=Decimal("30")
    )
    AssetClassTargetFactory(
        portfolio=portfolio,
        asset_class=AssetClass.CASH,
        target_mode=TargetMode.FIXED_AMOUNT,
        target_percent=None,
        target_value=Decimal("1500"),
    )
    AssetFactory(
        portfolio=portfolio,
        name="Total Stock Market",
        ticker="VTI",
        asset_class=AssetClass.STOCKS,
        current_value=Decimal("8000"),
        target_percent=Decimal("60"),
    )
    AssetFactory(
        portfolio=portfolio,
        name="Total Bond Market",
        ticker="BND",
        asset_class=AssetClass.BONDS,
        current_value=Decimal("1000"),
        target_percent=Decimal("30"),
    )
    AssetFactory(
        portfolio=portfolio,
        name="Savings",
        ticker="CASH",
        asset_class=AssetClass.CASH,
        current_value=Decimal("1000"),
        target_mode=TargetMode.FIXED_AMOUNT,
        target_percent=None,
        target_value=Decimal("1500"),
    )
    AssetFactory(
        portfolio=portfolio,
        name="Bitcoin",
        ticker="BTC-USD",
        asset_class=AssetClass.CRYPTO,
        current_value=Decimal("0"),
        target_percent=Decimal("10"),
    )
    return portfolio
