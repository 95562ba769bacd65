"""
Tests for management commands.

Tests: rebalancer/management/commands/
"""

from decimal import Decimal
from io import StringIO

from django.core.management import call_command
from django.core.management.base import CommandError

import pytest

from rebalancer.domain import Action, AssetClass, compute_allocation
from rebalancer.management.commands.seed_demo_portfolio import demo_snapshot
from rebalancer.models import Asset, AssetClassTarget, Portfolio


@pytest.mark.commands
@pytest.mark.unit
def test_demo_snapshot_allocation() -> None:
    snapshot = demo_snapshot()
    allocation = compute_allocation(snapshot.assets, snapshot.class_targets)

    assert allocation.total_value == Decimal("70000")
    assert allocation.issues == ()
    assert allocation.warnings == ()
    assert allocation.summary_for(AssetClass.STOCKS).delta == Decimal("7000")
    assert allocation.summary_for(AssetClass.CASH).action == Action.HOLD


@pytest.mark.commands
@pytest.mark.django_db
class TestSeedDemoPortfolio:
    def test_requires_existing_user(self) -> None:
        with pytest.raises(CommandError, match="does not exist"):
            call_command("seed_demo_portfolio", "nobody")

    def test_creates_user_and_portfolio(self) -> None:
        out = StringIO()
        call_command("seed_demo_portfolio", "demo", "--create-user", stdout=out)

        portfolio = Portfolio.objects.get(user__username="demo", name="Demo Portfolio")
        assert Asset.objects.filter(portfolio=portfolio).count() == 9
        assert AssetClassTarget.objects.filter(portfolio=portfolio).count() == 3
        assert "Created user: demo" in out.getvalue()
        assert "Created portfolio 'Demo Portfolio'" in out.getvalue()

    def test_reset_is_idempotent(self, test_user) -> None:
        call_command("seed_demo_portfolio", "testuser", "--name", "Demo", stdout=StringIO())
        out = StringIO()
        call_command("seed_demo_portfolio", "testuser", "--name", "Demo", stdout=out)

        portfolio = Portfolio.objects.get(user=test_user, name="Demo")
        assert Asset.objects.filter(portfolio=portfolio).count() == 9
        assert "Reset portfolio 'Demo'" in out.getvalue()


@pytest.mark.commands
@pytest.mark.django_db
class TestShowAllocation:
    def test_prints_tables(self, unbalanced_portfolio) -> None:
        out = StringIO()
        call_command("show_allocation", str(unbalanced_portfolio.pk), stdout=out)

        output = out.getvalue()
        assert "Unbalanced: total 10,000.00" in output
        assert "ASSET CLASSES" in output
        assert "No class target configured for CRYPTO" in output
        assert "Total Stock Market" in output
        assert "EXCLUDED" in output

    def test_missing_portfolio(self, db) -> None:
        with pytest.raises(CommandError, match="Portfolio 999 does not exist"):
            call_command("show_allocation", "999")

    def test_invalid_data(self, test_portfolio) -> None:
        Asset.objects.filter(portfolio=test_portfolio).update(current_value=Decimal("-1"))
        with pytest.raises(CommandError, match="negative value"):
            call_command("show_allocation", str(test_portfolio.pk), stdout=StringIO())
