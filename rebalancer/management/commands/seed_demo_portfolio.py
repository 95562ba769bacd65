from decimal import Decimal
from typing import Any

from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand, CommandError
from django.db import transaction

from rebalancer.domain.assets import Asset
from rebalancer.domain.enums import AssetClass, SubAssetType
from rebalancer.domain.targets import FixedAmountTarget, PercentageTarget
from rebalancer.models import Portfolio
from rebalancer.services.repository import DjangoAllocationRepository, PortfolioSnapshot

User = get_user_model()

# (name, ticker, isin, class, current value, target percent of the portfolio)
DEMO_ASSETS = [
    ("S&P 500 Index ETF", "SPY", "US78462F1030", AssetClass.STOCKS, "14000", "24.0"),
    ("Vanguard Total Stock Market", "VTI", "US9229087690", AssetClass.STOCKS, "9450", "16.2"),
    ("International Developed Markets", "VXUS", "US9219097683", AssetClass.STOCKS, "5950", "10.2"),
    ("Emerging Markets ETF", "VWO", "US9220428588", AssetClass.STOCKS, "3500", "6.0"),
    ("Small Cap Value", "VBR", "US9219097766", AssetClass.STOCKS, "2100", "3.6"),
    ("Total Bond Market", "BND", "US9219378356", AssetClass.BONDS, "15000", "16.5"),
    ("Treasury Inflation-Protected", "TIP", "US4642874659", AssetClass.BONDS, "9000", "9.9"),
    ("International Bond", "BNDX", "US9219378273", AssetClass.BONDS, "6000", "6.6"),
]

DEMO_CASH = ("Primary bank cash", "CASH", Decimal("5000"))

DEMO_CLASS_TARGETS = {
    AssetClass.STOCKS: PercentageTarget(Decimal("60")),
    AssetClass.BONDS: PercentageTarget(Decimal("33")),
    AssetClass.CASH: FixedAmountTarget(Decimal("5000")),
}


def demo_snapshot() -> PortfolioSnapshot:
    assets = [
        Asset(
            id=f"demo-{i}",
            name=name,
            ticker=ticker,
            identifier=isin,
            asset_class=asset_class,
            current_value=Decimal(value),
            sub_asset_type=SubAssetType.ETF,
            target=PercentageTarget(Decimal(pct)),
        )
        for i, (name, ticker, isin, asset_class, value, pct) in enumerate(DEMO_ASSETS, start=1)
    ]
    cash_name, cash_ticker, cash_value = DEMO_CASH
    assets.append(
        Asset(
            id="demo-cash",
            name=cash_name,
            ticker=cash_ticker,
            asset_class=AssetClass.CASH,
            current_value=cash_value,
            sub_asset_type=SubAssetType.SAVINGS_ACCOUNT,
            target=FixedAmountTarget(cash_value),
        )
    )
    return PortfolioSnapshot.build(assets, DEMO_CLASS_TARGETS)


class Command(BaseCommand):
    help = "Creates (or resets) a demo portfolio for a user"

    def add_arguments(self, parser: Any) -> None:
        parser.add_argument("username")
        parser.add_argument("--name", default="Demo Portfolio")
        parser.add_argument(
            "--create-user",
            action="store_true",
            help="Create the user (password = username) if it does not exist",
        )

    def handle(self, *args: Any, **options: Any) -> None:
        username = options["username"]

        user = User.objects.filter(username=username).first()
        if user is None:
            if not options["create_user"]:
                raise CommandError(f"User {username} does not exist. Use --create-user.")
            user = User.objects.create_user(username=username, password=username)
            self.stdout.write(self.style.SUCCESS(f"Created user: {username}"))

        snapshot = demo_snapshot()
        with transaction.atomic():
            portfolio, created = Portfolio.objects.get_or_create(user=user, name=options["name"])
            DjangoAllocationRepository().replace_snapshot(portfolio.pk, snapshot)

        verb = "Created" if created else "Reset"
        self.stdout.write(
            self.style.SUCCESS(
                f"{verb} portfolio '{portfolio.name}' (id={portfolio.pk}) "
                f"with {len(snapshot.assets)} assets"
            )
        )
