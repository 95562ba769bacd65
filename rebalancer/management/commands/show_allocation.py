from typing import Any

from django.core.management.base import BaseCommand, CommandError

import pandas as pd

from rebalancer.exceptions import ConfigurationError, ValidationError
from rebalancer.models import Portfolio
from rebalancer.presenters import build_asset_rows, build_class_rows
from rebalancer.services.allocation import AllocationService
from rebalancer.templatetags.rebalancer_filters import money


class Command(BaseCommand):
    help = "Prints the class and asset allocation tables for a portfolio."

    def add_arguments(self, parser: Any) -> None:
        parser.add_argument("portfolio_id", type=int)

    def handle(self, *args: Any, **options: Any) -> None:
        try:
            portfolio = Portfolio.objects.get(pk=options["portfolio_id"])
        except Portfolio.DoesNotExist as e:
            raise CommandError(f"Portfolio {options['portfolio_id']} does not exist") from e

        service = AllocationService()
        try:
            snapshot = service.get_snapshot(portfolio.pk)
            allocation = service.compute(snapshot, portfolio_id=portfolio.pk)
        except (ValidationError, ConfigurationError) as e:
            raise CommandError(str(e)) from e

        self.stdout.write("=" * 80)
        self.stdout.write(f"{portfolio.name}: total {money(allocation.total_value)}")
        self.stdout.write("=" * 80)

        for issue in allocation.issues:
            self.stdout.write(self.style.WARNING(str(issue)))
        for warning in allocation.warnings:
            self.stdout.write(self.style.WARNING(warning))

        self.stdout.write(self.style.MIGRATE_LABEL("\nASSET CLASSES"))
        class_df = pd.DataFrame(
            [
                {
                    "Asset Class": row.asset_class,
                    "Target": row.target,
                    "% Current": row.current_percent,
                    "Current": row.current_total,
                    "Target Value": row.target_total,
                    "Delta": row.delta,
                    "Action": row.action,
                }
                for row in build_class_rows(allocation, snapshot.class_targets)
            ]
        )
        self.stdout.write(self._format(class_df))

        self.stdout.write(self.style.MIGRATE_LABEL("\nASSETS"))
        asset_df = pd.DataFrame(
            [
                {
                    "Asset": row.asset.name,
                    "Ticker": row.asset.ticker,
                    "Class": row.asset_class,
                    "Target": row.target,
                    "Current": row.current_value,
                    "Target Value": row.target_value,
                    "Delta": row.delta,
                    "Action": row.action,
                }
                for row in build_asset_rows(snapshot.assets, allocation)
            ]
        )
        self.stdout.write(self._format(asset_df))

    def _format(self, df: pd.DataFrame) -> str:
        if df.empty:
            return "(none)"
        return df.to_string(index=False, justify="left", col_space=4)
