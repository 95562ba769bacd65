"""Storage collaborators that hand the engine a consistent snapshot."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Protocol

from django.core.exceptions import NON_FIELD_ERRORS
from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import models, transaction

import structlog

from rebalancer.domain.assets import Asset, ClassTargets
from rebalancer.domain.enums import AssetClass
from rebalancer.domain.targets import Target
from rebalancer.exceptions import ValidationError

logger = structlog.get_logger(__name__)


def _storage_errors(label: str, error: DjangoValidationError) -> list[str]:
    messages = []
    for field_name, field_messages in error.message_dict.items():
        prefix = label if field_name == NON_FIELD_ERRORS else f"{label} {field_name}"
        messages.extend(f"{prefix}: {message}" for message in field_messages)
    return messages


@dataclass(frozen=True)
class PortfolioSnapshot:
    """Immutable engine input for one portfolio."""

    assets: tuple[Asset, ...] = ()
    class_targets: ClassTargets = field(default_factory=lambda: MappingProxyType({}))

    @classmethod
    def build(cls, assets: Iterable[Asset], class_targets: ClassTargets) -> PortfolioSnapshot:
        return cls(
            assets=tuple(assets),
            class_targets=MappingProxyType(
                {AssetClass(k): v for k, v in class_targets.items()}
            ),
        )


class AllocationRepository(Protocol):
    """Protocol for data access layer."""

    def load_snapshot(self, portfolio_id: int) -> PortfolioSnapshot:
        """Return assets and class targets for a portfolio."""
        ...


class DjangoAllocationRepository:
    """Loads snapshots from the ORM.

    Both queries run inside one transaction so the engine never sees an
    interleaved partial write.
    """

    def load_snapshot(self, portfolio_id: int) -> PortfolioSnapshot:
        from rebalancer.models import Asset as AssetModel
        from rebalancer.models import AssetClassTarget

        with transaction.atomic():
            asset_rows = list(AssetModel.objects.filter(portfolio_id=portfolio_id))
            target_rows = list(AssetClassTarget.objects.filter(portfolio_id=portfolio_id))

        assets = [row.to_domain() for row in asset_rows]
        class_targets: dict[AssetClass, Target] = {
            AssetClass(row.asset_class): row.get_target() for row in target_rows
        }

        logger.debug(
            "snapshot_loaded",
            portfolio_id=portfolio_id,
            asset_count=len(assets),
            class_target_count=len(class_targets),
        )
        return PortfolioSnapshot.build(assets, class_targets)

    def save_class_targets(self, portfolio_id: int, class_targets: ClassTargets) -> None:
        """Upsert one row per class in ``class_targets``; other rows are kept."""

        from rebalancer.models import AssetClassTarget

        with transaction.atomic():
            for asset_class, target in class_targets.items():
                lookup = {"portfolio_id": portfolio_id, "asset_class": str(asset_class)}
                row = (
                    AssetClassTarget.objects.filter(**lookup).first()
                    or AssetClassTarget(**lookup)
                )
                row.set_target(target)
                row.save()

        logger.info(
            "class_targets_saved", portfolio_id=portfolio_id, class_count=len(class_targets)
        )

    def replace_snapshot(self, portfolio_id: int, snapshot: PortfolioSnapshot) -> None:
        """Replace every asset and class target of a portfolio (backup restore).

        Every row is checked against the column limits before anything is
        deleted.

        Raises:
            ValidationError: Listing each row that cannot be stored.
        """

        from rebalancer.models import Asset as AssetModel
        from rebalancer.models import AssetClassTarget

        rows: list[tuple[str, models.Model]] = []
        for asset_class, target in snapshot.class_targets.items():
            target_row = AssetClassTarget(portfolio_id=portfolio_id, asset_class=str(asset_class))
            target_row.set_target(target)
            rows.append((f"Asset class {asset_class}", target_row))

        for position, asset in enumerate(snapshot.assets):
            asset_row = AssetModel(
                portfolio_id=portfolio_id,
                name=asset.name,
                ticker=asset.ticker,
                identifier=asset.identifier or "",
                asset_class=str(asset.asset_class),
                sub_asset_type=str(asset.sub_asset_type),
                current_value=asset.current_value,
                sort_order=position,
            )
            asset_row.set_target(asset.target)
            rows.append((f"Asset {asset.name}", asset_row))

        errors: list[str] = []
        for label, row in rows:
            try:
                row.full_clean(exclude=["portfolio"])
            except DjangoValidationError as e:
                errors.extend(_storage_errors(label, e))
        if errors:
            logger.warning("snapshot_rejected", portfolio_id=portfolio_id, errors=errors)
            raise ValidationError(errors)

        with transaction.atomic():
            AssetModel.objects.filter(portfolio_id=portfolio_id).delete()
            AssetClassTarget.objects.filter(portfolio_id=portfolio_id).delete()
            for _, row in rows:
                row.save()

        logger.info(
            "snapshot_replaced",
            portfolio_id=portfolio_id,
            asset_count=len(snapshot.assets),
            class_target_count=len(snapshot.class_targets),
        )


class InMemoryAllocationRepository:
    """Dict-backed repository for scripts and tests."""

    def __init__(self) -> None:
        self._snapshots: dict[int, PortfolioSnapshot] = {}

    def save_snapshot(
        self, portfolio_id: int, assets: Iterable[Asset], class_targets: ClassTargets
    ) -> None:
        self._snapshots[portfolio_id] = PortfolioSnapshot.build(assets, class_targets)

    def save_class_targets(self, portfolio_id: int, class_targets: ClassTargets) -> None:
        snapshot = self.load_snapshot(portfolio_id)
        merged = {**snapshot.class_targets, **class_targets}
        self.save_snapshot(portfolio_id, snapshot.assets, merged)

    def replace_snapshot(self, portfolio_id: int, snapshot: PortfolioSnapshot) -> None:
        self._snapshots[portfolio_id] = snapshot

    def load_snapshot(self, portfolio_id: int) -> PortfolioSnapshot:
        return self._snapshots.get(portfolio_id, PortfolioSnapshot())
