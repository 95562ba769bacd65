"""CSV export of allocation results and portfolio backup/restore."""

from __future__ import annotations

import io
from collections.abc import Iterable
from decimal import Decimal

import pandas as pd
import structlog

from rebalancer.domain.assets import Asset, ClassTargets
from rebalancer.domain.enums import AssetClass
from rebalancer.domain.results import PortfolioAllocation
from rebalancer.domain.targets import Target, target_from_fields, target_to_fields
from rebalancer.domain.validation import validate_inputs
from rebalancer.exceptions import ImportFormatError, ValidationError
from rebalancer.services.repository import PortfolioSnapshot

logger = structlog.get_logger(__name__)

ALLOCATION_COLUMNS = [
    "Asset",
    "Ticker",
    "Asset Class",
    "Target Mode",
    "% Target",
    "% Current",
    "Current Value",
    "Target Value",
    "Delta",
    "Action",
]

BACKUP_COLUMNS = [
    "record",
    "id",
    "name",
    "ticker",
    "identifier",
    "asset_class",
    "sub_asset_type",
    "current_value",
    "target_mode",
    "target_percent",
    "target_value",
]

RECORD_ASSET = "asset"
RECORD_CLASS_TARGET = "class_target"


def _fmt(value: Decimal | None, places: int = 2) -> str:
    if value is None:
        return ""
    return f"{value:.{places}f}"


def allocation_to_dataframe(
    assets: Iterable[Asset], allocation: PortfolioAllocation
) -> pd.DataFrame:
    """One row per asset, in input order, with pre-formatted numbers."""

    by_id = {a.id: a for a in assets}
    rows = []
    for delta in allocation.deltas:
        asset = by_id.get(delta.asset_id)
        rows.append(
            {
                "Asset": asset.name if asset else delta.asset_id,
                "Ticker": asset.ticker if asset else "",
                "Asset Class": delta.asset_class.label,
                "Target Mode": asset.target_mode.label if asset else "",
                "% Target": _fmt(delta.target_percent),
                "% Current": _fmt(delta.current_percent),
                "Current Value": _fmt(delta.current_value),
                "Target Value": _fmt(delta.target_value),
                "Delta": _fmt(delta.delta),
                "Action": str(delta.action),
            }
        )
    return pd.DataFrame(rows, columns=ALLOCATION_COLUMNS)


def export_allocation_csv(assets: Iterable[Asset], allocation: PortfolioAllocation) -> str:
    return allocation_to_dataframe(assets, allocation).to_csv(index=False)


def export_portfolio_csv(assets: Iterable[Asset], class_targets: ClassTargets) -> str:
    """Serialize class targets and assets into a single backup CSV.

    Class target rows come first, in AssetClass declaration order.
    """

    rows = []
    for asset_class in AssetClass:
        if asset_class not in class_targets:
            continue
        mode, percent, amount = target_to_fields(class_targets[asset_class])
        rows.append(
            {
                "record": RECORD_CLASS_TARGET,
                "asset_class": str(asset_class),
                "target_mode": str(mode),
                "target_percent": _fmt(percent, 4),
                "target_value": _fmt(amount),
            }
        )

    for asset in assets:
        mode, percent, amount = target_to_fields(asset.target)
        rows.append(
            {
                "record": RECORD_ASSET,
                "id": asset.id,
                "name": asset.name,
                "ticker": asset.ticker,
                "identifier": asset.identifier or "",
                "asset_class": str(asset.asset_class),
                "sub_asset_type": str(asset.sub_asset_type),
                "current_value": _fmt(asset.current_value),
                "target_mode": str(mode),
                "target_percent": _fmt(percent, 4),
                "target_value": _fmt(amount),
            }
        )

    return pd.DataFrame(rows, columns=BACKUP_COLUMNS).fillna("").to_csv(index=False)


def import_portfolio_csv(content: str | bytes) -> PortfolioSnapshot:
    """Parse a backup CSV produced by export_portfolio_csv.

    All row errors are collected before raising.

    Raises:
        ImportFormatError: If the file is unreadable, lacks required columns,
            contains invalid rows, holds no assets or fails validation.
    """

    if isinstance(content, bytes):
        try:
            content = content.decode("utf-8-sig")
        except UnicodeDecodeError as e:
            raise ImportFormatError("Backup file is not valid UTF-8") from e

    try:
        df = pd.read_csv(io.StringIO(content), dtype=str, keep_default_na=False)
    except (pd.errors.EmptyDataError, pd.errors.ParserError) as e:
        raise ImportFormatError(f"Backup file could not be parsed: {e}") from e

    missing = [c for c in ("record", "asset_class", "target_mode") if c not in df.columns]
    if missing:
        raise ImportFormatError(f"Backup file is missing columns: {', '.join(missing)}")

    errors: list[str] = []
    assets: list[Asset] = []
    class_targets: dict[AssetClass, Target] = {}

    for line, row in enumerate(df.to_dict(orient="records"), start=2):
        record = row.get("record", "").strip()
        try:
            if record == RECORD_CLASS_TARGET:
                asset_class = _parse_asset_class(row.get("asset_class", ""))
                if asset_class in class_targets:
                    raise ValidationError(f"Duplicate class target for {asset_class}")
                class_targets[asset_class] = target_from_fields(
                    row.get("target_mode", ""),
                    row.get("target_percent"),
                    row.get("target_value"),
                    allow_missing_amount=True,
                )
            elif record == RECORD_ASSET:
                assets.append(
                    Asset.from_fields(
                        id=row.get("id") or f"row-{line}",
                        name=row.get("name", "").strip() or f"row {line}",
                        asset_class=row.get("asset_class", "").strip(),
                        current_value=row.get("current_value"),
                        target_mode=row.get("target_mode", ""),
                        target_percent=row.get("target_percent"),
                        target_value=row.get("target_value"),
                        ticker=row.get("ticker", "").strip(),
                        identifier=row.get("identifier", "").strip() or None,
                        sub_asset_type=row.get("sub_asset_type", "").strip(),
                    )
                )
            else:
                raise ValidationError(f"Unknown record type: {record!r}")
        except ValidationError as e:
            errors.extend(f"Line {line}: {msg}" for msg in e.errors)

    if errors:
        raise ImportFormatError(errors)
    if not assets:
        raise ImportFormatError("Backup file contains no assets")

    try:
        validate_inputs(assets, class_targets)
    except ValidationError as e:
        raise ImportFormatError(e.errors) from e

    logger.info(
        "portfolio_backup_parsed", asset_count=len(assets), class_target_count=len(class_targets)
    )
    return PortfolioSnapshot.build(assets, class_targets)


def _parse_asset_class(value: str) -> AssetClass:
    try:
        return AssetClass(value.strip())
    except ValueError as e:
        raise ValidationError(f"Unknown asset class: {value!r}") from e
