from __future__ import annotations

from decimal import Decimal
from typing import Any

from django.core.validators import MinValueValidator
from django.db import models

from rebalancer.domain.assets import Asset as DomainAsset
from rebalancer.domain.enums import AssetClass, SubAssetType
from rebalancer.models.targets import TargetFieldsMixin


class Asset(TargetFieldsMixin):
    """A held position with its own target."""

    portfolio = models.ForeignKey(
        "rebalancer.Portfolio",
        on_delete=models.CASCADE,
        related_name="assets",
    )
    name = models.CharField(max_length=200)
    ticker = models.CharField(max_length=20, blank=True)
    identifier = models.CharField(max_length=32, blank=True, help_text="ISIN or similar")
    asset_class = models.CharField(max_length=20, choices=AssetClass.choices())
    sub_asset_type = models.CharField(
        max_length=20,
        choices=SubAssetType.choices(),
        default=SubAssetType.NONE.value,
        blank=True,
    )
    current_value = models.DecimalField(
        max_digits=16,
        decimal_places=2,
        default=Decimal("0.00"),
        validators=[MinValueValidator(Decimal("0"))],
    )
    sort_order = models.PositiveIntegerField(default=0)

    class Meta:
        ordering = ["sort_order", "id"]

    def __str__(self) -> str:
        return f"{self.name} ({self.ticker})" if self.ticker else self.name

    def save(self, *args: Any, **kwargs: Any) -> None:
        self.full_clean(exclude=["portfolio"])
        super().save(*args, **kwargs)

    def to_domain(self) -> DomainAsset:
        return DomainAsset(
            id=str(self.pk),
            name=self.name,
            asset_class=AssetClass(self.asset_class),
            current_value=self.current_value,
            target=self.get_target(),
            ticker=self.ticker,
            identifier=self.identifier or None,
            sub_asset_type=SubAssetType(self.sub_asset_type or SubAssetType.NONE),
        )
