from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Any

from django.core.exceptions import ValidationError as DjangoValidationError
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models

from rebalancer.domain.enums import AssetClass, TargetMode
from rebalancer.domain.targets import Target, target_from_fields, target_to_fields
from rebalancer.exceptions import ValidationError

PERCENT_QUANTUM = Decimal("0.0001")
AMOUNT_QUANTUM = Decimal("0.01")


def _quantize(value: Decimal | None, quantum: Decimal) -> Decimal | None:
    if value is None:
        return None
    try:
        return value.quantize(quantum)
    except InvalidOperation:
        # Too many digits to round; max_digits validation reports it on clean().
        return value


class TargetFieldsMixin(models.Model):
    """Flat storage of a target variant: mode plus at most one payload column."""

    target_mode = models.CharField(
        max_length=20,
        choices=TargetMode.choices(),
        default=TargetMode.PERCENTAGE,
    )
    target_percent = models.DecimalField(
        max_digits=7,
        decimal_places=4,
        null=True,
        blank=True,
        validators=[MinValueValidator(Decimal("0")), MaxValueValidator(Decimal("100"))],
        help_text="Target share of the portfolio total (%), percentage mode only",
    )
    target_value = models.DecimalField(
        max_digits=16,
        decimal_places=2,
        null=True,
        blank=True,
        validators=[MinValueValidator(Decimal("0"))],
        help_text="Absolute target amount, fixed-amount mode only",
    )

    # Class targets may leave the fixed amount empty (keeps current total).
    allow_missing_amount = False

    class Meta:
        abstract = True

    def get_target(self) -> Target:
        return target_from_fields(
            self.target_mode,
            self.target_percent,
            self.target_value,
            allow_missing_amount=self.allow_missing_amount,
        )

    def set_target(self, target: Target) -> None:
        mode, percent, amount = target_to_fields(target)
        self.target_mode = mode
        self.target_percent = _quantize(percent, PERCENT_QUANTUM)
        self.target_value = _quantize(amount, AMOUNT_QUANTUM)

    def clean(self) -> None:
        super().clean()
        try:
            self.get_target()
        except ValidationError as e:
            raise DjangoValidationError(e.errors) from e


class AssetClassTarget(TargetFieldsMixin):
    """Desired share of the total portfolio for one asset class."""

    portfolio = models.ForeignKey(
        "rebalancer.Portfolio",
        on_delete=models.CASCADE,
        related_name="class_targets",
    )
    asset_class = models.CharField(max_length=20, choices=AssetClass.choices())

    allow_missing_amount = True

    class Meta:
        constraints = [
            models.UniqueConstraint(
                fields=["portfolio", "asset_class"],
                name="unique_class_target_per_portfolio",
            ),
        ]
        ordering = ["asset_class"]
        verbose_name = "Asset Class Target"

    def __str__(self) -> str:
        return f"{self.portfolio.name}: {self.asset_class} ({self.target_mode})"

    def save(self, *args: Any, **kwargs: Any) -> None:
        self.full_clean(exclude=["portfolio"])
        super().save(*args, **kwargs)
