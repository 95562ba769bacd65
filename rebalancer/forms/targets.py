from __future__ import annotations

from decimal import Decimal

from django import forms
from django.core.exceptions import ValidationError

MAX_IMPORT_BYTES = 1024 * 1024


class ClassTargetPercentForm(forms.Form):
    """Sets one class percentage; the remainder is spread over the others."""

    STRATEGY_CHOICES = [
        ("", "Automatic"),
        ("equal", "Equal split"),
        ("proportional", "Proportional"),
    ]

    target_percent = forms.DecimalField(
        min_value=Decimal("0"),
        max_value=Decimal("100"),
        decimal_places=4,
    )
    strategy = forms.ChoiceField(choices=STRATEGY_CHOICES, required=False)

    def get_strategy(self) -> str | None:
        return self.cleaned_data.get("strategy") or None


class PortfolioImportForm(forms.Form):
    backup_file = forms.FileField()

    def clean_backup_file(self):
        upload = self.cleaned_data["backup_file"]
        if upload.size > MAX_IMPORT_BYTES:
            raise ValidationError("Backup file is too large (max 1 MB).")
        return upload


class DCAForm(forms.Form):
    amount = forms.DecimalField(min_value=Decimal("0"), decimal_places=2)
    fetch_prices = forms.BooleanField(required=False, initial=False)
