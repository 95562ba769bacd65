from decimal import Decimal

import django.core.validators
import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models

ASSET_CLASS_CHOICES = [
    ("STOCKS", "Stocks"),
    ("BONDS", "Bonds"),
    ("CASH", "Cash"),
    ("CRYPTO", "Crypto"),
    ("REAL_ESTATE", "Real Estate"),
]

TARGET_MODE_CHOICES = [
    ("PERCENTAGE", "Percentage"),
    ("FIXED_AMOUNT", "Fixed amount"),
    ("OFF", "Off"),
]

SUB_ASSET_TYPE_CHOICES = [
    ("NONE", "None"),
    ("ETF", "ETF"),
    ("SINGLE_STOCK", "Single Stock"),
    ("SINGLE_BOND", "Single Bond"),
    ("MONEY_ETF", "Money market ETF"),
    ("SAVINGS_ACCOUNT", "Savings Account"),
    ("CHECKING_ACCOUNT", "Checking Account"),
    ("BROKERAGE_ACCOUNT", "Brokerage Account"),
    ("COIN", "Coin"),
    ("PROPERTY", "Property"),
    ("REIT", "REIT"),
]


def target_fields():
    return [
        (
            "target_mode",
            models.CharField(choices=TARGET_MODE_CHOICES, default="PERCENTAGE", max_length=20),
        ),
        (
            "target_percent",
            models.DecimalField(
                blank=True,
                decimal_places=4,
                help_text="Target share of the portfolio total (%), percentage mode only",
                max_digits=7,
                null=True,
                validators=[
                    django.core.validators.MinValueValidator(Decimal("0")),
                    django.core.validators.MaxValueValidator(Decimal("100")),
                ],
            ),
        ),
        (
            "target_value",
            models.DecimalField(
                blank=True,
                decimal_places=2,
                help_text="Absolute target amount, fixed-amount mode only",
                max_digits=16,
                null=True,
                validators=[django.core.validators.MinValueValidator(Decimal("0"))],
            ),
        ),
    ]


class Migration(migrations.Migration):
    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Portfolio",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=100)),
                ("created_date", models.DateTimeField(auto_now_add=True)),
                ("modified_date", models.DateTimeField(auto_now=True)),
                (
                    "user",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="portfolios",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "ordering": ["name"],
                "constraints": [
                    models.UniqueConstraint(fields=("user", "name"), name="unique_portfolio_name_per_user"),
                ],
            },
        ),
        migrations.CreateModel(
            name="Asset",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                *target_fields(),
                ("name", models.CharField(max_length=200)),
                ("ticker", models.CharField(blank=True, max_length=20)),
                ("identifier", models.CharField(blank=True, help_text="ISIN or similar", max_length=32)),
                ("asset_class", models.CharField(choices=ASSET_CLASS_CHOICES, max_length=20)),
                (
                    "sub_asset_type",
                    models.CharField(
                        blank=True, choices=SUB_ASSET_TYPE_CHOICES, default="NONE", max_length=20
                    ),
                ),
                (
                    "current_value",
                    models.DecimalField(
                        decimal_places=2,
                        default=Decimal("0.00"),
                        max_digits=16,
                        validators=[django.core.validators.MinValueValidator(Decimal("0"))],
                    ),
                ),
                ("sort_order", models.PositiveIntegerField(default=0)),
                (
                    "portfolio",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="assets",
                        to="rebalancer.portfolio",
                    ),
                ),
            ],
            options={
                "ordering": ["sort_order", "id"],
            },
        ),
        migrations.CreateModel(
            name="AssetClassTarget",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                *target_fields(),
                ("asset_class", models.CharField(choices=ASSET_CLASS_CHOICES, max_length=20)),
                (
                    "portfolio",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="class_targets",
                        to="rebalancer.portfolio",
                    ),
                ),
            ],
            options={
                "verbose_name": "Asset Class Target",
                "ordering": ["asset_class"],
                "constraints": [
                    models.UniqueConstraint(
                        fields=("portfolio", "asset_class"),
                        name="unique_class_target_per_portfolio",
                    ),
                ],
            },
        ),
    ]
