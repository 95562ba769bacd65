"""
Tests for CSV export, backup and restore views.

Tests: rebalancer/views/exports.py
"""

from decimal import Decimal

from django.contrib.messages import get_messages
from django.core.files.uploadedfile import SimpleUploadedFile
from django.urls import reverse

import pytest

from rebalancer.models import Asset, AssetClassTarget


def _messages(response):
    return [str(m) for m in get_messages(response.wsgi_request)]


@pytest.mark.views
@pytest.mark.integration
class TestAllocationExportView:
    def test_downloads_csv(self, logged_in_client, unbalanced_portfolio) -> None:
        url = reverse(
            "rebalancer:allocation_export", kwargs={"portfolio_id": unbalanced_portfolio.pk}
        )
        response = logged_in_client.get(url)

        assert response.status_code == 200
        assert response["Content-Type"] == "text/csv"
        assert 'filename="allocation_unbalanced_' in response["Content-Disposition"]

        lines = response.content.decode().splitlines()
        assert lines[0].startswith("Asset,Ticker,Asset Class")
        assert len(lines) == 5
        assert "Total Stock Market,VTI,Stocks" in lines[1]
        assert lines[1].endswith("SELL")

    def test_invalid_data_redirects(self, logged_in_client, test_portfolio) -> None:
        Asset.objects.filter(portfolio=test_portfolio, ticker="VTI").update(
            current_value=Decimal("-5")
        )
        url = reverse("rebalancer:allocation_export", kwargs={"portfolio_id": test_portfolio.pk})

        response = logged_in_client.get(url)

        assert response.status_code == 302
        assert response.url == reverse(
            "rebalancer:allocation", kwargs={"portfolio_id": test_portfolio.pk}
        )
        assert _messages(response)[0].startswith("Cannot export allocation:")


@pytest.mark.views
@pytest.mark.integration
class TestBackupAndImport:
    def test_backup_then_restore(self, logged_in_client, unbalanced_portfolio) -> None:
        backup_url = reverse(
            "rebalancer:portfolio_backup", kwargs={"portfolio_id": unbalanced_portfolio.pk}
        )
        backup = logged_in_client.get(backup_url)
        assert backup.status_code == 200
        assert 'filename="portfolio_unbalanced_' in backup["Content-Disposition"]

        Asset.objects.filter(portfolio=unbalanced_portfolio).delete()

        import_url = reverse(
            "rebalancer:portfolio_import", kwargs={"portfolio_id": unbalanced_portfolio.pk}
        )
        upload = SimpleUploadedFile("backup.csv", backup.content, content_type="text/csv")
        response = logged_in_client.post(import_url, {"backup_file": upload})

        assert response.status_code == 302
        assert _messages(response) == ["Imported 4 assets and 3 class targets."]
        tickers = list(
            Asset.objects.filter(portfolio=unbalanced_portfolio).values_list("ticker", flat=True)
        )
        assert tickers == ["VTI", "BND", "CASH", "BTC-USD"]
        cash = AssetClassTarget.objects.get(portfolio=unbalanced_portfolio, asset_class="CASH")
        assert cash.target_value == Decimal("1500")

    def test_bad_file_keeps_portfolio(self, logged_in_client, test_portfolio) -> None:
        url = reverse("rebalancer:portfolio_import", kwargs={"portfolio_id": test_portfolio.pk})
        upload = SimpleUploadedFile("backup.csv", b"name,value\nx,1\n", content_type="text/csv")

        response = logged_in_client.post(url, {"backup_file": upload})

        assert response.status_code == 302
        assert any("missing columns" in m for m in _messages(response))
        assert Asset.objects.filter(portfolio=test_portfolio).count() == 2

    def test_rows_exceeding_column_limits_keep_portfolio(
        self, logged_in_client, test_portfolio
    ) -> None:
        url = reverse("rebalancer:portfolio_import", kwargs={"portfolio_id": test_portfolio.pk})
        content = (
            "record,name,ticker,asset_class,current_value,target_mode,target_percent,target_value\n"
            "class_target,,,STOCKS,,PERCENTAGE,100,\n"
            "asset,Fractional,FR,STOCKS,10.005,PERCENTAGE,50,\n"
            f"asset,Long ticker,{'X' * 21},STOCKS,1e20,PERCENTAGE,50,\n"
        ).encode()
        upload = SimpleUploadedFile("backup.csv", content, content_type="text/csv")

        response = logged_in_client.post(url, {"backup_file": upload})

        assert response.status_code == 302
        errors = _messages(response)
        assert (
            "Asset Fractional current_value: "
            "Ensure that there are no more than 2 decimal places." in errors
        )
        assert any(e.startswith("Asset Long ticker ticker: ") for e in errors)
        assert any(e.startswith("Asset Long ticker current_value: ") for e in errors)
        tickers = set(
            Asset.objects.filter(portfolio=test_portfolio).values_list("ticker", flat=True)
        )
        assert tickers == {"VTI", "BND"}

    def test_non_finite_value_is_reported(self, logged_in_client, test_portfolio) -> None:
        url = reverse("rebalancer:portfolio_import", kwargs={"portfolio_id": test_portfolio.pk})
        content = (
            b"record,name,asset_class,current_value,target_mode,target_percent,target_value\n"
            b"asset,Broken,STOCKS,NaN,PERCENTAGE,50,\n"
        )
        upload = SimpleUploadedFile("backup.csv", content, content_type="text/csv")

        response = logged_in_client.post(url, {"backup_file": upload})

        assert response.status_code == 302
        assert _messages(response) == [
            "Line 2: Asset Broken: Current value is not a finite number: 'NaN'"
        ]
        assert Asset.objects.filter(portfolio=test_portfolio).count() == 2

    def test_missing_file(self, logged_in_client, test_portfolio) -> None:
        url = reverse("rebalancer:portfolio_import", kwargs={"portfolio_id": test_portfolio.pk})

        response = logged_in_client.post(url, {})

        assert response.status_code == 302
        assert _messages(response)
        assert Asset.objects.filter(portfolio=test_portfolio).count() == 2

    def test_import_into_other_users_portfolio_is_404(
        self, client, test_portfolio, other_user
    ) -> None:
        client.force_login(other_user)
        url = reverse("rebalancer:portfolio_import", kwargs={"portfolio_id": test_portfolio.pk})
        upload = SimpleUploadedFile("backup.csv", b"record\n")

        assert client.post(url, {"backup_file": upload}).status_code == 404
