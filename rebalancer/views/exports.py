"""CSV download and backup restore views."""

import logging
from typing import Any

from django.contrib import messages
from django.contrib.auth.mixins import LoginRequiredMixin
from django.http import HttpRequest, HttpResponse
from django.shortcuts import redirect
from django.utils import timezone
from django.utils.text import slugify
from django.views import View

from rebalancer.exceptions import ConfigurationError, ValidationError
from rebalancer.forms import PortfolioImportForm
from rebalancer.services.exports import (
    export_allocation_csv,
    export_portfolio_csv,
    import_portfolio_csv,
)
from rebalancer.views.mixins import PortfolioOwnerMixin

logger = logging.getLogger(__name__)


def _csv_response(content: str, stem: str) -> HttpResponse:
    response = HttpResponse(content, content_type="text/csv")
    filename = f"{stem}_{timezone.now():%Y%m%d}.csv"
    response["Content-Disposition"] = f'attachment; filename="{filename}"'
    return response


class AllocationExportView(LoginRequiredMixin, PortfolioOwnerMixin, View):
    """Export the asset allocation table as CSV."""

    def get(self, request: HttpRequest, *args: Any, **kwargs: Any) -> HttpResponse:
        portfolio = self.get_portfolio()
        service = self.get_allocation_service()
        try:
            snapshot = service.get_snapshot(portfolio.pk)
            allocation = service.compute(snapshot, portfolio_id=portfolio.pk)
        except (ValidationError, ConfigurationError) as e:
            messages.error(request, f"Cannot export allocation: {e}")
            return redirect("rebalancer:allocation", portfolio_id=portfolio.pk)

        content = export_allocation_csv(snapshot.assets, allocation)
        return _csv_response(content, f"allocation_{slugify(portfolio.name)}")


class PortfolioBackupView(LoginRequiredMixin, PortfolioOwnerMixin, View):
    """Download assets and class targets as a restorable CSV."""

    def get(self, request: HttpRequest, *args: Any, **kwargs: Any) -> HttpResponse:
        portfolio = self.get_portfolio()
        snapshot = self.get_repository().load_snapshot(portfolio.pk)
        content = export_portfolio_csv(snapshot.assets, snapshot.class_targets)
        return _csv_response(content, f"portfolio_{slugify(portfolio.name)}")


class PortfolioImportView(LoginRequiredMixin, PortfolioOwnerMixin, View):
    """Replace a portfolio's assets and class targets from a backup CSV."""

    def post(self, request: HttpRequest, *args: Any, **kwargs: Any) -> HttpResponse:
        portfolio = self.get_portfolio()
        form = PortfolioImportForm(request.POST, request.FILES)

        if not form.is_valid():
            for errors in form.errors.values():
                for error in errors:
                    messages.error(request, error)
            return redirect("rebalancer:allocation", portfolio_id=portfolio.pk)

        # Parse errors and rows that exceed the column limits are both reported.
        try:
            snapshot = import_portfolio_csv(form.cleaned_data["backup_file"].read())
            self.get_repository().replace_snapshot(portfolio.pk, snapshot)
        except ValidationError as e:
            logger.warning(
                "Backup import rejected: user=%s, portfolio=%s, errors=%s",
                request.user.pk,
                portfolio.pk,
                e.errors,
            )
            for error in e.errors:
                messages.error(request, error)
            return redirect("rebalancer:allocation", portfolio_id=portfolio.pk)

        messages.success(
            request,
            f"Imported {len(snapshot.assets)} assets and "
            f"{len(snapshot.class_targets)} class targets.",
        )
        return redirect("rebalancer:allocation", portfolio_id=portfolio.pk)
