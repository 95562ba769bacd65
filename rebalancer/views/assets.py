from typing import Any

from django.contrib import messages
from django.contrib.auth.mixins import LoginRequiredMixin
from django.http import HttpResponse
from django.urls import reverse
from django.views.generic import CreateView

import structlog

from rebalancer.forms import AssetForm
from rebalancer.models import Asset
from rebalancer.views.mixins import PortfolioOwnerMixin

logger = structlog.get_logger(__name__)


class AssetCreateView(LoginRequiredMixin, PortfolioOwnerMixin, CreateView):
    """Add an asset to a portfolio. New assets go to the end of the table."""

    model = Asset
    form_class = AssetForm
    template_name = "rebalancer/asset_form.html"

    def form_valid(self, form: Any) -> HttpResponse:
        portfolio = self.get_portfolio()
        form.instance.portfolio = portfolio
        form.instance.sort_order = portfolio.assets.count()
        response = super().form_valid(form)

        logger.info("asset_created", portfolio_id=portfolio.pk, asset_id=self.object.pk)
        messages.success(self.request, f"Asset '{self.object.name}' added.")
        return response

    def get_success_url(self) -> str:
        return reverse("rebalancer:allocation", kwargs={"portfolio_id": self.get_portfolio().pk})
