from typing import Any

from django.contrib import messages
from django.contrib.auth.mixins import LoginRequiredMixin
from django.http import HttpResponse
from django.views.generic import FormView

import structlog

from rebalancer.exceptions import MarketDataError
from rebalancer.forms import DCAForm
from rebalancer.services.dca import calculate_dca_allocation, price_dca_allocation
from rebalancer.services.market_data import MarketDataService
from rebalancer.views.mixins import PortfolioOwnerMixin

logger = structlog.get_logger(__name__)


class DCAView(LoginRequiredMixin, PortfolioOwnerMixin, FormView):
    """Split a lump sum across percentage targets, optionally pricing shares."""

    form_class = DCAForm
    template_name = "rebalancer/dca.html"

    def get_market_data(self) -> MarketDataService:
        return MarketDataService()

    def form_valid(self, form: Any) -> HttpResponse:
        portfolio = self.get_portfolio()
        snapshot = self.get_repository().load_snapshot(portfolio.pk)
        calculation = calculate_dca_allocation(
            snapshot.assets, form.cleaned_data["amount"], snapshot.class_targets
        )

        if form.cleaned_data["fetch_prices"]:
            try:
                calculation = price_dca_allocation(calculation, self.get_market_data())
            except MarketDataError as e:
                logger.warning("dca_price_fetch_failed", portfolio_id=portfolio.pk, error=str(e))
                messages.error(self.request, str(e))

        logger.info(
            "dca_calculated",
            portfolio_id=portfolio.pk,
            amount=str(calculation.total_amount),
            allocation_count=len(calculation.allocations),
        )
        return self.render_to_response(self.get_context_data(form=form, calculation=calculation))
