from typing import Any

from django.http import HttpRequest
from django.shortcuts import get_object_or_404

from rebalancer import conf
from rebalancer.models import Portfolio
from rebalancer.services.allocation import AllocationService
from rebalancer.services.repository import DjangoAllocationRepository


class PortfolioOwnerMixin:
    """Resolves ``portfolio_id`` from the URL, scoped to the current user.

    Another user's portfolio is indistinguishable from a missing one (404).
    """

    request: HttpRequest
    kwargs: dict[str, Any]

    _portfolio: Portfolio | None = None

    def get_portfolio(self) -> Portfolio:
        if self._portfolio is None:
            self._portfolio = get_object_or_404(
                Portfolio, pk=self.kwargs["portfolio_id"], user=self.request.user
            )
        return self._portfolio

    def get_repository(self) -> DjangoAllocationRepository:
        return DjangoAllocationRepository()

    def get_allocation_service(self) -> AllocationService:
        return AllocationService(repository=self.get_repository())

    def get_context_data(self, **kwargs: Any) -> dict[str, Any]:
        context = super().get_context_data(**kwargs)  # type: ignore
        context["portfolio"] = self.get_portfolio()
        context["currency"] = conf.default_currency()
        return context
