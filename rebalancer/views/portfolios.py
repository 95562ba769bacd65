from typing import Any

from django.contrib.auth.mixins import LoginRequiredMixin
from django.db.models import Count, QuerySet, Sum
from django.views.generic import ListView

import structlog

from rebalancer.models import Portfolio

logger = structlog.get_logger(__name__)


class PortfolioListView(LoginRequiredMixin, ListView):
    """Portfolios owned by the current user."""

    template_name = "rebalancer/portfolio_list.html"
    context_object_name = "portfolios"

    def get_queryset(self) -> QuerySet[Portfolio]:
        return Portfolio.objects.filter(user=self.request.user).annotate(
            asset_count=Count("assets"),
            total_value=Sum("assets__current_value"),
        )

    def get_context_data(self, **kwargs: Any) -> dict[str, Any]:
        logger.info("portfolio_list_accessed", user_id=self.request.user.pk)
        return super().get_context_data(**kwargs)
