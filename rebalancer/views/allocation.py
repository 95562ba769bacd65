"""Allocation page and its JSON twin."""

from typing import Any

from django.contrib.auth.mixins import LoginRequiredMixin
from django.http import HttpRequest, JsonResponse
from django.views import View
from django.views.generic import TemplateView

import structlog

from rebalancer.exceptions import ConfigurationError, ValidationError
from rebalancer.forms import ClassTargetPercentForm
from rebalancer.presenters import (
    ASSET_COLUMNS,
    ASSET_SORT_PATHS,
    CLASS_COLUMNS,
    CLASS_SORT_PATHS,
    SortConfig,
    build_asset_rows,
    build_class_rows,
    build_sort_headers,
    sort_rows,
)
from rebalancer.presenters.allocation_table import percentage_class_choices
from rebalancer.presenters.serializers import allocation_to_dict
from rebalancer.views.mixins import PortfolioOwnerMixin

logger = structlog.get_logger(__name__)


class AllocationView(LoginRequiredMixin, PortfolioOwnerMixin, TemplateView):
    """
    Class and asset allocation tables for one portfolio.

    Query parameters:
        sort, dir: asset table sort key and direction (asc|desc)
        class_sort, class_dir: class table sort key and direction
    """

    template_name = "rebalancer/allocation.html"

    def get_context_data(self, **kwargs: Any) -> dict[str, Any]:
        context = super().get_context_data(**kwargs)
        portfolio = context["portfolio"]
        service = self.get_allocation_service()
        try:
            snapshot = service.get_snapshot(portfolio.pk)
            allocation = service.compute(snapshot, portfolio_id=portfolio.pk)
        except ValidationError as e:
            context["validation_errors"] = e.errors
            return context
        except ConfigurationError as e:
            context["validation_errors"] = [str(e)]
            return context

        params = self.request.GET
        asset_sort = SortConfig.from_params(params.get("sort"), params.get("dir"), ASSET_SORT_PATHS)
        class_sort = SortConfig.from_params(
            params.get("class_sort"), params.get("class_dir"), CLASS_SORT_PATHS
        )

        asset_rows = build_asset_rows(snapshot.assets, allocation)
        class_rows = build_class_rows(allocation, snapshot.class_targets)

        context.update(
            {
                "allocation": allocation,
                "asset_rows": sort_rows(asset_rows, asset_sort, ASSET_SORT_PATHS),
                "class_rows": sort_rows(class_rows, class_sort, CLASS_SORT_PATHS),
                "asset_headers": build_sort_headers(
                    ASSET_COLUMNS,
                    asset_sort,
                    "sort",
                    "dir",
                    preserved={"class_sort": class_sort.key, "class_dir": class_sort.direction},
                ),
                "class_headers": build_sort_headers(
                    CLASS_COLUMNS,
                    class_sort,
                    "class_sort",
                    "class_dir",
                    preserved={"sort": asset_sort.key, "dir": asset_sort.direction},
                ),
                "editable_classes": percentage_class_choices(snapshot.class_targets),
                "class_target_form": ClassTargetPercentForm(),
            }
        )
        return context


class AllocationJSONView(LoginRequiredMixin, PortfolioOwnerMixin, View):
    """Engine output as JSON; 400 with the error list when inputs are invalid."""

    def get(self, request: HttpRequest, *args: Any, **kwargs: Any) -> JsonResponse:
        portfolio = self.get_portfolio()
        try:
            allocation = self.get_allocation_service().get_allocation(portfolio.pk)
        except ValidationError as e:
            return JsonResponse({"errors": e.errors}, status=400)
        except ConfigurationError as e:
            return JsonResponse({"errors": [str(e)]}, status=400)

        return JsonResponse({"portfolio": portfolio.pk, **allocation_to_dict(allocation)})
