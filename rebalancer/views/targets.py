from typing import Any

from django.contrib import messages
from django.contrib.auth.mixins import LoginRequiredMixin
from django.http import HttpRequest, HttpResponse
from django.shortcuts import redirect
from django.views import View

import structlog

from rebalancer.domain.enums import AssetClass
from rebalancer.exceptions import ValidationError
from rebalancer.forms import ClassTargetPercentForm
from rebalancer.services.redistribution import rebalance_class_percentages
from rebalancer.views.mixins import PortfolioOwnerMixin

logger = structlog.get_logger(__name__)


class ClassTargetUpdateView(LoginRequiredMixin, PortfolioOwnerMixin, View):
    """
    Set one asset class percentage and redistribute the remainder.

    The other percentage-mode classes absorb ``100 - new_percent``; fixed and
    off classes are untouched.
    """

    def post(self, request: HttpRequest, *args: Any, **kwargs: Any) -> HttpResponse:
        portfolio = self.get_portfolio()
        target_url = redirect("rebalancer:allocation", portfolio_id=portfolio.pk)

        try:
            asset_class = AssetClass(kwargs["asset_class"].upper())
        except ValueError:
            messages.error(request, f"Unknown asset class: {kwargs['asset_class']}")
            return target_url

        form = ClassTargetPercentForm(request.POST)
        if not form.is_valid():
            for errors in form.errors.values():
                for error in errors:
                    messages.error(request, error)
            return target_url

        repository = self.get_repository()
        snapshot = repository.load_snapshot(portfolio.pk)

        try:
            updated = rebalance_class_percentages(
                snapshot.class_targets,
                asset_class,
                form.cleaned_data["target_percent"],
                strategy=form.get_strategy(),  # type: ignore[arg-type]
            )
        except ValidationError as e:
            messages.error(request, str(e))
            return target_url

        repository.save_class_targets(portfolio.pk, updated)
        logger.info(
            "class_target_redistributed",
            portfolio_id=portfolio.pk,
            asset_class=str(asset_class),
            target_percent=str(form.cleaned_data["target_percent"]),
        )
        messages.success(request, f"{asset_class.label} target updated.")
        return target_url
