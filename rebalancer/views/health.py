"""
Health check endpoint for monitoring and load balancers.

Reports database connectivity and whether the rebalancer settings resolve.
"""

from typing import Any

from django.core.exceptions import ImproperlyConfigured
from django.db import connection
from django.http import JsonResponse
from django.utils.decorators import method_decorator
from django.views import View
from django.views.decorators.cache import never_cache

import structlog

from rebalancer import __version__, conf

logger = structlog.get_logger(__name__)


@method_decorator(never_cache, name="dispatch")
class HealthCheckView(View):
    """
    Returns:
        200 OK: All checks passed
        503 Service Unavailable: A check failed

    Response format:
        {
            "status": "healthy" | "unhealthy",
            "checks": {"database": "ok", "settings": "ok", "version": "..."}
        }
    """

    def get(self, request: Any) -> JsonResponse:
        checks: dict[str, str] = {}
        status_code = 200

        try:
            with connection.cursor() as cursor:
                cursor.execute("SELECT 1")
                cursor.fetchone()
            checks["database"] = "ok"
        except Exception as e:
            checks["database"] = f"error: {e}"
            status_code = 503
            logger.error("health_check_database_failed", error=str(e), exc_info=True)

        try:
            conf.hold_tolerance()
            conf.target_sum_tolerance()
            checks["settings"] = "ok"
        except ImproperlyConfigured as e:
            checks["settings"] = f"error: {e}"
            status_code = 503
            logger.error("health_check_settings_failed", error=str(e))

        checks["version"] = __version__

        return JsonResponse(
            {"status": "healthy" if status_code == 200 else "unhealthy", "checks": checks},
            status=status_code,
        )
