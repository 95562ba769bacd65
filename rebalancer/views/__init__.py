from __future__ import annotations

from .allocation import AllocationJSONView, AllocationView
from .assets import AssetCreateView
from .dca import DCAView
from .exports import AllocationExportView, PortfolioBackupView, PortfolioImportView
from .health import HealthCheckView
from .portfolios import PortfolioListView
from .targets import ClassTargetUpdateView

__all__ = [
    "AllocationExportView",
    "AllocationJSONView",
    "AllocationView",
    "AssetCreateView",
    "ClassTargetUpdateView",
    "DCAView",
    "HealthCheckView",
    "PortfolioBackupView",
    "PortfolioImportView",
    "PortfolioListView",
]
