from .assets import AssetForm
from .targets import ClassTargetPercentForm, DCAForm, PortfolioImportForm

__all__ = [
    "AssetForm",
    "ClassTargetPercentForm",
    "DCAForm",
    "PortfolioImportForm",
]
