"""
Rebalancer Django Models

- portfolio.py: Portfolio container
- assets.py: Held positions
- targets.py: Asset class targets and the shared target columns
"""

from __future__ import annotations

from .assets import Asset
from .portfolio import Portfolio
from .targets import AssetClassTarget

__all__ = [
    "Asset",
    "AssetClassTarget",
    "Portfolio",
]
