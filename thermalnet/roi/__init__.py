"""
ROI Module - Borefield asset valuation.

Features:
- Static borefield catalogue (capacity, utilization, COP, financials)
- Sorting and filtering for presentation
- Portfolio summary statistics
"""

from .assets import (
    BOREFIELD_ASSETS,
    AssetSummary,
    get_asset_valuation,
    sort_assets,
    filter_assets,
    summarize_assets,
)

__all__ = [
    'BOREFIELD_ASSETS',
    'AssetSummary',
    'get_asset_valuation',
    'sort_assets',
    'filter_assets',
    'summarize_assets',
]
