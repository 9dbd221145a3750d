"""market_dashboard package initializer.

This package contains the filter-preset engine behind the market
dashboard.  Modules include the dataset model, geography rankings,
segment hierarchy lookups, preset builders and data loading.  See
individual module docstrings for details.
"""

from .dataset import DataRecord, MarketDataset, SegmentDimension
from .filters import FilterState, default_filters
from .presets import (
    PRESETS,
    FilterConfiguration,
    build_preset,
    create_emerging_markets_filters,
    create_growth_leaders_filters,
    create_top_market_filters,
)

__all__ = [
    "DataRecord",
    "FilterConfiguration",
    "FilterState",
    "MarketDataset",
    "PRESETS",
    "SegmentDimension",
    "build_preset",
    "create_emerging_markets_filters",
    "create_growth_leaders_filters",
    "create_top_market_filters",
    "default_filters",
]
