"""
Dashboard filter state and merging preset configurations into it.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional, Tuple

from .config import DEFAULT_DATA_TYPE, DEFAULT_VIEW_MODE, DEFAULT_YEAR_RANGE, DataType, ViewMode
from .dataset import MarketDataset
from .hierarchy import get_first_segment_type
from .presets import FilterConfiguration

_MERGED_FIELDS: Tuple[str, ...] = (
    "view_mode",
    "geographies",
    "segments",
    "segment_type",
    "year_range",
    "data_type",
)


@dataclass(frozen=True)
class FilterState:
    view_mode: ViewMode = DEFAULT_VIEW_MODE
    geographies: Tuple[str, ...] = ()
    segments: Tuple[str, ...] = ()
    segment_type: Optional[str] = None
    year_range: Tuple[int, int] = DEFAULT_YEAR_RANGE
    data_type: DataType = DEFAULT_DATA_TYPE

    def apply(self, config: FilterConfiguration) -> "FilterState":
        """
        Return a new state where every field set on ``config`` wins.
        Fields the configuration leaves as None keep their current value.
        """
        overrides = {
            name: getattr(config, name)
            for name in _MERGED_FIELDS
            if getattr(config, name) is not None
        }
        return replace(self, **overrides)


def default_filters(dataset: Optional[MarketDataset]) -> FilterState:
    """
    Initial state for a freshly loaded dataset: first segmentation axis,
    nothing selected yet.
    """
    return FilterState(segment_type=get_first_segment_type(dataset))
