"""Filter presets: one-click filter configurations derived from the dataset.

Each preset picks a handful of geographies by a ranking metric and the
first-level segments of the dataset's first segmentation axis, then adds
a fixed view mode, data type and year range.  When the ranking comes back
empty the first geographies of the dimension list are used instead, and
when the axis has no first-level segments its first raw items are used.

The builders are pure: the same dataset always gives an equal
:class:`FilterConfiguration`, and the dataset is never modified.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Tuple

from .config import (
    DEFAULT_SEGMENT_TYPE,
    GLOBAL_GEOGRAPHY,
    PRESET_DATA_TYPE,
    PRESET_PARAMETERS,
    PRESET_SEGMENT_FALLBACK_COUNT,
    PRESET_VIEW_MODE,
    TOP_MARKET_YEAR,
    DataType,
    ViewMode,
)
from .dataset import MarketDataset
from .hierarchy import get_first_level_segments, get_first_segment_type
from .ranking import (
    rank_geographies_by_aggregated_value,
    top_countries_by_cagr,
    top_regions_by_cagr,
)

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Output type
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class FilterConfiguration:
    """Partial filter record; ``None`` fields are left to the caller."""

    view_mode: Optional[ViewMode] = None
    geographies: Optional[Tuple[str, ...]] = None
    segments: Optional[Tuple[str, ...]] = None
    segment_type: Optional[str] = None
    year_range: Optional[Tuple[int, int]] = None
    data_type: Optional[DataType] = None

    def to_dict(self) -> Dict[str, Any]:
        """Fields that are set, keyed the way the dashboard store names them."""
        out: Dict[str, Any] = {}
        if self.view_mode is not None:
            out["viewMode"] = self.view_mode
        if self.geographies is not None:
            out["geographies"] = list(self.geographies)
        if self.segments is not None:
            out["segments"] = list(self.segments)
        if self.segment_type is not None:
            out["segmentType"] = self.segment_type
        if self.year_range is not None:
            out["yearRange"] = list(self.year_range)
        if self.data_type is not None:
            out["dataType"] = self.data_type
        return out


# ---------------------------------------------------------------------------
# Shared builder
# ---------------------------------------------------------------------------


def _fallback_geographies(dataset: MarketDataset, count: int) -> List[str]:
    return [g for g in dataset.all_geographies if g != GLOBAL_GEOGRAPHY][:count]


def _build(
    preset_id: str,
    dataset: Optional[MarketDataset],
    rank: Callable[[MarketDataset, int], List[str]],
) -> FilterConfiguration:
    label, top_n, year_range = PRESET_PARAMETERS[preset_id]

    if dataset is None:
        return FilterConfiguration(
            view_mode=PRESET_VIEW_MODE,
            year_range=year_range,
            data_type=PRESET_DATA_TYPE,
        )

    geographies = rank(dataset, top_n)
    segment_type = get_first_segment_type(dataset)
    segments = (
        get_first_level_segments(dataset, segment_type) if segment_type else []
    )

    if not geographies and dataset.all_geographies:
        geographies = _fallback_geographies(dataset, top_n)
        logger.info("%s: using fallback geographies %s", label, geographies)

    if not segments and segment_type:
        items = dataset.segments[segment_type].items
        segments = list(items[:PRESET_SEGMENT_FALLBACK_COUNT])
        logger.info("%s: using fallback segments %s", label, segments)

    return FilterConfiguration(
        view_mode=PRESET_VIEW_MODE,
        geographies=tuple(geographies),
        segments=tuple(segments),
        segment_type=segment_type or DEFAULT_SEGMENT_TYPE,
        year_range=year_range,
        data_type=PRESET_DATA_TYPE,
    )


# ---------------------------------------------------------------------------
# Presets
# ---------------------------------------------------------------------------


def create_top_market_filters(dataset: Optional[MarketDataset]) -> FilterConfiguration:
    """Largest markets by 2024 value, shown for 2024-2028."""
    return _build(
        "top-market",
        dataset,
        lambda d, n: rank_geographies_by_aggregated_value(d, TOP_MARKET_YEAR, n),
    )


def create_growth_leaders_filters(
    dataset: Optional[MarketDataset],
) -> FilterConfiguration:
    """Top regions by average CAGR, shown for 2024-2032."""
    return _build("growth-leaders", dataset, top_regions_by_cagr)


def create_emerging_markets_filters(
    dataset: Optional[MarketDataset],
) -> FilterConfiguration:
    """Top countries by average CAGR, shown for 2024-2032."""
    return _build("emerging-markets", dataset, top_countries_by_cagr)


PRESETS: Dict[str, Callable[[Optional[MarketDataset]], FilterConfiguration]] = {
    "top-market": create_top_market_filters,
    "growth-leaders": create_growth_leaders_filters,
    "emerging-markets": create_emerging_markets_filters,
}


def build_preset(
    preset_id: str, dataset: Optional[MarketDataset]
) -> FilterConfiguration:
    """Run the preset registered under ``preset_id``.

    Raises ``KeyError`` for an unknown id.
    """
    try:
        builder = PRESETS[preset_id]
    except KeyError:
        raise KeyError(
            f"Unknown preset {preset_id!r}; expected one of {sorted(PRESETS)}"
        ) from None
    return builder(dataset)
