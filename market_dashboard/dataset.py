"""Typed model of the market dataset consumed by the filter presets.

The dashboard receives its data as a nested JSON document::

    {
      "metadata": {...},
      "dimensions": {
        "geographies": {"all_geographies": ["Global", "North America", ...]},
        "segments": {
          "By Drug Class": {"items": [...], "hierarchy": {"parent": ["child", ...]}}
        }
      },
      "data": {
        "value": {"geography_segment_matrix": [
          {"geography": "...", "time_series": {"2024": 1.0}, "cagr": 5.2}, ...
        ]},
        "volume": {"geography_segment_matrix": [...]}
      }
    }

:meth:`MarketDataset.from_dict` turns that document into frozen
dataclasses.  Parsing is lenient: anything that does not have the
expected shape is skipped (and logged at DEBUG level) instead of raising,
so a partially malformed upload still yields a usable dataset.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Tuple

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Records
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class DataRecord:
    geography: str
    time_series: Mapping[int, float] = field(default_factory=dict)
    cagr: Optional[float] = None
    segment: Optional[str] = None
    segment_type: Optional[str] = None

    @property
    def has_cagr(self) -> bool:
        """True when ``cagr`` holds a usable number (not missing, not NaN)."""
        return self.cagr is not None and not math.isnan(self.cagr)


@dataclass(frozen=True)
class SegmentDimension:
    items: Tuple[str, ...] = ()
    hierarchy: Mapping[str, Tuple[str, ...]] = field(default_factory=dict)


@dataclass(frozen=True)
class MarketDataset:
    all_geographies: Tuple[str, ...] = ()
    segments: Mapping[str, SegmentDimension] = field(default_factory=dict)
    # None means the matrix path was absent from the payload
    value_records: Optional[Tuple[DataRecord, ...]] = None
    volume_records: Optional[Tuple[DataRecord, ...]] = None
    metadata: Mapping[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "MarketDataset":
        """Build a dataset from the dashboard's JSON document.

        Parameters
        ----------
        payload : Mapping[str, Any]
            Decoded JSON.  Missing or mistyped sections become empty.

        Returns
        -------
        MarketDataset
            A frozen dataset; never raises for malformed content.
        """
        if not isinstance(payload, Mapping):
            logger.debug("Dataset payload is %s, not a mapping", type(payload).__name__)
            payload = {}

        dimensions = _as_mapping(payload.get("dimensions"))
        geographies = _as_mapping(dimensions.get("geographies"))
        data = _as_mapping(payload.get("data"))

        return cls(
            all_geographies=_parse_names(geographies.get("all_geographies")),
            segments=_parse_segments(dimensions.get("segments")),
            value_records=_parse_matrix(data.get("value"), "value"),
            volume_records=_parse_matrix(data.get("volume"), "volume"),
            metadata=dict(_as_mapping(payload.get("metadata"))),
        )


# ---------------------------------------------------------------------------
# Parsing helpers
# ---------------------------------------------------------------------------


def _as_mapping(obj: Any) -> Mapping[str, Any]:
    return obj if isinstance(obj, Mapping) else {}


def _to_float(obj: Any) -> Optional[float]:
    """Coerce a JSON scalar to float; ``None`` for anything non-numeric."""
    if obj is None or isinstance(obj, bool):
        return None
    try:
        return float(obj)
    except (TypeError, ValueError, OverflowError):
        return None


def _parse_names(obj: Any) -> Tuple[str, ...]:
    """Unique string entries in first-seen order."""
    if not isinstance(obj, (list, tuple)):
        return ()
    seen: Dict[str, None] = {}
    for name in obj:
        if isinstance(name, str):
            seen.setdefault(name, None)
    return tuple(seen)


def _parse_segments(obj: Any) -> Dict[str, SegmentDimension]:
    segments: Dict[str, SegmentDimension] = {}
    for segment_type, raw in _as_mapping(obj).items():
        if not isinstance(raw, Mapping):
            logger.debug("Skipping segment type %r: not a mapping", segment_type)
            continue
        hierarchy = {
            parent: _parse_names(children)
            for parent, children in _as_mapping(raw.get("hierarchy")).items()
            if isinstance(parent, str)
        }
        segments[segment_type] = SegmentDimension(
            items=_parse_names(raw.get("items")),
            hierarchy=hierarchy,
        )
    return segments


def _parse_time_series(obj: Any) -> Dict[int, float]:
    series: Dict[int, float] = {}
    for year, value in _as_mapping(obj).items():
        try:
            year_int = int(year)
        except (TypeError, ValueError):
            continue
        number = _to_float(value)
        if number is not None:
            series[year_int] = number
    return series


def _parse_record(obj: Any) -> Optional[DataRecord]:
    if not isinstance(obj, Mapping):
        return None
    geography = obj.get("geography")
    if not isinstance(geography, str):
        return None
    segment = obj.get("segment")
    segment_type = obj.get("segment_type")
    return DataRecord(
        geography=geography,
        time_series=_parse_time_series(obj.get("time_series")),
        cagr=_to_float(obj.get("cagr")),
        segment=segment if isinstance(segment, str) else None,
        segment_type=segment_type if isinstance(segment_type, str) else None,
    )


def _parse_matrix(section: Any, name: str) -> Optional[Tuple[DataRecord, ...]]:
    """Parse ``data.<name>.geography_segment_matrix``; ``None`` if absent."""
    matrix = _as_mapping(section).get("geography_segment_matrix")
    if not isinstance(matrix, (list, tuple)):
        if matrix is not None:
            logger.debug("Ignoring %s matrix of type %s", name, type(matrix).__name__)
        return None

    records: List[DataRecord] = []
    skipped = 0
    for raw in matrix:
        record = _parse_record(raw)
        if record is None:
            skipped += 1
            continue
        records.append(record)
    if skipped:
        logger.debug("Skipped %d malformed %s records", skipped, name)
    return tuple(records)
