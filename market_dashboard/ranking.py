"""Geography rankings over the value matrix.

Both rankings treat every geography name as one entity: rows for the
same geography coming from different segment slices are pooled before
ranking.  The ``Global`` roll-up row is dropped up front.  Ties keep the
order in which geographies first appear in the matrix, because
``groupby(sort=False)`` preserves first-seen order and the final sort is
stable.

An empty list is returned whenever there is nothing to rank; callers
decide on a fallback.
"""

from __future__ import annotations

import logging
from typing import List, Optional

import pandas as pd

from .config import GLOBAL_GEOGRAPHY
from .dataset import MarketDataset

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def matrix_frame(
    dataset: Optional[MarketDataset], year: Optional[int] = None
) -> pd.DataFrame:
    """Tabulate the value matrix.

    Parameters
    ----------
    dataset : MarketDataset or None
        Source dataset.
    year : int, optional
        Year read from each record's time series.  When omitted the
        ``value`` column is all zeros.

    Returns
    -------
    pd.DataFrame
        Columns ``geography``, ``value`` and ``cagr``, one row per
        non-Global record in matrix order.  ``value`` is 0 where the year
        is missing; ``cagr`` is NaN where no growth rate is recorded.
    """
    records = dataset.value_records if dataset is not None else None
    if not records:
        return pd.DataFrame(columns=["geography", "value", "cagr"])

    df = pd.DataFrame(
        {
            "geography": [r.geography for r in records],
            "value": [
                r.time_series.get(year) if year is not None else None
                for r in records
            ],
            "cagr": [r.cagr if r.has_cagr else None for r in records],
        }
    )
    df["value"] = pd.to_numeric(df["value"], errors="coerce").fillna(0.0)
    df["cagr"] = pd.to_numeric(df["cagr"], errors="coerce")
    return df.loc[df["geography"] != GLOBAL_GEOGRAPHY].reset_index(drop=True)


def _top(scores: pd.Series, top_n: int) -> List[str]:
    """Names of the ``top_n`` highest scores, stable on ties."""
    ranked = scores.sort_values(ascending=False, kind="stable")
    return ranked.head(max(top_n, 0)).index.tolist()


# ---------------------------------------------------------------------------
# Rankings
# ---------------------------------------------------------------------------


def rank_geographies_by_aggregated_value(
    dataset: Optional[MarketDataset],
    year: int = 2024,
    top_n: int = 3,
) -> List[str]:
    """Rank geographies by market value summed over all their records.

    Parameters
    ----------
    dataset : MarketDataset or None
        Source dataset.  ``None``, a missing matrix or an empty matrix
        all yield ``[]``.
    year : int, default 2024
        Year whose value is summed.
    top_n : int, default 3
        Maximum number of geographies returned.

    Returns
    -------
    List[str]
        Geography names ordered by descending total value.
    """
    if dataset is None:
        logger.warning("rank_geographies_by_aggregated_value: no dataset provided")
        return []
    if dataset.value_records is None:
        logger.warning("rank_geographies_by_aggregated_value: value matrix missing")
        return []

    df = matrix_frame(dataset, year)
    if df.empty:
        logger.info("rank_geographies_by_aggregated_value: no records to rank")
        return []

    totals = df.groupby("geography", sort=False)["value"].sum()
    top = _top(totals, top_n)
    logger.debug(
        "Top %d geographies by %d value out of %d: %s", top_n, year, len(totals), top
    )
    return top


def rank_geographies_by_average_cagr(
    dataset: Optional[MarketDataset],
    top_n: int = 2,
) -> List[str]:
    """Rank geographies by the mean of their recorded growth rates.

    Records without a CAGR (missing, null or NaN) are ignored, and a
    geography with no usable CAGR at all is left out of the ranking
    rather than scored as zero.

    Parameters
    ----------
    dataset : MarketDataset or None
        Source dataset.
    top_n : int, default 2
        Maximum number of geographies returned.

    Returns
    -------
    List[str]
        Geography names ordered by descending average CAGR.
    """
    if dataset is None:
        logger.warning("rank_geographies_by_average_cagr: no dataset provided")
        return []
    if dataset.value_records is None:
        logger.warning("rank_geographies_by_average_cagr: value matrix missing")
        return []

    df = matrix_frame(dataset).dropna(subset=["cagr"])
    if df.empty:
        logger.info("rank_geographies_by_average_cagr: no valid CAGR data found")
        return []

    averages = df.groupby("geography", sort=False)["cagr"].mean()
    top = _top(averages, top_n)
    logger.debug("Top %d geographies by CAGR out of %d: %s", top_n, len(averages), top)
    return top


def top_regions_by_cagr(dataset: Optional[MarketDataset], top_n: int = 2) -> List[str]:
    """Growth Leaders ranking; same as :func:`rank_geographies_by_average_cagr`."""
    return rank_geographies_by_average_cagr(dataset, top_n)


def top_countries_by_cagr(dataset: Optional[MarketDataset], top_n: int = 5) -> List[str]:
    """Emerging Markets ranking; same as :func:`rank_geographies_by_average_cagr`."""
    return rank_geographies_by_average_cagr(dataset, top_n)
