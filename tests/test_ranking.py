import copy
import math

from helpers import payload, record

from market_dashboard.dataset import DataRecord, MarketDataset
from market_dashboard.ranking import (
    matrix_frame,
    rank_geographies_by_aggregated_value,
    rank_geographies_by_average_cagr,
    top_countries_by_cagr,
    top_regions_by_cagr,
)


# ---------------------------------------------------------------------------
# Aggregated value
# ---------------------------------------------------------------------------


def test_aggregated_value_sums_across_segment_slices(market):
    assert rank_geographies_by_aggregated_value(market, 2024, 3) == [
        "North America",
        "Europe",
        "Asia Pacific",
    ]


def test_aggregated_value_never_returns_global(market):
    ranked = rank_geographies_by_aggregated_value(market, 2024, 10)
    assert "Global" not in ranked
    assert len(ranked) == 5


def test_aggregated_value_truncates_to_top_n(market):
    for n in range(0, 7):
        ranked = rank_geographies_by_aggregated_value(market, 2024, n)
        assert len(ranked) == min(n, 5)


def test_aggregated_value_negative_top_n_is_empty(market):
    assert rank_geographies_by_aggregated_value(market, 2024, -1) == []


def test_missing_year_contributes_zero(market):
    # Only North America has a 2028 value; everyone else totals 0
    ranked = rank_geographies_by_aggregated_value(market, 2028, 2)
    assert ranked == ["North America", "Europe"]


def test_ties_keep_first_seen_order():
    dataset = MarketDataset.from_dict(
        payload(
            geographies=["Global", "A", "B", "C"],
            records=[
                record("C", {2024: 10.0}),
                record("A", {2024: 5.0}),
                record("B", {2024: 10.0}),
                record("A", {2024: 5.0}),
            ],
        )
    )
    assert rank_geographies_by_aggregated_value(dataset, 2024, 3) == ["C", "A", "B"]


def test_aggregated_value_empty_inputs():
    assert rank_geographies_by_aggregated_value(None) == []
    assert rank_geographies_by_aggregated_value(MarketDataset()) == []
    empty = MarketDataset.from_dict(payload(geographies=["Global", "A"], records=[]))
    assert rank_geographies_by_aggregated_value(empty) == []


def test_only_global_records_rank_nothing():
    dataset = MarketDataset.from_dict(
        payload(records=[record("Global", {2024: 100.0}, cagr=3.0)])
    )
    assert rank_geographies_by_aggregated_value(dataset) == []
    assert rank_geographies_by_average_cagr(dataset) == []


def test_ranking_does_not_mutate_dataset(market):
    before = repr(copy.deepcopy(market))
    rank_geographies_by_aggregated_value(market, 2024, 3)
    rank_geographies_by_average_cagr(market, 5)
    assert repr(market) == before


# ---------------------------------------------------------------------------
# Average CAGR
# ---------------------------------------------------------------------------


def test_average_cagr_ranks_by_mean(market):
    assert rank_geographies_by_average_cagr(market, 5) == [
        "Asia Pacific",
        "Latin America",
        "Europe",
        "North America",
    ]


def test_geography_without_cagr_is_excluded(market):
    ranked = rank_geographies_by_average_cagr(market, 10)
    assert "Middle East" not in ranked
    assert "Global" not in ranked


def test_growth_leaders_scenario():
    dataset = MarketDataset(
        all_geographies=("Global", "A", "B", "C"),
        value_records=(
            DataRecord("A", {2024: 1.0}, cagr=4.0),
            DataRecord("A", {2024: 1.0}, cagr=6.0),
            DataRecord("B", {2024: 1.0}, cagr=9.0),
            DataRecord("C", {2024: 1.0}, cagr=None),
            DataRecord("C", {2024: 1.0}, cagr=math.nan),
            DataRecord("Global", {2024: 3.0}, cagr=99.0),
        ),
    )
    assert rank_geographies_by_average_cagr(dataset, 2) == ["B", "A"]


def test_cagr_aliases_share_behavior(market):
    assert top_regions_by_cagr(market) == ["Asia Pacific", "Latin America"]
    assert top_countries_by_cagr(market) == rank_geographies_by_average_cagr(market, 5)


def test_no_valid_cagr_returns_empty():
    dataset = MarketDataset.from_dict(
        payload(records=[record("A", {2024: 1.0}), record("B", {2024: 2.0})])
    )
    assert rank_geographies_by_average_cagr(dataset, 2) == []


def test_matrix_frame_drops_global_and_fills_missing_values(market):
    df = matrix_frame(market, 2028)
    assert list(df.columns) == ["geography", "value", "cagr"]
    assert "Global" not in set(df["geography"])
    assert df["value"].sum() == 380.0
    assert df["cagr"].isna().sum() == 2


def test_cagr_ties_keep_first_seen_order():
    dataset = MarketDataset.from_dict(
        payload(
            records=[
                record("C", {2024: 1.0}, cagr=5.0),
                record("A", {2024: 1.0}, cagr=5.0),
                record("B", {2024: 1.0}, cagr=7.0),
                record("D", {2024: 1.0}, cagr=5.0),
            ],
        )
    )
    assert rank_geographies_by_average_cagr(dataset, 4) == ["B", "C", "A", "D"]
