import pytest

from helpers import payload, record

from market_dashboard.dataset import MarketDataset


@pytest.fixture
def market_payload():
    return payload(
        geographies=[
            "Global",
            "North America",
            "Europe",
            "Asia Pacific",
            "Latin America",
            "Middle East",
        ],
        segments={
            "By Drug Class": {
                "items": ["Biologics", "Monoclonal Antibodies", "Small Molecules", "Vaccines"],
                "hierarchy": {"Biologics": ["Monoclonal Antibodies", "Vaccines"]},
            },
            "By Route": {
                "items": ["Oral", "Injectable"],
                "hierarchy": {},
            },
        },
        records=[
            record("Global", {2024: 1000.0}, cagr=6.0),
            record("North America", {2024: 300.0, 2028: 380.0}, cagr=4.0, segment="Biologics"),
            record("North America", {2024: 200.0}, cagr=5.0, segment="Small Molecules"),
            record("Europe", {2024: 250.0}, cagr=6.0, segment="Biologics"),
            record("Europe", {2024: 150.0}, segment="Small Molecules"),
            record("Asia Pacific", {2024: 100.0}, cagr=9.0),
            record("Asia Pacific", {2024: 120.0}, cagr=11.0),
            record("Latin America", {2024: 60.0}, cagr=8.0),
            record("Middle East", {2024: 40.0}, cagr=float("nan")),
        ],
    )


@pytest.fixture
def market(market_payload):
    return MarketDataset.from_dict(market_payload)
