import json

import pytest

from conftest import MOM_VALUES, NICK_VALUES, POPPY_TOTAL, blank_grid
from core.data import resolve_family
from core.layout import PROPERTY_VALUES
from core.market import MarketPrices
from core.metrics_assets import PROPERTY_COLUMNS, compute_assets, property_table
from core.metrics_bitcoin import compute_bitcoin
from core.metrics_debt import compute_debt
from core.metrics_family import compute_family
from core.metrics_liquidity import compute_liquidity
from core.metrics_overview import compute_overview
from core.metrics_stress import compute_stress
from core.policy import SAFE, WARNING

MARKET = MarketPrices()


@pytest.fixture
def family(full_grid):
    return resolve_family(full_grid, source_name="Finances.xlsx")


def test_overview_payload(family):
    payload = compute_overview(family, MARKET)
    titles = [c["title"] for c in payload["cards"]]
    assert titles == ["Total Assets", "Total Liabilities", "Net Assets", "Bitcoin Value"]
    assert payload["cards"][2]["display"] == "$28.00M"
    ratios = {r["key"]: r for r in payload["ratios"]}
    assert ratios["debt_to_equity"]["display"] == "0.43x"
    assert ratios["debt_to_equity"]["status"] == SAFE
    assert ratios["current_ratio"]["status"] == WARNING
    assert [p["period"] for p in payload["net_worth_history"]][-1] == "Dec 25"
    assert set(payload["charts"]) == {"asset_composition", "net_worth_trend"}
    assert payload["market"] == {"btc_price": 95_000.0, "aud_rate": 0.62}
    json.dumps(payload["charts"])


def test_overview_on_empty_sheet_shows_not_available():
    family = resolve_family(blank_grid())
    payload = compute_overview(family, MARKET)
    ratios = {r["key"]: r for r in payload["ratios"]}
    assert ratios["debt_to_equity"]["display"] == "N/A"
    assert "net_worth_trend" not in payload["charts"]
    assert "jpm_investments_usd" in payload["defaulted_fields"]


def test_debt_payload(family):
    payload = compute_debt(family, MARKET)
    assert payload["cards"][0]["value"] == NICK_VALUES["total_liabilities_usd"]
    assert payload["largest_positions"][0]["label"] == "JPM Margin Loans (callable)"
    assert payload["largest_positions"][0]["share"] == pytest.approx(0.25)
    assert payload["credit_line"]["drawn"] == NICK_VALUES["jpm_margin_loans_usd"]
    assert payload["credit_line"]["utilization"] == pytest.approx(3_000_000 / 6_300_000)
    assert len(payload["mortgages"]) == 7
    assert [m["name"] for m in payload["maturity"]] == ["0-1 Year", "1-5 Years", "5+ Years"]
    assert "debt_vs_net_worth" in payload["charts"]


def test_liquidity_payload(family):
    payload = compute_liquidity(family, MARKET)
    assert payload["runway"]["months"] == 720
    assert payload["btc_share_of_liquid"] == pytest.approx(50 * 95_000 / 18_000_000)
    assert {r["key"] for r in payload["ratios"]} == {"current_ratio", "quick_ratio"}
    assert all(0 <= s["share"] <= 1 for s in payload["breakdown"])


def test_assets_payload(family):
    payload = compute_assets(family, MARKET, top_n=5)
    assert len(payload["properties"]) == 5
    assert set(payload["properties"][0]) == set(PROPERTY_COLUMNS)
    assert payload["property_count"] == len(PROPERTY_VALUES)
    assert [h["title"] for h in payload["holdings"]][0] == "US Real Estate"


def test_property_table_columns(family):
    table = property_table(family, MARKET)
    assert list(table.columns) == ["key"] + PROPERTY_COLUMNS
    assert table["value"].is_monotonic_decreasing


def test_bitcoin_payload(family):
    payload = compute_bitcoin(family, MarketPrices(btc_price=100_000.0))
    assert payload["value_usd"] == pytest.approx(5_000_000)
    assert payload["percent_of_net"] == pytest.approx(5_000_000 / 28_000_000 * 100)
    assert payload["percent_of_net_status"] == WARNING
    assert payload["moves"]["BTC +100%"] == pytest.approx(5_000_000)
    assert payload["moves"]["BTC -50%"] == pytest.approx(-2_500_000)


def test_stress_payload(family):
    payload = compute_stress(family, MARKET)
    assert [s["name"] for s in payload["scenarios"]][-1] == "Full Market Crash"
    assert all(s["status"] == "SURVIVABLE" for s in payload["scenarios"])
    titles = [v["title"] for v in payload["vulnerabilities"]]
    assert titles == ["Real Estate Concentration", "Margin Loan Risk", "BTC Volatility"]
    assert payload["vulnerabilities"][1]["loss"] == NICK_VALUES["jpm_margin_loans_usd"]
    assert "resulting_net_worth" in payload["charts"]


def test_family_payload(family):
    payload = compute_family(family)
    assert payload["mom"]["entity"] == "Mom (MMB)"
    assert payload["mom"]["metrics"]["liability_coverage"] == pytest.approx(3_000_000 / 50_000)
    assert payload["poppy"]["metrics"]["debt_to_equity"] == 0.0
    expected_net = NICK_VALUES["net_assets_usd"] + MOM_VALUES["net_assets_usd"] + POPPY_TOTAL
    assert payload["combined"]["net_assets_usd"] == pytest.approx(expected_net)


def test_household_payload_carries_leverage_and_illiquid_share(family):
    mom = compute_family(family)["mom"]
    assert mom["metrics"]["debt_to_equity"] == pytest.approx(50_000 / 4_950_000)
    assert mom["metrics"]["illiquid_share"] == pytest.approx(0.4)
    assert mom["illiquid_assets"] == MOM_VALUES["illiquid_assets_usd"]
