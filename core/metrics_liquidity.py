from __future__ import annotations

from dataclasses import asdict
from typing import Any, Dict

from core.cards import ratio_card, slice_records, stat_card
from core.charts import horizontal_bars, to_vega_spec
from core.derive import derive_metrics, safe_div
from core.formatting import format_ratio, format_share
from core.market import MarketPrices
from core.models import FamilyData
from core.policy import MONTHLY_EXPENSES


def compute_liquidity(data: FamilyData, market: MarketPrices) -> Dict[str, Any]:
    nick = data.nick
    metrics = derive_metrics(nick, market)
    liquid_share = safe_div(nick.liquid_assets_usd, nick.total_assets_usd)

    return {
        "market": asdict(market),
        "cards": [
            stat_card("Liquid Assets", nick.liquid_assets_usd, f"{format_share(liquid_share)} of total assets"),
        ],
        "ratios": [
            ratio_card(metrics, "current_ratio", format_ratio),
            ratio_card(metrics, "quick_ratio", format_ratio),
        ],
        "runway": {
            "months": metrics.cash_runway_months,
            "monthly_expenses": MONTHLY_EXPENSES,
            "liquid_assets": nick.liquid_assets_usd,
        },
        "breakdown": slice_records(metrics.liquidity_breakdown),
        "btc_share_of_liquid": safe_div(metrics.btc_value_usd, nick.liquid_assets_usd),
        "charts": {"breakdown": to_vega_spec(horizontal_bars(metrics.liquidity_breakdown))},
    }
