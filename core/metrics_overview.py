from __future__ import annotations

from dataclasses import asdict
from typing import Any, Dict

from core.cards import ratio_card, slice_records, stat_card
from core.charts import donut_chart, net_worth_bar, to_vega_spec
from core.derive import derive_metrics
from core.formatting import format_full_currency, format_pct, format_ratio, format_share
from core.market import MarketPrices
from core.models import FamilyData


def compute_overview(data: FamilyData, market: MarketPrices) -> Dict[str, Any]:
    nick = data.nick
    metrics = derive_metrics(nick, market)

    cards = [
        stat_card("Total Assets", nick.total_assets_usd, "USD"),
        stat_card("Total Liabilities", nick.total_liabilities_usd, "USD"),
        stat_card("Net Assets", nick.net_assets_usd, format_full_currency(nick.net_assets_usd)),
        stat_card(
            "Bitcoin Value",
            metrics.btc_value_usd,
            f"{nick.btc_holdings:.3f} BTC @ ${market.btc_price:,.0f}",
        ),
    ]
    ratios = [
        ratio_card(metrics, "debt_to_equity", format_ratio),
        ratio_card(metrics, "current_ratio", format_ratio),
        ratio_card(metrics, "loc_utilization_to_liquid", format_share),
        ratio_card(metrics, "btc_percent_of_net", format_pct),
    ]

    charts: Dict[str, Any] = {}
    if metrics.asset_composition:
        charts["asset_composition"] = to_vega_spec(donut_chart(metrics.asset_composition))
    if nick.history.net_worth:
        charts["net_worth_trend"] = to_vega_spec(net_worth_bar(nick.history.net_worth))

    return {
        "market": asdict(market),
        "entity": nick.name,
        "cards": cards,
        "ratios": ratios,
        "asset_composition": slice_records(metrics.asset_composition),
        "net_worth_history": [asdict(p) for p in nick.history.net_worth],
        "defaulted_fields": list(nick.defaulted_fields),
        "charts": charts,
    }
