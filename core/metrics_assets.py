from __future__ import annotations

from dataclasses import asdict
from typing import Any, Dict

import pandas as pd

from core.cards import stat_card
from core.derive import derive_metrics, safe_div
from core.formatting import format_share
from core.market import MarketPrices
from core.models import FamilyData

PROPERTY_COLUMNS = ["name", "value", "mortgage", "equity", "ltv", "status"]


def property_table(data: FamilyData, market: MarketPrices) -> pd.DataFrame:
    metrics = derive_metrics(data.nick, market)
    rows = [asdict(p) for p in metrics.properties]
    return pd.DataFrame(rows, columns=["key"] + PROPERTY_COLUMNS)


def compute_assets(data: FamilyData, market: MarketPrices, *, top_n: int = 15) -> Dict[str, Any]:
    nick = data.nick
    metrics = derive_metrics(nick, market)
    total = nick.total_assets_usd

    holdings = [
        {"title": "US Real Estate", "value": metrics.us_real_estate_usd, "subtitle": f"{len(nick.properties)} properties"},
        {"title": "AU Real Estate", "value": metrics.au_houses_usd, "subtitle": "Blairgowrie + Middle Park"},
        {"title": "JPM Investments", "value": metrics.jpm_investments_usd, "subtitle": "PB + Trust"},
        {"title": "Bitcoin", "value": metrics.btc_value_usd, "subtitle": f"{nick.btc_holdings:.3f} BTC"},
        {"title": "AU Superannuation", "value": metrics.au_super_usd, "subtitle": "AusSuper + Hostplus"},
        {"title": "AU Stocks", "value": metrics.au_stocks_usd, "subtitle": "Commsec + Forager"},
    ]
    table = property_table(data, market).head(max(1, top_n))

    return {
        "market": asdict(market),
        "cards": [
            stat_card("Liquid Assets", nick.liquid_assets_usd, f"{format_share(safe_div(nick.liquid_assets_usd, total))} of total"),
            stat_card("Illiquid Assets", nick.illiquid_assets_usd, f"{format_share(safe_div(nick.illiquid_assets_usd, total))} of total"),
            stat_card("Real Estate Total", metrics.total_real_estate_usd, "US + AU Properties"),
        ],
        "holdings": holdings,
        "properties": table.drop(columns=["key"]).to_dict(orient="records"),
        "property_count": len(metrics.properties),
        "total_property_equity": float(sum(p.equity for p in metrics.properties)),
    }
