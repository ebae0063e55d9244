from __future__ import annotations

from dataclasses import asdict
from typing import Any, Dict

from core.derive import derive_metrics
from core.market import MarketPrices
from core.models import FamilyData
from core.policy import RATIO_POLICIES

STORAGE = [
    {"name": "Hardware Wallet", "subtitle": "Trezor"},
    {"name": "Kraken", "subtitle": "Exchange"},
    {"name": "Coinbase", "subtitle": "Exchange"},
    {"name": "Glanz", "subtitle": "Storage"},
]


def compute_bitcoin(data: FamilyData, market: MarketPrices) -> Dict[str, Any]:
    nick = data.nick
    metrics = derive_metrics(nick, market)
    pct_net = metrics.ratios.btc_percent_of_net
    pct_liquid = metrics.ratios.btc_percent_of_liquid
    return {
        "market": asdict(market),
        "holdings": nick.btc_holdings,
        "price": market.btc_price,
        "value_usd": metrics.btc_value_usd,
        "percent_of_net": pct_net,
        "percent_of_net_bar": min(pct_net, 100.0) if pct_net is not None else None,
        "percent_of_net_status": metrics.ratio_status.get("btc_percent_of_net"),
        "percent_of_net_recommended_max": RATIO_POLICIES["btc_percent_of_net"].safe,
        "percent_of_liquid": pct_liquid,
        "percent_of_liquid_bar": min(pct_liquid, 100.0) if pct_liquid is not None else None,
        "percent_of_liquid_recommended_max": 15.0,
        "moves": metrics.btc_moves,
        "storage": STORAGE,
    }
