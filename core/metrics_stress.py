from __future__ import annotations

from dataclasses import asdict
from typing import Any, Dict

import altair as alt
import pandas as pd

from core.charts import to_vega_spec
from core.derive import derive_metrics
from core.market import MarketPrices
from core.models import FamilyData
from core.policy import BTC_CRASH_SHOCK, RE_CRASH_SHOCK


def compute_stress(data: FamilyData, market: MarketPrices) -> Dict[str, Any]:
    nick = data.nick
    metrics = derive_metrics(nick, market)
    scenarios = [asdict(s) for s in metrics.scenarios]

    chart = None
    if scenarios:
        df = pd.DataFrame(scenarios)[["name", "resulting_net_worth", "status"]]
        chart = to_vega_spec(
            alt.Chart(df)
            .mark_bar()
            .encode(
                x=alt.X("name:N", title=None, sort=list(df["name"])),
                y=alt.Y("resulting_net_worth:Q", title="Net worth after shock", axis=alt.Axis(format="$~s")),
                color=alt.Color(
                    "status:N",
                    scale=alt.Scale(domain=["SURVIVABLE", "DANGER"], range=["#10b981", "#ef4444"]),
                    legend=None,
                ),
                tooltip=["name", alt.Tooltip("resulting_net_worth:Q", format="$,.0f"), "status"],
            )
            .properties(height=240)
        )

    v = metrics.vulnerabilities
    return {
        "market": asdict(market),
        "net_assets": nick.net_assets_usd,
        "scenarios": scenarios,
        "vulnerabilities": [
            {
                "title": "Real Estate Concentration",
                "share_of_assets": v["real_estate_share_of_assets"],
                "loss": v["real_estate_crash_loss"],
                "shock": RE_CRASH_SHOCK,
            },
            {"title": "Margin Loan Risk", "loss": v["callable_margin"]},
            {"title": "BTC Volatility", "loss": v["btc_crash_loss"], "shock": BTC_CRASH_SHOCK},
        ],
        "protective": {
            "equity_buffer": nick.net_assets_usd,
            "runway_months": metrics.cash_runway_months,
        },
        "charts": {"resulting_net_worth": chart} if chart else {},
    }
