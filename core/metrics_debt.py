from __future__ import annotations

from dataclasses import asdict
from typing import Any, Dict

from core.cards import ratio_card, slice_records, stat_card
from core.charts import DEBT_PALETTE, debt_vs_net_worth, donut_chart, to_vega_spec
from core.derive import derive_metrics, safe_div
from core.formatting import format_ratio, format_share
from core.layout import MORTGAGE_LABELS
from core.market import MarketPrices
from core.models import FamilyData


def compute_debt(data: FamilyData, market: MarketPrices) -> Dict[str, Any]:
    nick = data.nick
    metrics = derive_metrics(nick, market)
    total_debt = nick.total_liabilities_usd

    def bar(label: str, value: float) -> Dict[str, Any]:
        return {"label": label, "value": value, "share": safe_div(value, total_debt)}

    # Ordered as listed on the debt tab: callable first, then mortgages by lender.
    largest_positions = [bar("JPM Margin Loans (callable)", nick.jpm_margin_loans_usd)]
    largest_positions.append(bar(MORTGAGE_LABELS["street88th"], nick.mortgages.get("street88th", 0.0)))
    largest_positions.append(bar("ANZ Mortgages (AU)", metrics.anz_mortgages_usd))
    for key in ("hollywood88", "hollywood90", "main73", "whitney"):
        largest_positions.append(bar(MORTGAGE_LABELS[key], nick.mortgages.get(key, 0.0)))
    largest_positions.append(bar("Credit Cards", nick.credit_cards_usd))

    charts: Dict[str, Any] = {}
    if metrics.debt_composition:
        charts["debt_breakdown"] = to_vega_spec(donut_chart(metrics.debt_composition, DEBT_PALETTE))
    if nick.history.net_worth:
        charts["debt_vs_net_worth"] = to_vega_spec(debt_vs_net_worth(nick.history.net_worth, nick.history.debt))

    return {
        "market": asdict(market),
        "cards": [stat_card("Total Debt", total_debt)],
        "ratios": [
            ratio_card(metrics, "debt_to_equity", format_ratio, title="Debt-to-Equity"),
            ratio_card(metrics, "loc_utilization_to_liquid", format_share, title="LOC / Liquid Assets"),
            ratio_card(metrics, "short_term_debt_pct", format_share),
        ],
        "debt_composition": slice_records(metrics.debt_composition),
        "maturity": slice_records(metrics.debt_maturity),
        "largest_positions": largest_positions,
        "mortgages": {MORTGAGE_LABELS.get(k, k): v for k, v in nick.mortgages.items()},
        "total_jpm_mortgages": metrics.total_jpm_mortgages,
        "credit_line": {
            "size": metrics.jpm_line_size,
            "available": metrics.jpm_line_available,
            "drawn": nick.jpm_margin_loans_usd,
            "utilization": metrics.ratios.loc_utilization,
        },
        "charts": charts,
    }
