from __future__ import annotations

from dataclasses import asdict
from typing import Any, Callable, Dict, List, Optional, Sequence

from core.formatting import format_currency
from core.models import CompositionSlice, DerivedMetrics
from core.policy import RATIO_POLICIES

RATIO_TITLES = {
    "debt_to_equity": "Debt-to-Equity Ratio",
    "current_ratio": "Current Ratio",
    "quick_ratio": "Quick Ratio",
    "loc_utilization_to_liquid": "LOC Utilization",
    "btc_percent_of_net": "BTC % of Net Worth",
    "short_term_debt_pct": "Short-Term Debt %",
}


def stat_card(title: str, value: Optional[float], subtitle: str = "", display: Optional[str] = None) -> Dict[str, Any]:
    return {
        "title": title,
        "value": value,
        "display": display if display is not None else format_currency(value),
        "subtitle": subtitle,
    }


def ratio_card(metrics: DerivedMetrics, name: str, fmt: Callable[[Optional[float]], str], title: Optional[str] = None) -> Dict[str, Any]:
    value = getattr(metrics.ratios, name)
    return {
        "key": name,
        "title": title or RATIO_TITLES.get(name, name),
        "value": value,
        "display": fmt(value),
        "status": metrics.ratio_status.get(name),
        "target": RATIO_POLICIES[name].target if name in RATIO_POLICIES else "",
    }


def slice_records(slices: Sequence[CompositionSlice]) -> List[Dict[str, Any]]:
    return [asdict(s) for s in slices]
