from __future__ import annotations

from typing import Any, Dict, List, Sequence

import altair as alt
import pandas as pd

from core.models import CompositionSlice, HistoricalSeries

alt.data_transformers.disable_max_rows()

PALETTE = ["#3b82f6", "#06b6d4", "#8b5cf6", "#f59e0b", "#10b981", "#6366f1"]
DEBT_PALETTE = ["#ef4444", "#f59e0b", "#3b82f6", "#8b5cf6", "#10b981"]


def to_vega_spec(chart: alt.TopLevelMixin) -> Dict[str, Any]:
    """Convert an Altair chart into a Vega-Lite spec dict (JSON-serializable)."""
    return chart.to_dict()


def slices_frame(slices: Sequence[CompositionSlice]) -> pd.DataFrame:
    return pd.DataFrame(
        [{"name": s.name, "value": s.value, "share": s.share} for s in slices],
        columns=["name", "value", "share"],
    )


def series_frame(series: HistoricalSeries, metric: str = "value") -> pd.DataFrame:
    return pd.DataFrame(
        [{"period": p.period, "metric": metric, "value": p.value} for p in series],
        columns=["period", "metric", "value"],
    )


def donut_chart(slices: Sequence[CompositionSlice], palette: List[str] = PALETTE) -> alt.Chart:
    df = slices_frame(slices)
    return (
        alt.Chart(df)
        .mark_arc(innerRadius=50, outerRadius=90)
        .encode(
            theta=alt.Theta("value:Q"),
            color=alt.Color(
                "name:N",
                sort=list(df["name"]),
                scale=alt.Scale(domain=list(df["name"]), range=palette[: max(len(df), 1)]),
                legend=alt.Legend(title=None),
            ),
            tooltip=["name", alt.Tooltip("value:Q", format="$,.0f"), alt.Tooltip("share:Q", format=".1%")],
        )
        .properties(height=220)
    )


def net_worth_bar(series: HistoricalSeries) -> alt.Chart:
    df = series_frame(series, "Net Worth")
    return (
        alt.Chart(df)
        .mark_bar(color="#3b82f6", cornerRadiusTopLeft=4, cornerRadiusTopRight=4)
        .encode(
            x=alt.X("period:O", title=None, sort=list(df["period"])),
            y=alt.Y("value:Q", title=None, axis=alt.Axis(format="$~s")),
            tooltip=["period", alt.Tooltip("value:Q", format="$,.0f")],
        )
        .properties(height=220)
    )


def debt_vs_net_worth(net_worth: HistoricalSeries, debt: HistoricalSeries) -> alt.Chart:
    df = pd.concat([series_frame(net_worth, "Net Worth"), series_frame(debt, "Total Debt")], ignore_index=True)
    order = list(dict.fromkeys(df["period"]))
    return (
        alt.Chart(df)
        .mark_line(point=True, strokeWidth=2)
        .encode(
            x=alt.X("period:O", title=None, sort=order),
            y=alt.Y("value:Q", title=None, axis=alt.Axis(format="$~s")),
            color=alt.Color(
                "metric:N",
                scale=alt.Scale(domain=["Net Worth", "Total Debt"], range=["#10b981", "#ef4444"]),
                legend=alt.Legend(title=None),
            ),
            tooltip=["period", "metric", alt.Tooltip("value:Q", format="$,.0f")],
        )
        .properties(height=260)
    )


def horizontal_bars(slices: Sequence[CompositionSlice], color: str = "#3b82f6") -> alt.Chart:
    df = slices_frame(slices)
    return (
        alt.Chart(df)
        .mark_bar(color=color)
        .encode(
            y=alt.Y("name:N", title=None, sort=list(df["name"])),
            x=alt.X("value:Q", title=None, axis=alt.Axis(format="$~s")),
            tooltip=["name", alt.Tooltip("value:Q", format="$,.0f"), alt.Tooltip("share:Q", format=".1%")],
        )
        .properties(height=max(120, 28 * len(df)))
    )
