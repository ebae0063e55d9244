from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Optional

import pandas as pd

NA = "N/A"


def _is_missing(value: object) -> bool:
    return value is None or pd.isna(value)


def _half_up(value: float, places: int) -> Decimal:
    """Round halves away from zero: 2.5 -> 3."""
    return Decimal(repr(value)).quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP)


def format_currency(value: Optional[float]) -> str:
    """Compact dollars: $1.23M, $450K, $900."""
    if _is_missing(value):
        return "$0"
    v = float(value)
    if abs(v) >= 1_000_000:
        return f"${_half_up(v / 1_000_000, 2)}M"
    if abs(v) >= 1_000:
        return f"${_half_up(v / 1_000, 0)}K"
    return f"${_half_up(v, 0)}"


def format_full_currency(value: Optional[float]) -> str:
    return f"${float(value or 0):,.0f}"


def format_ratio(value: Optional[float], decimals: int = 2) -> str:
    if _is_missing(value):
        return NA
    return f"{float(value):.{decimals}f}x"


def format_share(value: Optional[float], decimals: int = 1) -> str:
    """Fraction to percent: 0.25 -> 25.0%."""
    if _is_missing(value):
        return NA
    return f"{float(value) * 100:.{decimals}f}%"


def format_pct(value: Optional[float], decimals: int = 1) -> str:
    """Already a percentage: 25.0 -> 25.0%."""
    if _is_missing(value):
        return NA
    return f"{float(value):.{decimals}f}%"


def format_currency_columns(df: pd.DataFrame, cols: Iterable[str]) -> pd.DataFrame:
    formatted = df.copy()
    for c in cols:
        if c in formatted.columns:
            formatted[c] = formatted[c].apply(format_currency)
    return formatted
