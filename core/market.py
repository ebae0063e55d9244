from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

DEFAULT_BTC_PRICE = 95000.0
DEFAULT_AUD_RATE = 0.62


@dataclass(frozen=True)
class MarketPrices:
    btc_price: float = DEFAULT_BTC_PRICE
    aud_rate: float = DEFAULT_AUD_RATE


def _as_price(value: object, default: float) -> float:
    """Blank or unparsable input counts as 0, the way the price inputs behave while being edited."""
    if value is None:
        return default
    try:
        out = float(value)  # type: ignore[arg-type]
    except Exception:
        return 0.0
    if out != out or out < 0 or out == float("inf"):
        return 0.0
    return out


def normalize_market_prices(raw: Optional[dict]) -> MarketPrices:
    raw = raw or {}
    return MarketPrices(
        btc_price=_as_price(raw.get("btc_price"), DEFAULT_BTC_PRICE),
        aud_rate=_as_price(raw.get("aud_rate"), DEFAULT_AUD_RATE),
    )
