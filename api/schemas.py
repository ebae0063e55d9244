from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field

from core.market import DEFAULT_AUD_RATE, DEFAULT_BTC_PRICE


class MarketPricesModel(BaseModel):
    btc_price: float = Field(default=DEFAULT_BTC_PRICE, description="BTC spot price in USD")
    aud_rate: float = Field(default=DEFAULT_AUD_RATE, description="USD per 1 AUD")


class UploadResponse(BaseModel):
    session_id: str
    request_id: int
    accepted: bool
    source_name: str = ""
    entities: List[str] = Field(default_factory=list)
    defaulted_fields: List[str] = Field(default_factory=list)
    error: Optional[str] = None
