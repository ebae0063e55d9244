from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple


@dataclass(frozen=True)
class HistoricalPoint:
    period: str
    value: float


HistoricalSeries = Tuple[HistoricalPoint, ...]


@dataclass(frozen=True)
class EntityHistory:
    net_worth: HistoricalSeries = ()
    debt: HistoricalSeries = ()
    gross_assets: HistoricalSeries = ()


@dataclass(frozen=True)
class PrimaryEntity:
    """Nick's full position at the latest column. AUD fields are unconverted."""

    name: str
    total_assets_usd: float = 0.0
    total_liabilities_usd: float = 0.0
    net_assets_usd: float = 0.0
    liquid_assets_usd: float = 0.0
    illiquid_assets_usd: float = 0.0
    btc_holdings: float = 0.0
    jpm_margin_loans_usd: float = 0.0
    jpm_investments_usd: float = 0.0
    anz_mortgages_aud: float = 0.0
    commsec_aud: float = 0.0
    forager_aud: float = 0.0
    au_super_aud: float = 0.0
    au_house1_aud: float = 0.0
    au_house2_aud: float = 0.0
    credit_cards_usd: float = 0.0
    holding_for_mom_aud: float = 0.0
    mortgages: Dict[str, float] = field(default_factory=dict)
    properties: Dict[str, float] = field(default_factory=dict)
    history: EntityHistory = field(default_factory=EntityHistory)
    defaulted_fields: Tuple[str, ...] = ()


@dataclass(frozen=True)
class HouseholdEntity:
    name: str
    total_assets_usd: float = 0.0
    total_liabilities_usd: float = 0.0
    net_assets_usd: float = 0.0
    liquid_assets_usd: float = 0.0
    illiquid_assets_usd: float = 0.0
    defaulted_fields: Tuple[str, ...] = ()


@dataclass(frozen=True)
class FamilyData:
    nick: PrimaryEntity
    mom: HouseholdEntity
    poppy: HouseholdEntity
    source_name: str = ""


# ---------------- Derived ----------------
@dataclass(frozen=True)
class Ratios:
    debt_to_equity: Optional[float]
    debt_to_assets: Optional[float]
    current_ratio: Optional[float]
    quick_ratio: Optional[float]
    btc_percent_of_net: Optional[float]
    btc_percent_of_liquid: Optional[float]
    loc_utilization: Optional[float]
    loc_utilization_to_liquid: Optional[float]
    short_term_debt_pct: Optional[float]


@dataclass(frozen=True)
class CompositionSlice:
    name: str
    value: float
    share: Optional[float]


@dataclass(frozen=True)
class PropertyPosition:
    key: str
    name: str
    value: float
    mortgage: float
    equity: float
    ltv: Optional[float]
    status: str


@dataclass(frozen=True)
class ScenarioOutcome:
    name: str
    description: str
    impact: float
    impact_pct_of_net: Optional[float]
    resulting_net_worth: float
    resulting_debt_to_equity: Optional[float]
    status: str


@dataclass(frozen=True)
class DerivedMetrics:
    btc_value_usd: float
    au_houses_usd: float
    au_stocks_usd: float
    au_super_usd: float
    anz_mortgages_usd: float
    holding_for_mom_usd: float
    total_jpm_mortgages: float
    us_real_estate_usd: float
    total_real_estate_usd: float
    jpm_investments_usd: float
    jpm_line_size: float
    jpm_line_available: float
    short_term_debt: float
    ratios: Ratios
    ratio_status: Dict[str, str]
    asset_composition: List[CompositionSlice]
    debt_composition: List[CompositionSlice]
    properties: List[PropertyPosition]
    scenarios: List[ScenarioOutcome]
    liquidity_breakdown: List[CompositionSlice]
    debt_maturity: List[CompositionSlice]
    cash_runway_months: Optional[int]
    btc_moves: Dict[str, float]
    vulnerabilities: Dict[str, Optional[float]]


@dataclass(frozen=True)
class HouseholdMetrics:
    debt_to_equity: Optional[float]
    liquid_share: Optional[float]
    illiquid_share: Optional[float]
    liability_coverage: Optional[float]
