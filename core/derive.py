"""Financial derivations over resolved entities.

Every function here is pure: the same entity and market prices always give the
same result, so callers can recompute freely whenever a price input changes.
Ratios whose denominator is zero come back as None rather than raising.
"""

from __future__ import annotations

import math
from typing import Dict, Iterable, List, Mapping, Optional, Tuple

from core.layout import PROPERTY_LABELS, PROPERTY_MORTGAGES
from core.market import MarketPrices
from core.models import (
    CompositionSlice,
    DerivedMetrics,
    HouseholdEntity,
    HouseholdMetrics,
    PrimaryEntity,
    PropertyPosition,
    Ratios,
    ScenarioOutcome,
)
from core.policy import (
    BANK_ACCOUNTS_USD,
    BTC_CRASH_SHOCK,
    BTC_MOVES,
    DANGER,
    JPM_LINE_AVAILABLE,
    JPM_LINE_SIZE,
    LTV_POLICY,
    MONTHLY_EXPENSES,
    RATIO_POLICIES,
    RE_CRASH_SHOCK,
    STRESS_SCENARIOS,
    SURVIVABLE,
    LtvPolicy,
    StressScenario,
)


def safe_div(numerator: float, denominator: float) -> Optional[float]:
    if not denominator:
        return None
    return numerator / denominator


def aud_to_usd(aud: float, rate: float) -> float:
    return (aud or 0.0) * rate


def sum_named(values: Optional[Mapping[str, float]]) -> float:
    """Sum a named mapping; blank entries count as zero."""
    if not values:
        return 0.0
    return float(sum(v or 0.0 for v in values.values()))


# ---------------- Properties ----------------
def property_position(key: str, value: float, mortgage: float, policy: LtvPolicy = LTV_POLICY) -> PropertyPosition:
    if mortgage > 0:
        ltv = safe_div(mortgage, value)
        ltv = ltv * 100 if ltv is not None else None
    else:
        ltv = 0.0
    return PropertyPosition(
        key=key,
        name=PROPERTY_LABELS.get(key, key),
        value=value,
        mortgage=mortgage,
        equity=value - mortgage,
        ltv=ltv,
        status=policy.classify(ltv),
    )


def property_positions(entity: PrimaryEntity) -> List[PropertyPosition]:
    rows = []
    for key, value in (entity.properties or {}).items():
        loan_key = PROPERTY_MORTGAGES.get(key)
        mortgage = (entity.mortgages or {}).get(loan_key, 0.0) if loan_key else 0.0
        rows.append(property_position(key, value or 0.0, mortgage or 0.0))
    return sorted(rows, key=lambda p: p.value, reverse=True)


# ---------------- Stress ----------------
def run_scenario(
    scenario: StressScenario,
    exposures: Mapping[str, float],
    net_assets: float,
    total_liabilities: float,
) -> ScenarioOutcome:
    impact = -sum(shock * (exposures.get(asset_class) or 0.0) for asset_class, shock in scenario.shocks.items())
    impact = impact + 0.0  # normalize -0.0
    resulting = net_assets + impact
    pct = safe_div(impact, net_assets)
    return ScenarioOutcome(
        name=scenario.name,
        description=scenario.description,
        impact=impact,
        impact_pct_of_net=pct * 100 if pct is not None else None,
        resulting_net_worth=resulting,
        resulting_debt_to_equity=safe_div(total_liabilities, resulting),
        status=SURVIVABLE if resulting > 0 else DANGER,
    )


def run_scenarios(
    exposures: Mapping[str, float],
    net_assets: float,
    total_liabilities: float,
    scenarios: Tuple[StressScenario, ...] = STRESS_SCENARIOS,
) -> List[ScenarioOutcome]:
    return [run_scenario(s, exposures, net_assets, total_liabilities) for s in scenarios]


# ---------------- Composition ----------------
def _slices(items: Iterable[Tuple[str, float]], total: float) -> List[CompositionSlice]:
    return [CompositionSlice(name, value, safe_div(value, total)) for name, value in items if value > 0]


def _capped_slices(items: Iterable[Tuple[str, float]], total: float) -> List[CompositionSlice]:
    out = []
    for name, value in items:
        share = safe_div(value, total)
        out.append(CompositionSlice(name, value, min(share, 1.0) if share is not None else None))
    return out


# ---------------- Entry points ----------------
def compute_ratios(
    entity: PrimaryEntity,
    btc_value: float,
    short_term_debt: float,
    line_size: float = JPM_LINE_SIZE,
) -> Ratios:
    debt = entity.total_liabilities_usd
    liquid = entity.liquid_assets_usd
    net = entity.net_assets_usd
    btc_of_net = safe_div(btc_value, net)
    btc_of_liquid = safe_div(btc_value, liquid)
    return Ratios(
        debt_to_equity=safe_div(debt, net),
        debt_to_assets=safe_div(debt, entity.total_assets_usd),
        current_ratio=safe_div(liquid, debt),
        quick_ratio=safe_div(liquid - btc_value, debt),
        btc_percent_of_net=btc_of_net * 100 if btc_of_net is not None else None,
        btc_percent_of_liquid=btc_of_liquid * 100 if btc_of_liquid is not None else None,
        loc_utilization=safe_div(entity.jpm_margin_loans_usd, line_size),
        loc_utilization_to_liquid=safe_div(entity.jpm_margin_loans_usd, liquid),
        short_term_debt_pct=safe_div(short_term_debt, debt),
    )


def classify_ratios(ratios: Ratios) -> Dict[str, str]:
    return {name: policy.classify(getattr(ratios, name)) for name, policy in RATIO_POLICIES.items()}


def derive_metrics(entity: PrimaryEntity, prices: MarketPrices) -> DerivedMetrics:
    rate = prices.aud_rate
    btc_value = (entity.btc_holdings or 0.0) * prices.btc_price
    au_houses = aud_to_usd(entity.au_house1_aud + entity.au_house2_aud, rate)
    au_stocks = aud_to_usd(entity.commsec_aud + entity.forager_aud, rate)
    au_super = aud_to_usd(entity.au_super_aud, rate)
    anz_mortgages = aud_to_usd(entity.anz_mortgages_aud, rate)
    holding_for_mom = aud_to_usd(entity.holding_for_mom_aud, rate)
    jpm_mortgages = sum_named(entity.mortgages)
    us_real_estate = sum_named(entity.properties)
    real_estate = us_real_estate + au_houses
    investments = entity.jpm_investments_usd
    margin = entity.jpm_margin_loans_usd
    short_term_debt = margin + entity.credit_cards_usd
    debt = entity.total_liabilities_usd
    liquid = entity.liquid_assets_usd

    ratios = compute_ratios(entity, btc_value, short_term_debt)

    asset_composition = _slices(
        [
            ("US Real Estate", us_real_estate),
            ("AU Real Estate", au_houses),
            ("JPM Investments", investments),
            ("Bitcoin", btc_value),
            ("AU Stocks", au_stocks),
            ("AU Super", au_super),
        ],
        entity.total_assets_usd,
    )
    debt_composition = _slices(
        [
            ("JPM Margin Loans", margin),
            ("JPM Mortgages", jpm_mortgages),
            ("ANZ Mortgages", anz_mortgages),
            ("Credit Cards", entity.credit_cards_usd),
            ("Holding for Mom", holding_for_mom),
        ],
        debt,
    )
    liquidity_breakdown = _capped_slices(
        [
            ("JPM Brokerage (US)", investments - btc_value),
            ("Bitcoin", btc_value),
            ("AU Stocks (Commsec)", au_stocks),
            ("Bank Accounts", BANK_ACCOUNTS_USD),
        ],
        liquid,
    )
    debt_maturity = [
        CompositionSlice("0-1 Year", short_term_debt, safe_div(short_term_debt, debt)),
        CompositionSlice("1-5 Years", 0.0, safe_div(0.0, debt)),
        CompositionSlice("5+ Years", jpm_mortgages + anz_mortgages, safe_div(jpm_mortgages + anz_mortgages, debt)),
    ]

    exposures = {"crypto": btc_value, "real_estate": real_estate, "investments": investments}
    runway = safe_div(liquid, MONTHLY_EXPENSES)

    return DerivedMetrics(
        btc_value_usd=btc_value,
        au_houses_usd=au_houses,
        au_stocks_usd=au_stocks,
        au_super_usd=au_super,
        anz_mortgages_usd=anz_mortgages,
        holding_for_mom_usd=holding_for_mom,
        total_jpm_mortgages=jpm_mortgages,
        us_real_estate_usd=us_real_estate,
        total_real_estate_usd=real_estate,
        jpm_investments_usd=investments,
        jpm_line_size=JPM_LINE_SIZE,
        jpm_line_available=JPM_LINE_AVAILABLE,
        short_term_debt=short_term_debt,
        ratios=ratios,
        ratio_status=classify_ratios(ratios),
        asset_composition=asset_composition,
        debt_composition=debt_composition,
        properties=property_positions(entity),
        scenarios=run_scenarios(exposures, entity.net_assets_usd, debt),
        liquidity_breakdown=liquidity_breakdown,
        debt_maturity=debt_maturity,
        cash_runway_months=math.floor(runway + 0.5) if runway is not None else None,
        btc_moves={name: btc_value * move for name, move in BTC_MOVES.items()},
        vulnerabilities={
            "real_estate_share_of_assets": safe_div(real_estate, entity.total_assets_usd),
            "real_estate_crash_loss": real_estate * RE_CRASH_SHOCK,
            "callable_margin": margin,
            "btc_crash_loss": btc_value * BTC_CRASH_SHOCK,
        },
    )


def derive_household(entity: HouseholdEntity) -> HouseholdMetrics:
    return HouseholdMetrics(
        debt_to_equity=safe_div(entity.total_liabilities_usd, entity.net_assets_usd),
        liquid_share=safe_div(entity.liquid_assets_usd, entity.total_assets_usd),
        illiquid_share=safe_div(entity.illiquid_assets_usd, entity.total_assets_usd),
        liability_coverage=safe_div(entity.liquid_assets_usd, entity.total_liabilities_usd),
    )
