from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple

SAFE = "SAFE"
WARNING = "WARNING"
DANGER = "DANGER"
NOT_AVAILABLE = "N/A"

FREE_AND_CLEAR = "Free & Clear"
LEVERAGED = "Leveraged"
HIGH_LTV = "High LTV"
UNDERWATER = "Underwater"

SURVIVABLE = "SURVIVABLE"

# Planning constants that are not in the workbook.
JPM_LINE_SIZE = 6_300_000.0
JPM_LINE_AVAILABLE = 2_550_000.0
MONTHLY_EXPENSES = 25_000.0
BANK_ACCOUNTS_USD = 100_000.0


@dataclass(frozen=True)
class RatioPolicy:
    """Two cut-offs splitting a ratio into SAFE / WARNING / DANGER.

    Cut-offs are strict: with higher_is_better the value must exceed `safe`;
    otherwise it must be below it.
    """

    safe: float
    warning: float
    higher_is_better: bool = False
    target: str = ""

    def classify(self, value: Optional[float]) -> str:
        if value is None:
            return NOT_AVAILABLE
        if self.higher_is_better:
            if value > self.safe:
                return SAFE
            return WARNING if value > self.warning else DANGER
        if value < self.safe:
            return SAFE
        return WARNING if value < self.warning else DANGER


RATIO_POLICIES: Dict[str, RatioPolicy] = {
    "debt_to_equity": RatioPolicy(0.5, 0.8, target="Target: < 0.5x for conservative"),
    "current_ratio": RatioPolicy(2.0, 1.0, higher_is_better=True, target="Liquid Assets / Total Debt"),
    "quick_ratio": RatioPolicy(1.5, 1.0, higher_is_better=True, target="(Liquid - BTC) / Total Debt"),
    "loc_utilization_to_liquid": RatioPolicy(0.3, 0.5, target="Margin Loan / Liquid Assets"),
    "btc_percent_of_net": RatioPolicy(10.0, 20.0, target="Crypto concentration risk"),
    "short_term_debt_pct": RatioPolicy(0.2, 0.35, target="Target: < 20%"),
}


@dataclass(frozen=True)
class LtvPolicy:
    high: float = 80.0
    underwater: float = 100.0

    def classify(self, ltv: Optional[float]) -> str:
        # A mortgage against a zero valuation has no defined LTV and is treated as underwater.
        if ltv is None:
            return UNDERWATER
        if ltv == 0:
            return FREE_AND_CLEAR
        if ltv > self.underwater:
            return UNDERWATER
        if ltv > self.high:
            return HIGH_LTV
        return LEVERAGED


LTV_POLICY = LtvPolicy()


@dataclass(frozen=True)
class StressScenario:
    name: str
    description: str
    # Asset class -> fractional decline (0.5 == -50%).
    shocks: Dict[str, float] = field(default_factory=dict)


ASSET_CLASSES: Tuple[str, ...] = ("crypto", "real_estate", "investments")

STRESS_SCENARIOS: Tuple[StressScenario, ...] = (
    StressScenario("BTC -50%", "Crypto winter scenario", {"crypto": 0.5}),
    StressScenario("RE -20%", "Property market correction", {"real_estate": 0.2}),
    StressScenario("BTC -50% + RE -20%", "Combined crash", {"crypto": 0.5, "real_estate": 0.2}),
    StressScenario(
        "Full Market Crash",
        "BTC -70%, RE -30%, Stocks -40%",
        {"crypto": 0.7, "real_estate": 0.3, "investments": 0.4},
    ),
)

# Price moves shown on the crypto tab, as multiples of the current holding value.
BTC_MOVES: Dict[str, float] = {
    "BTC -50%": -0.5,
    "BTC +50%": 0.5,
    "BTC +100%": 1.0,
}

RE_CRASH_SHOCK = 0.3
BTC_CRASH_SHOCK = 0.7
