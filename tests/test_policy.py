import pytest

from core.policy import DANGER, LTV_POLICY, NOT_AVAILABLE, RATIO_POLICIES, SAFE, STRESS_SCENARIOS, WARNING, RatioPolicy


@pytest.mark.parametrize(
    "name,value,expected",
    [
        ("debt_to_equity", 0.49, SAFE),
        ("debt_to_equity", 0.5, WARNING),
        ("debt_to_equity", 0.79, WARNING),
        ("debt_to_equity", 0.8, DANGER),
        ("current_ratio", 2.01, SAFE),
        ("current_ratio", 2.0, WARNING),
        ("current_ratio", 1.0, DANGER),
        ("quick_ratio", 1.6, SAFE),
        ("quick_ratio", 1.5, WARNING),
        ("quick_ratio", 0.9, DANGER),
        ("loc_utilization_to_liquid", 0.29, SAFE),
        ("loc_utilization_to_liquid", 0.3, WARNING),
        ("loc_utilization_to_liquid", 0.5, DANGER),
        ("btc_percent_of_net", 9.9, SAFE),
        ("btc_percent_of_net", 10.0, WARNING),
        ("btc_percent_of_net", 20.0, DANGER),
        ("short_term_debt_pct", 0.19, SAFE),
        ("short_term_debt_pct", 0.2, WARNING),
        ("short_term_debt_pct", 0.35, DANGER),
    ],
)
def test_ratio_thresholds_are_strict(name, value, expected):
    assert RATIO_POLICIES[name].classify(value) == expected


def test_missing_ratio_is_not_available():
    for policy in RATIO_POLICIES.values():
        assert policy.classify(None) == NOT_AVAILABLE


def test_custom_policy():
    policy = RatioPolicy(safe=3.0, warning=2.0, higher_is_better=True)
    assert policy.classify(4.0) == SAFE
    assert policy.classify(2.5) == WARNING
    assert policy.classify(1.0) == DANGER


def test_ltv_policy_thresholds():
    assert LTV_POLICY.high == 80.0
    assert LTV_POLICY.underwater == 100.0


def test_scenario_table():
    names = [s.name for s in STRESS_SCENARIOS]
    assert names == ["BTC -50%", "RE -20%", "BTC -50% + RE -20%", "Full Market Crash"]
    crash = STRESS_SCENARIOS[-1]
    assert crash.shocks == {"crypto": 0.7, "real_estate": 0.3, "investments": 0.4}
