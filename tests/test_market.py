import pytest

from core.market import DEFAULT_AUD_RATE, DEFAULT_BTC_PRICE, MarketPrices, normalize_market_prices


def test_defaults_when_missing():
    assert normalize_market_prices(None) == MarketPrices(DEFAULT_BTC_PRICE, DEFAULT_AUD_RATE)
    assert normalize_market_prices({}) == MarketPrices(95_000.0, 0.62)


def test_numeric_strings_are_accepted():
    prices = normalize_market_prices({"btc_price": "100000", "aud_rate": "0.65"})
    assert prices.btc_price == 100_000.0
    assert prices.aud_rate == pytest.approx(0.65)


@pytest.mark.parametrize("raw", ["", "abc", "nan", "inf", -5])
def test_unusable_input_counts_as_zero(raw):
    assert normalize_market_prices({"btc_price": raw}).btc_price == 0.0
