import pytest

from banexg.models import (
    Asset,
    Balances,
    Kline,
    MyTrade,
    Order,
    PairTFKline,
    Trade,
    ensure_arr_str,
    format_headers,
)


def test_asset_is_empty_when_nothing_held():
    assert Asset(code="USDT").is_empty() is True


def test_asset_is_empty_ignores_float_noise():
    assert Asset(code="BTC", free=1e-12, used=-1e-12).is_empty() is True


def test_asset_not_empty_with_debt():
    assert Asset(code="BTC", debt=0.5).is_empty() is False


def test_asset_not_empty_with_free():
    assert Asset(code="BTC", free=0.5).is_empty() is False


def test_balances_fill_totals_computes_total_and_maps():
    btc = Asset(code="BTC", free=1.5, used=2.5)
    eth = Asset(code="ETH", free=1.0, used=1.0, total=7.0)
    bal = Balances(timestamp=123, assets={"BTC": btc, "ETH": eth})
    result = bal.fill_totals()
    assert result is bal
    assert bal.total["BTC"] == btc.free + btc.used
    assert btc.total == bal.total["BTC"]
    assert bal.total["ETH"] == eth.total
    assert bal.free == {"BTC": btc.free, "ETH": eth.free}
    assert bal.used == {"BTC": btc.used, "ETH": eth.used}
    assert bal.timestamp == 123


def test_balances_fill_totals_sets_timestamp():
    bal = Balances().fill_totals()
    assert bal.timestamp > 1_000_000_000_000
    assert bal.free == {} and bal.total == {}


def test_kline_clone_is_equal_and_independent():
    k = Kline(time=1700000000000, open=1.0, high=2.0, low=0.5, close=1.5, volume=10.0)
    c = k.clone()
    assert c == k
    c.close = 3.0
    assert k.close == 1.5


def test_pair_kline_clone_returns_plain_kline():
    k = PairTFKline(time=1, open=1.0, symbol="BTC/USDT", time_frame="1m")
    c = k.clone()
    assert type(c) is Kline
    assert c.time == k.time and c.open == k.open


def test_my_trade_extends_trade():
    t = MyTrade(symbol="BTC/USDT", order="42", filled=1.0, state="filled")
    assert isinstance(t, Trade)
    assert t.order == "42"
    assert t.fee is None


def test_order_defaults_are_not_shared():
    a, b = Order(), Order()
    a.trades.append(Trade(id="1"))
    assert b.trades == []


@pytest.mark.parametrize(
    "text,expected",
    [
        ("", "[]"),
        ("   ", "[]"),
        ("[1,2]", "[1,2]"),
        (' {"a":1} ', '[{"a":1}]'),
    ],
)
def test_ensure_arr_str(text, expected):
    assert ensure_arr_str(text) == expected


def test_format_headers_joins_values():
    out = format_headers({"Accept": ["a", "b"], "X-Key": "placeholder"})
    assert out == {"Accept": "a,b", "X-Key": "placeholder"}