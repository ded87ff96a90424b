# banexg

Building blocks for trading software: dataclasses for orders, trades,
balances, positions, klines and tickers; an order book whose sides stay
sorted by price; decimal precision rounding on number strings; timeframe
arithmetic; and JSON helpers that control how numbers are decoded.

The package has no dependencies outside the standard library.

## Installation

```
pip install banexg
```

To run the test suite:

```
pip install "banexg[test]"
pytest
```

## What is inside

| Module | Purpose |
| --- | --- |
| `banexg.models` | `Order`, `Trade`, `MyTrade`, `Fee`, `Balances`, `Asset`, `Position`, `Kline`, `PairTFKline`, `Ticker`, `Income`, `FundingRate`, `FundingRateCur`, `LastPrice`, `AccountConfig`, `WsLog`; `ensure_arr_str`, `format_headers` |
| `banexg.orderbook` | `OdBookSide` and `OrderBook` |
| `banexg.utils.precision` | `dec_to_prec`, `prec_float64`, `prec_float64_str`, `adjusted`, `PrecMode`, `PrecisionError` |
| `banexg.utils.timeframe` | `tf_to_secs`, `secs_to_tf`, `reg_tf_secs`, `align_tf_secs`, `align_tf_msecs` and their offset variants, `get_tf_align_origin` |
| `banexg.utils.numbers` | `equal_nearly`, `equal_in`, `snake_to_camel` |
| `banexg.utils.misc` | `unmarshal`, `marshal`, `decode_stream`, `parse_json_number`, `JsonNum`, map helpers, `url_encode_map`, `encode_uri_component`, `uuid`, `md5` |

## Examples

### Timeframes

```python
from banexg.utils.timeframe import tf_to_secs, secs_to_tf, align_tf_secs

tf_to_secs("1h")                  # 3600
secs_to_tf(3600)                  # "1h"
align_tf_secs(1700000123, 3600)   # 1699999200
```

Units are `s`, `m`, `h`, `d`, `w`, `M` (30 days), `q` (90 days) and `y`
(365 days). Weekly and longer multiples of a week are aligned to Monday
1970-01-05. `reg_tf_secs` registers custom names. Malformed timeframes and
timestamps of the wrong size raise `ValueError`.

### Precision

`dec_to_prec(num, count_mode, precision, is_round, pad_zero)` works on
decimal strings and returns a string, so binary floating-point error does
not creep in:

```python
from banexg.utils.precision import dec_to_prec, PrecMode

dec_to_prec("12.3456", PrecMode.DECIMAL_PLACE, "2", False, False)   # "12.34"
dec_to_prec("12.3456", PrecMode.DECIMAL_PLACE, "2", True, False)    # "12.35"
dec_to_prec("0.000123456", PrecMode.SIGNIF_DIGITS, "2", False, False)  # "0.00012"
dec_to_prec("165", PrecMode.TICK_SIZE, "110", True, False)          # "220"
```

A negative precision rounds to tens, hundreds and so on. Invalid input
raises `PrecisionError`, a `ValueError`. `prec_float64` and
`prec_float64_str` apply the same rules to floats.

### Order book

```python
from banexg.orderbook import OdBookSide, OrderBook

asks = OdBookSide(False, 100, [(122, 10), (123, 15), (125, 20), (127, 40)])
asks.set(121.8, 5)
asks.level(0)          # (121.8, 5)
asks.sum_vol_to(127)   # (50.0, 1.0)
```

Bids are kept in descending price order, asks in ascending order. Setting a
size of zero or less removes a level, and `update` trims a side to its
depth. `avg_price(volume)` returns the average fill price, the filled rate
and the change rate from the best to the last price used.
`OrderBook.set_side` applies a JSON list of `[price, size]` strings to one
side, either merging or replacing.

### Models

```python
from banexg.models import Asset, Balances

bal = Balances(assets={"USDT": Asset(code="USDT", free=90, used=10)})
bal.fill_totals()
bal.total["USDT"]   # 100
```

### JSON numbers

```python
from banexg.utils.misc import unmarshal, JsonNum

unmarshal('{"id": 9223372036854775807}', JsonNum.AUTO)   # {"id": 9223372036854775807}
unmarshal('{"p": 1.10}', JsonNum.STR)                    # {"p": Decimal("1.10")}
```

`JsonNum.FLOAT` (the default) turns every number into a float, `STR` keeps
numbers exact as `Decimal`, and `AUTO` gives `int` for integers within the
64-bit range and `float` otherwise.

## What it does not do

This package does not connect to any exchange: it sends no HTTP or
websocket requests, signs no requests, loads no market lists and places no
orders. It has no error type of its own beyond `PrecisionError`, no market
or currency descriptions, no file cache and no logger setup; the
`banexg.log` sub-package holds no modules. There is no command-line tool.