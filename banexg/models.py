"""Trading records: balances, klines, tickers, orders, trades and positions."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping, Optional, Union

from banexg.utils.numbers import equal_nearly


def _now_ms() -> int:
    return time.time_ns() // 1_000_000


@dataclass
class Asset:
    code: str = ""
    free: float = 0.0
    used: float = 0.0
    total: float = 0.0
    debt: float = 0.0
    upol: float = 0.0

    def is_empty(self) -> bool:
        """Whether nothing is held and nothing is owed."""
        return equal_nearly(self.used + self.free, 0) and equal_nearly(self.debt, 0)


@dataclass
class Balances:
    timestamp: int = 0
    free: dict[str, float] = field(default_factory=dict)
    used: dict[str, float] = field(default_factory=dict)
    total: dict[str, float] = field(default_factory=dict)
    assets: dict[str, Asset] = field(default_factory=dict)
    isolated_assets: dict[str, dict[str, Asset]] = field(default_factory=dict)
    info: Any = None

    def fill_totals(self) -> "Balances":
        """Fill the timestamp and the free/used/total maps from the assets."""
        if self.timestamp == 0:
            self.timestamp = _now_ms()
        for code, asset in self.assets.items():
            if asset.total == 0:
                asset.total = asset.used + asset.free
            self.free[code] = asset.free
            self.used[code] = asset.used
            self.total[code] = asset.total
        return self


@dataclass
class Kline:
    time: int = 0
    open: float = 0.0
    high: float = 0.0
    low: float = 0.0
    close: float = 0.0
    volume: float = 0.0
    info: float = 0.0

    def clone(self) -> "Kline":
        """A plain copy of the bar's values."""
        return Kline(
            time=self.time,
            open=self.open,
            high=self.high,
            low=self.low,
            close=self.close,
            volume=self.volume,
            info=self.info,
        )


@dataclass
class PairTFKline(Kline):
    symbol: str = ""
    time_frame: str = ""


@dataclass
class Ticker:
    symbol: str = ""
    timestamp: int = 0
    bid: float = 0.0
    bid_volume: float = 0.0
    ask: float = 0.0
    ask_volume: float = 0.0
    high: float = 0.0
    low: float = 0.0
    open: float = 0.0
    close: float = 0.0
    last: float = 0.0
    change: float = 0.0
    percentage: float = 0.0
    average: float = 0.0
    vwap: float = 0.0
    base_volume: float = 0.0
    quote_volume: float = 0.0
    previous_close: float = 0.0
    mark_price: float = 0.0
    index_price: float = 0.0
    info: Any = None


@dataclass
class Fee:
    is_maker: bool = False
    currency: str = ""
    cost: float = 0.0
    rate: float = 0.0


@dataclass
class Trade:
    id: str = ""
    symbol: str = ""
    side: str = ""  # buy/sell
    type: str = ""  # market/limit
    amount: float = 0.0
    price: float = 0.0
    cost: float = 0.0
    order: str = ""
    timestamp: int = 0
    maker: bool = False
    fee: Optional[Fee] = None
    info: Any = None


@dataclass
class MyTrade(Trade):
    filled: float = 0.0  # cumulative filled amount of the whole order
    client_id: str = ""
    average: float = 0.0
    state: str = ""
    pos_side: str = ""  # long/short
    reduce_only: bool = False


@dataclass
class Order:
    info: Any = None
    id: str = ""
    client_order_id: str = ""
    datetime: str = ""
    timestamp: int = 0
    last_trade_timestamp: int = 0
    last_update_timestamp: int = 0
    status: str = ""
    symbol: str = ""
    type: str = ""
    time_in_force: str = ""
    position_side: str = ""
    side: str = ""
    price: float = 0.0
    average: float = 0.0
    amount: float = 0.0
    filled: float = 0.0
    remaining: float = 0.0
    trigger_price: float = 0.0
    stop_price: float = 0.0
    take_profit_price: float = 0.0
    stop_loss_price: float = 0.0
    cost: float = 0.0
    post_only: bool = False
    reduce_only: bool = False
    trades: list[Trade] = field(default_factory=list)
    fee: Optional[Fee] = None


@dataclass
class Position:
    id: str = ""
    symbol: str = ""
    timestamp: int = 0
    isolated: bool = False
    hedged: bool = False
    side: str = ""  # long/short
    contracts: float = 0.0
    contract_size: float = 0.0
    entry_price: float = 0.0
    mark_price: float = 0.0
    notional: float = 0.0
    leverage: int = 0
    collateral: float = 0.0
    initial_margin: float = 0.0
    maint_margin: float = 0.0
    initial_margin_pct: float = 0.0
    maint_margin_pct: float = 0.0
    unrealized_pnl: float = 0.0
    liquidation_price: float = 0.0
    margin_mode: str = ""  # cross/isolated
    margin_ratio: float = 0.0
    percentage: float = 0.0
    info: Any = None


@dataclass
class Income:
    symbol: str = ""
    income_type: str = ""
    income: float = 0.0
    asset: str = ""
    info: str = ""
    time: int = 0
    tran_id: str = ""
    trade_id: str = ""


@dataclass
class FundingRate:
    symbol: str = ""
    funding_rate: float = 0.0
    timestamp: int = 0
    info: Any = None


@dataclass
class FundingRateCur:
    symbol: str = ""
    funding_rate: float = 0.0
    timestamp: int = 0
    mark_price: float = 0.0
    index_price: float = 0.0
    interest_rate: float = 0.0
    estimated_settle_price: float = 0.0
    funding_timestamp: int = 0
    next_funding_rate: float = 0.0
    next_funding_timestamp: int = 0
    prev_funding_rate: float = 0.0
    prev_funding_timestamp: int = 0
    interval: str = ""
    info: Any = None


@dataclass
class LastPrice:
    symbol: str = ""
    timestamp: int = 0
    price: float = 0.0
    info: Any = None


@dataclass
class AccountConfig:
    symbol: str = ""
    leverage: int = 0


@dataclass
class WsLog:
    name: str = ""
    time_ms: int = 0
    content: str = ""


def ensure_arr_str(text: str) -> str:
    """Wrap JSON text in brackets unless it already is an array; empty gives "[]"."""
    text = text.strip()
    if not text:
        return "[]"
    if text.startswith("["):
        return text
    return "[" + text + "]"


def format_headers(headers: Mapping[str, Union[str, Iterable[str]]]) -> dict[str, str]:
    """HTTP headers as one text value per name, multiple values joined by commas."""
    result = {}
    for key, values in headers.items():
        if isinstance(values, str):
            result[key] = values
        else:
            result[key] = ",".join(values)
    return result