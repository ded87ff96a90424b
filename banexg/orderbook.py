"""Order book sides kept sorted by price, and the book holding both."""

from __future__ import annotations

import logging
import sys
import threading
from bisect import bisect_left
from dataclasses import dataclass, field
from typing import Any, Iterable, Optional, Sequence

from banexg.utils.misc import JsonNum, unmarshal

logger = logging.getLogger(__name__)

_UNLIMITED = sys.maxsize


def _to_float(text: str) -> float:
    try:
        return float(text)
    except ValueError:
        return 0.0


class OdBookSide:
    """One side of an order book; bids sorted descending, asks ascending."""

    def __init__(
        self,
        is_buy: bool,
        depth: int = _UNLIMITED,
        deltas: Iterable[Sequence[float]] = (),
    ) -> None:
        self.is_buy = is_buy
        self.depth = depth
        self.price: list[float] = []
        self.size: list[float] = []
        self.lock = threading.Lock()
        self.update(deltas)

    def __repr__(self) -> str:
        return (
            f"OdBookSide(is_buy={self.is_buy}, depth={self.depth}, "
            f"price={self.price}, size={self.size})"
        )

    def update(self, deltas: Iterable[Sequence[float]]) -> None:
        """Apply (price, size) changes and trim to the depth."""
        with self.lock:
            for price, size in deltas:
                self._set(price, size)
            if len(self.price) > self.depth:
                del self.price[self.depth:]
                del self.size[self.depth:]

    def set(self, price: float, size: float) -> None:
        """Set the size at a price; a size of zero or less removes the level."""
        with self.lock:
            self._set(price, size)

    def _index(self, price: float) -> int:
        if self.is_buy:
            return bisect_left(self.price, -price, key=lambda p: -p)
        return bisect_left(self.price, price)

    def _set(self, price: float, size: float) -> None:
        index = self._index(price)
        found = index < len(self.price) and self.price[index] == price
        if size > 0:
            if found:
                self.size[index] = size
            else:
                self.price.insert(index, price)
                self.size.insert(index, size)
        elif found:
            del self.price[index]
            del self.size[index]

    def sum_vol_to(self, price: float) -> tuple[float, float]:
        """Volume between the best price and price, and the rate of the way covered."""
        dirt = -1.0 if self.is_buy else 1.0
        with self.lock:
            if not self.price:
                return 0.0, 1.0
            vol_sum = 0.0
            first_price = self.price[0]
            last_price = 0.0
            for p, s in zip(self.price, self.size):
                last_price = p
                if (p - price) * dirt >= 0:
                    return vol_sum, 1.0
                vol_sum += s
        return vol_sum, abs(last_price - first_price) / abs(price - first_price)

    def level(self, i: int) -> tuple[float, float]:
        """Price and size at level i (from 0); zeros when there is no such level."""
        with self.lock:
            price = self.price[i] if len(self.price) > i else 0.0
            amount = self.size[i] if len(self.size) > i else 0.0
        return price, amount

    def avg_price(self, volume: float) -> tuple[float, float, float]:
        """Average fill price for volume, filled rate, and change rate of first to last."""
        with self.lock:
            prices, sizes = list(self.price), list(self.size)
        vol_sum = last_price = cost = 0.0
        for price, size in zip(prices, sizes):
            vol_sum += size
            last_price = price
            cost += size * price
            if vol_sum >= volume:
                break
        if vol_sum == 0:
            return 0.0, 0.0, 0.0
        price0 = prices[0]
        if vol_sum < volume:
            last_price = price0 + (last_price - price0) * volume / vol_sum
            chg_rate = abs(last_price - price0) / price0
            return price0 * 0.3 + last_price * 0.7, vol_sum / volume, chg_rate
        chg_rate = abs(last_price - price0) / price0
        return cost / vol_sum, 1.0, chg_rate


@dataclass
class OrderBook:
    symbol: str = ""
    timestamp: int = 0
    asks: Optional[OdBookSide] = None
    bids: Optional[OdBookSide] = None
    nonce: int = 0  # latest update id
    limit: int = 0
    cache: Optional[list[dict[str, str]]] = field(default=None)

    def __post_init__(self) -> None:
        depth = self.limit if self.limit > 0 else _UNLIMITED
        if self.asks is None:
            self.asks = OdBookSide(False, depth)
        if self.bids is None:
            self.bids = OdBookSide(True, depth)

    def set_side(self, text: str, is_buy: bool, replace: bool) -> None:
        """Apply a JSON list of [price, size] text pairs to one side."""
        try:
            rows: Any = unmarshal(text, JsonNum.DEFAULT)
            if not isinstance(rows, list) or not all(
                isinstance(row, list) and all(isinstance(v, str) for v in row) for row in rows
            ):
                raise ValueError("order book side must be a list of [price, size] strings")
        except ValueError as exc:
            logger.error("unmarshal od book side fail: %s", exc)
            return
        pairs = [
            (_to_float((row + ["", ""])[0]), _to_float((row + ["", ""])[1])) for row in rows
        ]
        side = self.bids if is_buy else self.asks
        if replace:
            with side.lock:
                side.price = [p for p, _ in pairs]
                side.size = [s for _, s in pairs]
        else:
            side.update(pairs)

    def reset(self) -> None:
        """Clear both sides, the nonce and the cache."""
        with self.asks.lock, self.bids.lock:
            self.nonce = 0
            self.bids.price = []
            self.bids.size = []
            self.asks.price = []
            self.asks.size = []
            self.cache = None

    def update(self, book: "OrderBook") -> None:
        """Take over the timestamp, nonce and levels of another book."""
        self.timestamp = book.timestamp
        self.nonce = book.nonce
        self.cache = None
        with self.asks.lock, self.bids.lock:
            self.asks.price = list(book.asks.price)
            self.asks.size = list(book.asks.size)
            self.bids.price = list(book.bids.price)
            self.bids.size = list(book.bids.size)