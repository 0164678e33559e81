"""In-memory metrics sink keyed by symbol.

Meters:
- ticks_received, orders_submitted, orders_failed (counters)
- order_processing_duration (timer, seconds)
- tick_price (distribution summary)
- orders_inflight (gauge, global)

Every meter guards its value with a lock so a scraper running in
another thread reads consistent values while the dispatcher updates
them.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Callable, TypeVar


@dataclass
class Counter:
    """Monotonic counter."""

    name: str
    _value: int = 0
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    def increment(self, amount: int = 1) -> None:
        with self._lock:
            self._value += amount

    @property
    def value(self) -> int:
        with self._lock:
            return self._value


@dataclass
class Summary:
    """Count/total/min/max of recorded values."""

    name: str
    count: int = 0
    total: float = 0.0
    min: float | None = None
    max: float | None = None
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    def record(self, value: float) -> None:
        with self._lock:
            self.count += 1
            self.total += value
            if self.min is None or value < self.min:
                self.min = value
            if self.max is None or value > self.max:
                self.max = value

    @property
    def mean(self) -> float:
        with self._lock:
            return self.total / self.count if self.count else 0.0

    def to_dict(self) -> dict:
        with self._lock:
            return {
                "count": self.count,
                "total": self.total,
                "min": self.min,
                "max": self.max,
            }


# Timer is a summary of elapsed seconds
Timer = Summary


@dataclass
class Gauge:
    """Up/down gauge (used for inflight orders)."""

    name: str
    _value: int = 0
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    def increment(self) -> int:
        with self._lock:
            self._value += 1
            return self._value

    def decrement(self) -> int:
        with self._lock:
            self._value -= 1
            return self._value

    @property
    def value(self) -> int:
        with self._lock:
            return self._value


M = TypeVar("M")


class MetricsSink:
    """Named per-symbol meters, created on first use."""

    TICKS_RECEIVED = "market.ticks.received"
    ORDERS_SUBMITTED = "market.orders.submitted"
    ORDERS_FAILED = "market.orders.failed"
    ORDER_DURATION = "market.order.processing.duration"
    TICK_PRICE = "market.tick.price"
    ORDERS_INFLIGHT = "market.orders.inflight"

    def __init__(self):
        self._ticks_received: dict[str, Counter] = {}
        self._orders_submitted: dict[str, Counter] = {}
        self._orders_failed: dict[str, Counter] = {}
        self._order_durations: dict[str, Timer] = {}
        self._tick_prices: dict[str, Summary] = {}
        self._lock = threading.Lock()
        self.inflight = Gauge(self.ORDERS_INFLIGHT)

    def _meter(self, table: dict[str, M], symbol: str, factory: Callable[[str], M]) -> M:
        meter = table.get(symbol)
        if meter is None:
            with self._lock:
                meter = table.setdefault(symbol, factory(symbol))
        return meter

    def ticks_received(self, symbol: str) -> Counter:
        return self._meter(self._ticks_received, symbol, lambda s: Counter(self.TICKS_RECEIVED))

    def orders_submitted(self, symbol: str) -> Counter:
        return self._meter(self._orders_submitted, symbol, lambda s: Counter(self.ORDERS_SUBMITTED))

    def orders_failed(self, symbol: str) -> Counter:
        return self._meter(self._orders_failed, symbol, lambda s: Counter(self.ORDERS_FAILED))

    def order_processing_timer(self, symbol: str) -> Timer:
        return self._meter(self._order_durations, symbol, lambda s: Timer(self.ORDER_DURATION))

    def tick_price(self, symbol: str) -> Summary:
        return self._meter(self._tick_prices, symbol, lambda s: Summary(self.TICK_PRICE))

    def snapshot(self) -> dict:
        """Plain-dict view of every meter, keyed by meter name then symbol."""
        with self._lock:
            return {
                self.TICKS_RECEIVED: {s: c.value for s, c in self._ticks_received.items()},
                self.ORDERS_SUBMITTED: {s: c.value for s, c in self._orders_submitted.items()},
                self.ORDERS_FAILED: {s: c.value for s, c in self._orders_failed.items()},
                self.ORDER_DURATION: {s: t.to_dict() for s, t in self._order_durations.items()},
                self.TICK_PRICE: {s: p.to_dict() for s, p in self._tick_prices.items()},
                self.ORDERS_INFLIGHT: self.inflight.value,
            }
