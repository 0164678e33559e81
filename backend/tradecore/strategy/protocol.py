"""Strategy protocol defining the interface all strategies implement.

A strategy is a pure decision function over (symbol state, tick, clock)
plus the position/timer transition it applies after a successful
submission. The dispatcher owns the state and the I/O.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from tradecore.indicators import Indicator
from tradecore.models import OrderRequest, Tick, TradeAction
from tradecore.orders import OrderBuilder
from tradecore.state import SymbolState


@runtime_checkable
class Strategy(Protocol):
    """Protocol that all trading strategies must satisfy."""

    @property
    def name(self) -> str:
        """Strategy identifier (e.g., 'sma_crossover')."""
        ...

    def new_indicator(self) -> Indicator | None:
        """Create indicator state for a newly seen symbol."""
        ...

    def decide(self, state: SymbolState, tick: Tick, now: float) -> list[TradeAction]:
        """Return the actions to submit for this tick, in order.

        An empty list means no action. Called after the tick's price
        has been folded into ``state.indicator``.
        """
        ...

    def build_order(self, state: SymbolState, tick: Tick, action: TradeAction) -> OrderRequest:
        """Build the order that carries out ``action``."""
        ...

    def on_success(self, state: SymbolState, action: TradeAction, now: float) -> None:
        """Apply the position/timer transition after a successful submission."""
        ...


class BaseStrategy:
    """Shared plumbing: order builder access and readiness gate."""

    def __init__(self, builder: OrderBuilder):
        self.builder = builder

    def new_indicator(self) -> Indicator | None:
        return None

    def evaluate(self, state: SymbolState, tick: Tick, now: float) -> list[TradeAction]:
        """Readiness-gated wrapper around ``decide``."""
        if tick.last is None or not state.ready():
            return []
        return self.decide(state, tick, now)

    def decide(self, state: SymbolState, tick: Tick, now: float) -> list[TradeAction]:
        raise NotImplementedError
