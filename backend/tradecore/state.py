"""Per-symbol state store and position tracker.

Single-writer discipline: the tick dispatcher processes one tick at a
time and is the only code that mutates a SymbolState, so no locking is
needed. Any future per-symbol parallelization must keep exactly one
writer per symbol and preserve arrival order within a symbol.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Iterator

from tradecore.indicators import Indicator
from tradecore.models import Position

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class SymbolState:
    """Indicator state, position and timers for one symbol.

    Timers are monotonic seconds supplied by the caller's clock.
    """

    symbol: str
    indicator: Indicator | None = None
    position: Position = Position.NONE

    # Cooldown between actions
    last_action_at: float | None = None

    # Round-trip: last successful buy and "sell on next tick" flag
    last_buy_at: float | None = None
    waiting_to_sell: bool = False

    def ready(self) -> bool:
        """Whether the indicator (if any) has enough data to signal."""
        return self.indicator is None or self.indicator.ready()

    def set_position(self, position: Position) -> None:
        if position is not self.position:
            logger.info(f"{self.symbol} position {self.position.value} -> {position.value}")
        self.position = position

    def cooldown_done(self, now: float, cooldown: float) -> bool:
        if cooldown <= 0 or self.last_action_at is None:
            return True
        return now - self.last_action_at >= cooldown

    def mark_action(self, now: float) -> None:
        self.last_action_at = now


IndicatorFactory = Callable[[], "Indicator | None"]


@dataclass
class SymbolStateStore:
    """Keyed table of SymbolState, created lazily on first tick."""

    _states: dict[str, SymbolState] = field(default_factory=dict)

    def get_or_create(self, symbol: str, factory: IndicatorFactory) -> SymbolState:
        """Return the state for ``symbol``, creating it at most once."""
        state = self._states.get(symbol)
        if state is None:
            state = SymbolState(symbol=symbol, indicator=factory())
            self._states[symbol] = state
            logger.debug(f"Created state for {symbol}")
        return state

    def get(self, symbol: str) -> SymbolState | None:
        return self._states.get(symbol)

    @property
    def symbols(self) -> list[str]:
        return sorted(self._states.keys())

    def __len__(self) -> int:
        return len(self._states)

    def __iter__(self) -> Iterator[SymbolState]:
        return iter(self._states.values())

    def __contains__(self, symbol: str) -> bool:
        return symbol in self._states
