"""SMA crossover strategy.

- flat and short SMA > long SMA -> OPEN_LONG
- flat and short SMA < long SMA -> OPEN_SHORT
- with ``flip_on_reversal``: LONG and short < long -> CLOSE_LONG, OPEN_SHORT
  (SHORT mirrored); both orders go out against the same tick, close first

Opening orders are LIMIT orders with TP/SL brackets. An optional
cooldown suppresses decisions for a while after each successful action.
"""

import logging

from tradecore.indicators import MovingAverageWindows
from tradecore.models import (
    OrderRequest,
    OrderType,
    Position,
    SmaCrossoverConfig,
    Tick,
    TradeAction,
)
from tradecore.orders import OrderBuilder
from tradecore.state import SymbolState
from tradecore.strategy.protocol import BaseStrategy
from tradecore.strategy.registry import StrategyKind, register_strategy

logger = logging.getLogger(__name__)

_TRANSITIONS = {
    TradeAction.OPEN_LONG: Position.LONG,
    TradeAction.OPEN_SHORT: Position.SHORT,
    TradeAction.CLOSE_LONG: Position.NONE,
    TradeAction.CLOSE_SHORT: Position.NONE,
}


@register_strategy(StrategyKind.SMA_CROSSOVER)
class SmaCrossoverStrategy(BaseStrategy):
    """Compare a short and a long simple moving average."""

    def __init__(
        self,
        bot_id: str = "",
        config: SmaCrossoverConfig | None = None,
        builder: OrderBuilder | None = None,
    ):
        self.config = config or SmaCrossoverConfig()
        super().__init__(builder or OrderBuilder(bot_id, self.config.orders))

    @property
    def name(self) -> str:
        return StrategyKind.SMA_CROSSOVER.value

    def new_indicator(self) -> MovingAverageWindows:
        return MovingAverageWindows(
            self.config.short_window,
            self.config.long_window,
            scale=self.config.average_scale,
        )

    def decide(self, state: SymbolState, tick: Tick, now: float) -> list[TradeAction]:
        if not state.cooldown_done(now, self.config.cooldown_seconds):
            return []

        windows: MovingAverageWindows = state.indicator
        short_avg = windows.short_average()
        long_avg = windows.long_average()

        if state.position == Position.NONE:
            if short_avg > long_avg:
                return [TradeAction.OPEN_LONG]
            if short_avg < long_avg:
                return [TradeAction.OPEN_SHORT]
            return []

        if not self.config.flip_on_reversal:
            return []
        if state.position == Position.LONG and short_avg < long_avg:
            return [TradeAction.CLOSE_LONG, TradeAction.OPEN_SHORT]
        if state.position == Position.SHORT and short_avg > long_avg:
            return [TradeAction.CLOSE_SHORT, TradeAction.OPEN_LONG]
        return []

    def build_order(self, state: SymbolState, tick: Tick, action: TradeAction) -> OrderRequest:
        reason = action.value.lower()
        if action.is_close:
            return self.builder.build(tick, action, reason, order_type=OrderType.MARKET)
        return self.builder.build(
            tick,
            action,
            reason,
            order_type=OrderType.LIMIT,
            bracket=self.config.bracket,
            with_limit_price=True,
        )

    def on_success(self, state: SymbolState, action: TradeAction, now: float) -> None:
        target = _TRANSITIONS.get(action)
        if target is not None:
            state.set_position(target)
        state.mark_action(now)
