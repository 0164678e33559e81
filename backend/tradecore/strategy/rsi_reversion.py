"""RSI mean-reversion strategy.

- LONG: RSI moves up and ends at or above the oversold level while flat
- SHORT: RSI moves down and ends at or below the overbought level while flat

Open positions are never closed by this strategy; there is no exit rule.
"""

import logging

from tradecore.indicators import RsiAccumulator
from tradecore.models import (
    OrderRequest,
    OrderType,
    Position,
    RsiReversionConfig,
    Tick,
    TradeAction,
)
from tradecore.orders import OrderBuilder
from tradecore.state import SymbolState
from tradecore.strategy.protocol import BaseStrategy
from tradecore.strategy.registry import StrategyKind, register_strategy

logger = logging.getLogger(__name__)


@register_strategy(StrategyKind.RSI_REVERSION)
class RsiReversionStrategy(BaseStrategy):
    """Open on RSI crossings of the oversold/overbought levels."""

    def __init__(
        self,
        bot_id: str = "",
        config: RsiReversionConfig | None = None,
        builder: OrderBuilder | None = None,
    ):
        self.config = config or RsiReversionConfig()
        super().__init__(builder or OrderBuilder(bot_id, self.config.orders))

    @property
    def name(self) -> str:
        return StrategyKind.RSI_REVERSION.value

    def new_indicator(self) -> RsiAccumulator:
        return RsiAccumulator(period=self.config.period)

    def decide(self, state: SymbolState, tick: Tick, now: float) -> list[TradeAction]:
        if state.position != Position.NONE:
            return []

        rsi_state: RsiAccumulator = state.indicator
        prev, rsi = rsi_state.previous_rsi, rsi_state.rsi

        if prev < rsi and rsi >= self.config.oversold:
            return [TradeAction.OPEN_LONG]
        if prev > rsi and rsi <= self.config.overbought:
            return [TradeAction.OPEN_SHORT]
        return []

    def build_order(self, state: SymbolState, tick: Tick, action: TradeAction) -> OrderRequest:
        rsi_state: RsiAccumulator = state.indicator
        if action == TradeAction.OPEN_LONG:
            reason = f"rsi_cross_up_{self.config.oversold}_rsi={rsi_state.rsi}"
        else:
            reason = f"rsi_cross_down_{self.config.overbought}_rsi={rsi_state.rsi}"
        return self.builder.build(tick, action, reason, order_type=OrderType.MARKET)

    def on_success(self, state: SymbolState, action: TradeAction, now: float) -> None:
        if action == TradeAction.OPEN_LONG:
            state.set_position(Position.LONG)
        elif action == TradeAction.OPEN_SHORT:
            state.set_position(Position.SHORT)
        state.mark_action(now)
