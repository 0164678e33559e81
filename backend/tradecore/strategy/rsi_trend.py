"""RSI trend-following strategy.

Trend comes from the RS ratio with fixed bands (default 1.05 / 0.95):
- UP and not LONG -> OPEN_LONG
- DOWN and not SHORT -> OPEN_SHORT
- FLAT or already aligned -> nothing

Orders are LIMIT orders priced at the last price truncated to the
price scale.
"""

import logging

from tradecore.indicators import RsiAccumulator, Trend
from tradecore.models import (
    OrderRequest,
    OrderType,
    Position,
    RsiTrendConfig,
    Tick,
    TradeAction,
)
from tradecore.orders import OrderBuilder
from tradecore.state import SymbolState
from tradecore.strategy.protocol import BaseStrategy
from tradecore.strategy.registry import StrategyKind, register_strategy

logger = logging.getLogger(__name__)


@register_strategy(StrategyKind.RSI_TREND)
class RsiTrendStrategy(BaseStrategy):
    """Follow the RS trend classification."""

    def __init__(
        self,
        bot_id: str = "",
        config: RsiTrendConfig | None = None,
        builder: OrderBuilder | None = None,
    ):
        self.config = config or RsiTrendConfig()
        super().__init__(builder or OrderBuilder(bot_id, self.config.orders))

    @property
    def name(self) -> str:
        return StrategyKind.RSI_TREND.value

    def new_indicator(self) -> RsiAccumulator:
        return RsiAccumulator(
            period=self.config.period,
            upper_band=self.config.upper_band,
            lower_band=self.config.lower_band,
        )

    def decide(self, state: SymbolState, tick: Tick, now: float) -> list[TradeAction]:
        trend = state.indicator.trend
        if trend is Trend.UP and state.position != Position.LONG:
            return [TradeAction.OPEN_LONG]
        if trend is Trend.DOWN and state.position != Position.SHORT:
            return [TradeAction.OPEN_SHORT]
        return []

    def build_order(self, state: SymbolState, tick: Tick, action: TradeAction) -> OrderRequest:
        rsi_state: RsiAccumulator = state.indicator
        direction = "up" if action == TradeAction.OPEN_LONG else "down"
        reason = (
            f"trend_{direction}_rs={rsi_state.rs}"
            f"_limit={self.builder.limit_price(tick)}"
        )
        return self.builder.build(
            tick,
            action,
            reason,
            order_type=OrderType.LIMIT,
            bracket=self.config.bracket,
            with_limit_price=True,
        )

    def on_success(self, state: SymbolState, action: TradeAction, now: float) -> None:
        if action == TradeAction.OPEN_LONG:
            state.set_position(Position.LONG)
        elif action == TradeAction.OPEN_SHORT:
            state.set_position(Position.SHORT)
        state.mark_action(now)
