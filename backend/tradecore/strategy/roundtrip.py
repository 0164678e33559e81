"""Periodic round-trip strategy.

BUY every ``buy_period_seconds`` (the first tick for a symbol buys
immediately); after a successful BUY, the very next tick SELLs
regardless of price or elapsed time and disarms.
"""

import logging

from tradecore.models import (
    OrderRequest,
    OrderType,
    Position,
    RoundtripConfig,
    Tick,
    TradeAction,
)
from tradecore.orders import OrderBuilder
from tradecore.state import SymbolState
from tradecore.strategy.protocol import BaseStrategy
from tradecore.strategy.registry import StrategyKind, register_strategy

logger = logging.getLogger(__name__)


@register_strategy(StrategyKind.ROUNDTRIP)
class RoundtripStrategy(BaseStrategy):
    """Buy on a fixed cadence, sell on the next tick."""

    def __init__(
        self,
        bot_id: str = "",
        config: RoundtripConfig | None = None,
        builder: OrderBuilder | None = None,
    ):
        self.config = config or RoundtripConfig()
        super().__init__(builder or OrderBuilder(bot_id, self.config.orders))

    @property
    def name(self) -> str:
        return StrategyKind.ROUNDTRIP.value

    def decide(self, state: SymbolState, tick: Tick, now: float) -> list[TradeAction]:
        if state.waiting_to_sell:
            return [TradeAction.SELL]
        if state.last_buy_at is None or now - state.last_buy_at >= self.config.buy_period_seconds:
            return [TradeAction.BUY]
        return []

    def build_order(self, state: SymbolState, tick: Tick, action: TradeAction) -> OrderRequest:
        if action == TradeAction.SELL:
            reason = "sell_next_tick"
        else:
            reason = f"periodic_buy_{self.config.buy_period_seconds:g}s"
        return self.builder.build(tick, action, reason, order_type=OrderType.MARKET)

    def on_success(self, state: SymbolState, action: TradeAction, now: float) -> None:
        if action == TradeAction.BUY:
            state.last_buy_at = now
            state.waiting_to_sell = True
            state.set_position(Position.LONG)
        elif action == TradeAction.SELL:
            state.waiting_to_sell = False
            state.set_position(Position.NONE)
        state.mark_action(now)
