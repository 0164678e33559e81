"""Order construction with fixed-point price rounding.

Rounding rules (price scale is per strategy, 4 by default):
- take-profit: ROUND_HALF_UP
- stop-loss: ROUND_HALF_UP for BUY, ROUND_UP for SELL
- limit price: ROUND_DOWN (truncated)
- diagnostic last price in ``reason``: ROUND_HALF_UP
"""

from __future__ import annotations

from decimal import ROUND_DOWN, ROUND_HALF_UP, ROUND_UP, Decimal

from tradecore.models import (
    BracketConfig,
    OrderRequest,
    OrderSettings,
    OrderType,
    Side,
    Tick,
    TradeAction,
)


def quantize(value: Decimal, scale: int, rounding: str) -> Decimal:
    """Round ``value`` to ``scale`` fractional digits."""
    return value.quantize(Decimal(1).scaleb(-scale), rounding=rounding)


def bracket_prices(
    reference: Decimal,
    side: Side,
    bracket: BracketConfig,
    scale: int,
) -> tuple[Decimal, Decimal]:
    """Compute (tp, sl) mirrored by side.

    BUY: TP above, SL below. SELL: TP below, SL above.
    """
    if bracket.mode == "percent":
        tp_delta = reference * bracket.tp_offset
        sl_delta = reference * bracket.sl_offset
    else:
        tp_delta = bracket.tp_offset
        sl_delta = bracket.sl_offset

    if side == Side.BUY:
        tp = reference + tp_delta
        sl = reference - sl_delta
        sl_rounding = ROUND_HALF_UP
    else:
        tp = reference - tp_delta
        sl = reference + sl_delta
        sl_rounding = ROUND_UP

    return quantize(tp, scale, ROUND_HALF_UP), quantize(sl, scale, sl_rounding)


class OrderBuilder:
    """Build OrderRequest values for one bot.

    Args:
        bot_id: Identifier stamped on every order.
        settings: Quantity and price scale.
    """

    def __init__(self, bot_id: str, settings: OrderSettings | None = None):
        self.bot_id = bot_id
        self.settings = settings or OrderSettings()

    @property
    def scale(self) -> int:
        return self.settings.price_scale

    def rounded_last(self, tick: Tick) -> Decimal:
        last = tick.last if tick.last is not None else Decimal("0")
        return quantize(last, self.scale, ROUND_HALF_UP)

    def limit_price(self, tick: Tick) -> Decimal:
        last = tick.last if tick.last is not None else Decimal("0")
        return quantize(last, self.scale, ROUND_DOWN)

    def build(
        self,
        tick: Tick,
        action: TradeAction,
        reason: str,
        order_type: OrderType = OrderType.MARKET,
        bracket: BracketConfig | None = None,
        with_limit_price: bool = False,
    ) -> OrderRequest:
        """Build an order for ``action`` against ``tick``.

        Args:
            tick: Tick the decision was made on (reference price).
            action: Trade action; determines the side.
            reason: Diagnostic prefix; the rounded last price is appended.
            order_type: MARKET or LIMIT.
            bracket: Optional TP/SL offsets. Ignored for closing actions.
            with_limit_price: Attach a truncated limit price.

        Returns:
            A new OrderRequest with a fresh id.
        """
        side = action.side
        last = tick.last if tick.last is not None else Decimal("0")

        tp = sl = None
        if bracket is not None and not action.is_close:
            tp, sl = bracket_prices(last, side, bracket, self.scale)

        limit_price = self.limit_price(tick) if with_limit_price else None

        return OrderRequest(
            symbol=tick.symbol,
            side=side,
            type=order_type,
            qty=self.settings.qty,
            limit_price=limit_price,
            tp=tp,
            sl=sl,
            reason=f"{reason}_@price_{self.rounded_last(tick)}",
            exchange=tick.exchange,
            bot_id=self.bot_id,
        )
