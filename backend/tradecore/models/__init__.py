"""Data models."""

from tradecore.models.tick import Tick
from tradecore.models.order import (
    OrderRequest,
    OrderType,
    Position,
    Side,
    TradeAction,
)
from tradecore.models.config import (
    BracketConfig,
    OrderSettings,
    RoundtripConfig,
    RsiReversionConfig,
    RsiTrendConfig,
    SmaCrossoverConfig,
    DEFAULT_PRICE_SCALE,
    DEFAULT_QTY,
)

__all__ = [
    "Tick",
    "OrderRequest",
    "OrderType",
    "Position",
    "Side",
    "TradeAction",
    "BracketConfig",
    "OrderSettings",
    "RoundtripConfig",
    "RsiReversionConfig",
    "RsiTrendConfig",
    "SmaCrossoverConfig",
    "DEFAULT_PRICE_SCALE",
    "DEFAULT_QTY",
]
