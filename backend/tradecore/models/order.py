"""Order request and trading enums."""

from decimal import Decimal
from enum import Enum
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field


class Side(str, Enum):
    """Order side."""

    BUY = "BUY"
    SELL = "SELL"


class OrderType(str, Enum):
    """Order type."""

    MARKET = "MARKET"
    LIMIT = "LIMIT"


class Position(str, Enum):
    """Current stance of a symbol."""

    NONE = "NONE"
    LONG = "LONG"
    SHORT = "SHORT"


class TradeAction(str, Enum):
    """Action chosen by a strategy for one tick."""

    OPEN_LONG = "OPEN_LONG"
    OPEN_SHORT = "OPEN_SHORT"
    CLOSE_LONG = "CLOSE_LONG"
    CLOSE_SHORT = "CLOSE_SHORT"
    BUY = "BUY"
    SELL = "SELL"

    @property
    def side(self) -> Side:
        """Order side that carries out this action."""
        if self in (TradeAction.OPEN_LONG, TradeAction.CLOSE_SHORT, TradeAction.BUY):
            return Side.BUY
        return Side.SELL

    @property
    def is_close(self) -> bool:
        return self in (TradeAction.CLOSE_LONG, TradeAction.CLOSE_SHORT)


def _new_order_id() -> str:
    return uuid4().hex


class OrderRequest(BaseModel):
    """Fully specified order sent to the execution endpoint.

    Immutable: a new request (with a new id) is built for every submission.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=_new_order_id)
    symbol: str
    side: Side
    type: OrderType
    qty: Decimal
    limit_price: Decimal | None = None
    tp: Decimal | None = None
    sl: Decimal | None = None
    reason: str = ""
    exchange: str = ""
    bot_id: str = ""

    @property
    def has_bracket(self) -> bool:
        """Whether take-profit and stop-loss levels are attached."""
        return self.tp is not None and self.sl is not None
