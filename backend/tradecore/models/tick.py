"""Tick (market price observation) model."""

from datetime import datetime, timezone
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Tick(BaseModel):
    """One price observation for a symbol.

    ``last`` may be missing when the feed delivers a ticker without a
    traded price; such ticks are skipped by the dispatcher.
    """

    model_config = ConfigDict(frozen=True)

    symbol: str
    last: Decimal | None = None
    exchange: str = ""
    timestamp: datetime = Field(default_factory=_utcnow)

    @property
    def has_price(self) -> bool:
        return self.last is not None
