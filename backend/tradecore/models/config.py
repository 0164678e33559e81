"""Strategy configuration models."""

from __future__ import annotations

from decimal import Decimal
from typing import Literal

from pydantic import BaseModel, Field, model_validator

DEFAULT_QTY = Decimal("0.001")
DEFAULT_PRICE_SCALE = 4


class BracketConfig(BaseModel):
    """Take-profit / stop-loss offsets from the reference price.

    ``absolute`` offsets are price units; ``percent`` offsets are fractions
    of the reference price (0.01 = 1%).
    """

    mode: Literal["absolute", "percent"] = "absolute"
    tp_offset: Decimal = Decimal("2.0")
    sl_offset: Decimal = Decimal("0.5")

    @model_validator(mode="after")
    def _validate(self):
        if self.tp_offset <= 0 or self.sl_offset <= 0:
            raise ValueError("bracket offsets must be positive")
        return self


class OrderSettings(BaseModel):
    """Order construction parameters shared by all strategies."""

    qty: Decimal = DEFAULT_QTY
    price_scale: int = DEFAULT_PRICE_SCALE

    @model_validator(mode="after")
    def _validate(self):
        if self.qty <= 0:
            raise ValueError("qty must be positive")
        if self.price_scale < 0:
            raise ValueError("price_scale must be >= 0")
        return self


class RsiReversionConfig(BaseModel):
    """Mean-reversion on RSI level crossings."""

    period: int = 14
    oversold: Decimal = Decimal("30")
    overbought: Decimal = Decimal("70")
    orders: OrderSettings = Field(default_factory=OrderSettings)

    @model_validator(mode="after")
    def _validate(self):
        if self.period < 1:
            raise ValueError("period must be >= 1")
        if not (0 <= self.oversold < self.overbought <= 100):
            raise ValueError("expected 0 <= oversold < overbought <= 100")
        return self


class RsiTrendConfig(BaseModel):
    """Trend following on the RS ratio."""

    period: int = 14
    upper_band: Decimal = Decimal("1.05")
    lower_band: Decimal = Decimal("0.95")
    orders: OrderSettings = Field(default_factory=OrderSettings)
    bracket: BracketConfig | None = None

    @model_validator(mode="after")
    def _validate(self):
        if self.period < 1:
            raise ValueError("period must be >= 1")
        if self.lower_band >= self.upper_band:
            raise ValueError("lower_band must be below upper_band")
        return self


class RoundtripConfig(BaseModel):
    """Periodic buy followed by a sell on the next tick."""

    buy_period_seconds: float = 5.0
    orders: OrderSettings = Field(default_factory=OrderSettings)


class SmaCrossoverConfig(BaseModel):
    """Short/long simple moving average comparison."""

    short_window: int = 20
    long_window: int = 100
    flip_on_reversal: bool = False
    cooldown_seconds: float = 0.0
    average_scale: int = 8
    orders: OrderSettings = Field(default_factory=OrderSettings)
    bracket: BracketConfig | None = Field(
        default_factory=lambda: BracketConfig(
            mode="absolute", tp_offset=Decimal("2.0"), sl_offset=Decimal("0.5")
        )
    )

    @model_validator(mode="after")
    def _validate(self):
        if self.short_window < 1 or self.short_window >= self.long_window:
            raise ValueError("expected 1 <= short_window < long_window")
        if self.cooldown_seconds < 0:
            raise ValueError("cooldown_seconds must be >= 0")
        return self
