"""Wilder-smoothed RSI with RS-based trend classification.

Lifecycle:
- seeding: the first ``period`` price changes are summed; averages are
  not usable yet. Zero changes before the first move are not counted,
  so a feed that never moves never seeds.
- smoothed: every later change is folded in with Wilder's smoothing,
  ``avg = (avg * (period - 1) + sample) / period``.

The accumulator never returns to seeding once smoothed.
"""

from decimal import ROUND_HALF_UP, Decimal
from enum import Enum

# Fractional digits used for every division
RSI_DIGITS = 10
_QUANTUM = Decimal(1).scaleb(-RSI_DIGITS)

_HUNDRED = Decimal("100")
_NEUTRAL_RSI = Decimal("50")

# RS value used when the average loss is zero
RS_INFINITE = Decimal("Infinity")


class Trend(str, Enum):
    """Trend classification derived from the RS ratio."""

    UP = "UP"
    DOWN = "DOWN"
    FLAT = "FLAT"


def _div(a: Decimal, b: Decimal) -> Decimal:
    return (a / b).quantize(_QUANTUM, rounding=ROUND_HALF_UP)


class RsiAccumulator:
    """Incremental RSI for one symbol.

    Args:
        period: Number of price changes used to seed the averages.
        upper_band: RS above this classifies the trend as UP.
        lower_band: RS below this classifies the trend as DOWN.
    """

    def __init__(
        self,
        period: int = 14,
        upper_band: Decimal = Decimal("1.05"),
        lower_band: Decimal = Decimal("0.95"),
    ):
        if period < 1:
            raise ValueError(f"period must be >= 1, got {period}")
        if lower_band >= upper_band:
            raise ValueError("lower_band must be below upper_band")
        self.period = period
        self.upper_band = upper_band
        self.lower_band = lower_band

        self.seeded = False
        self.seed_count = 0
        self.prev_price: Decimal | None = None
        self.avg_gain = Decimal("0")
        self.avg_loss = Decimal("0")
        self.previous_rsi = _NEUTRAL_RSI
        self.rsi = _NEUTRAL_RSI
        self.rs: Decimal | None = None

    def update(self, price: Decimal) -> None:
        """Fold one price into the averages."""
        if self.prev_price is None:
            self.prev_price = price
            return

        change = price - self.prev_price
        gain = change if change > 0 else Decimal("0")
        loss = -change if change < 0 else Decimal("0")
        self.prev_price = price

        if not self.seeded:
            self.avg_gain += gain
            self.avg_loss += loss
            # Changes count only once the feed has moved at all
            if self.avg_gain + self.avg_loss > 0:
                self.seed_count += 1
            if self.seed_count == self.period:
                self.avg_gain = _div(self.avg_gain, Decimal(self.period))
                self.avg_loss = _div(self.avg_loss, Decimal(self.period))
                self.seeded = True
                self._compute_rsi()
            return

        weight = Decimal(self.period - 1)
        self.avg_gain = _div(self.avg_gain * weight + gain, Decimal(self.period))
        self.avg_loss = _div(self.avg_loss * weight + loss, Decimal(self.period))
        self._compute_rsi()

    def _compute_rsi(self) -> None:
        self.previous_rsi = self.rsi
        if self.avg_loss == 0:
            self.rs = RS_INFINITE
            self.rsi = _HUNDRED
            return
        self.rs = _div(self.avg_gain, self.avg_loss)
        self.rsi = _HUNDRED - _div(_HUNDRED, Decimal("1") + self.rs)

    def ready(self) -> bool:
        return self.seeded

    @property
    def trend(self) -> Trend:
        """UP/DOWN outside the bands, FLAT between them or before seeding."""
        if self.rs is None:
            return Trend.FLAT
        if self.rs > self.upper_band:
            return Trend.UP
        if self.rs < self.lower_band:
            return Trend.DOWN
        return Trend.FLAT

    def is_uptrend(self) -> bool:
        return self.trend is Trend.UP

    def is_downtrend(self) -> bool:
        return self.trend is Trend.DOWN

    def snapshot(self) -> dict:
        """Indicator values for logs and diagnostics."""
        return {
            "ready": self.seeded,
            "rsi": self.rsi,
            "previous_rsi": self.previous_rsi,
            "rs": self.rs,
            "trend": self.trend.value,
            "avg_gain": self.avg_gain,
            "avg_loss": self.avg_loss,
        }
