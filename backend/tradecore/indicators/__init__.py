"""Technical indicators (pure math, no I/O)."""

from tradecore.indicators.moving_average import MovingAverageWindows
from tradecore.indicators.rsi import RS_INFINITE, RSI_DIGITS, RsiAccumulator, Trend

Indicator = MovingAverageWindows | RsiAccumulator

__all__ = [
    "Indicator",
    "MovingAverageWindows",
    "RsiAccumulator",
    "RS_INFINITE",
    "RSI_DIGITS",
    "Trend",
]
