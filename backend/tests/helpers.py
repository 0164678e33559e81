"""Test helpers shared across modules."""

from decimal import Decimal

from tradecore.models import Tick


def make_ticks(prices, symbol="BTCUSDT", exchange="binance") -> list[Tick]:
    """Build ticks for a list of prices (None = tick without price)."""
    return [
        Tick(
            symbol=symbol,
            last=Decimal(str(p)) if p is not None else None,
            exchange=exchange,
        )
        for p in prices
    ]


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds
