"""Incremental short/long simple moving averages."""

from collections import deque
from decimal import ROUND_HALF_UP, Decimal


class MovingAverageWindows:
    """Two bounded price windows with running sums.

    Each sum is adjusted by exactly the price that enters or leaves its
    window, so ``sum(window) == running_sum`` holds after every update.
    """

    def __init__(self, short_size: int, long_size: int, scale: int = 8):
        if short_size < 1 or short_size >= long_size:
            raise ValueError(
                f"expected 1 <= short_size < long_size, got {short_size}/{long_size}"
            )
        self.short_size = short_size
        self.long_size = long_size
        self.scale = scale

        self._short: deque[Decimal] = deque()
        self._long: deque[Decimal] = deque()
        self._short_sum = Decimal("0")
        self._long_sum = Decimal("0")
        self._quantum = Decimal(1).scaleb(-scale)

    def update(self, price: Decimal) -> None:
        """Push a price into both windows, evicting the oldest if full."""
        self._short.append(price)
        self._short_sum += price
        if len(self._short) > self.short_size:
            self._short_sum -= self._short.popleft()

        self._long.append(price)
        self._long_sum += price
        if len(self._long) > self.long_size:
            self._long_sum -= self._long.popleft()

    def ready(self) -> bool:
        return len(self._short) >= self.short_size and len(self._long) >= self.long_size

    def short_average(self) -> Decimal:
        return self._average(self._short_sum, len(self._short))

    def long_average(self) -> Decimal:
        return self._average(self._long_sum, len(self._long))

    def _average(self, total: Decimal, count: int) -> Decimal:
        if count == 0:
            return Decimal("0")
        return (total / count).quantize(self._quantum, rounding=ROUND_HALF_UP)

    @property
    def short_sum(self) -> Decimal:
        return self._short_sum

    @property
    def long_sum(self) -> Decimal:
        return self._long_sum

    @property
    def short_window(self) -> tuple[Decimal, ...]:
        return tuple(self._short)

    @property
    def long_window(self) -> tuple[Decimal, ...]:
        return tuple(self._long)

    def snapshot(self) -> dict:
        """Indicator values for logs and diagnostics."""
        return {
            "ready": self.ready(),
            "short_avg": self.short_average(),
            "long_avg": self.long_average(),
            "short_len": len(self._short),
            "long_len": len(self._long),
        }
