"""Order submission with timeout, bounded retry and inflight accounting.

Failures are absorbed: a submission that still fails after the last
retry is counted and logged, and the caller gets a failed
SubmissionResult instead of an exception.
"""

import asyncio
import logging
import random
import time
from dataclasses import dataclass
from typing import Awaitable, Callable

from tradebot.clients.execution import ExecutionPort
from tradebot.metrics import MetricsSink
from tradecore.models import OrderRequest

logger = logging.getLogger(__name__)

Sleep = Callable[[float], Awaitable[None]]


@dataclass(frozen=True)
class RetryPolicy:
    """Per-attempt timeout and exponential backoff between attempts.

    Attributes:
        timeout: Seconds allowed for one attempt.
        max_retries: Retries after the first attempt.
        base_delay: Backoff before the first retry (doubles each retry).
        max_backoff: Upper bound on any single backoff.
        jitter: Fraction of the backoff randomized (0 disables jitter).
    """

    timeout: float = 3.0
    max_retries: int = 3
    base_delay: float = 0.2
    max_backoff: float = 2.0
    jitter: float = 0.0

    @property
    def max_attempts(self) -> int:
        return self.max_retries + 1

    def backoff(self, retry: int, rng: random.Random | None = None) -> float:
        """Delay before retry number ``retry`` (0-based)."""
        delay = min(self.base_delay * (2 ** retry), self.max_backoff)
        if self.jitter > 0:
            rng = rng or random
            spread = delay * self.jitter
            delay = max(0.0, delay + rng.uniform(-spread, spread))
            delay = min(delay, self.max_backoff)
        return delay


@dataclass(frozen=True)
class SubmissionResult:
    """Outcome of one submission."""

    order: OrderRequest
    ok: bool
    attempts: int
    elapsed: float
    error: str | None = None


class SubmissionPipeline:
    """Send orders to an execution port.

    For every order: increments ``orders_submitted``, holds the inflight
    gauge for the duration of the call, records the processing duration
    on both success and failure, and increments ``orders_failed`` when all
    attempts fail.
    """

    def __init__(
        self,
        port: ExecutionPort,
        metrics: MetricsSink,
        policy: RetryPolicy | None = None,
        sleep: Sleep = asyncio.sleep,
    ):
        self.port = port
        self.metrics = metrics
        self.policy = policy or RetryPolicy()
        self._sleep = sleep

    @property
    def inflight(self) -> int:
        return self.metrics.inflight.value

    async def submit(self, order: OrderRequest) -> SubmissionResult:
        """Submit one order; never raises for order-level failures."""
        symbol = order.symbol
        logger.info(
            f"Submitting order {order.id} {symbol} {order.side.value} {order.type.value} "
            f"qty={order.qty} limit={order.limit_price} tp={order.tp} sl={order.sl} "
            f"(reason: {order.reason})"
        )

        self.metrics.orders_submitted(symbol).increment()
        self.metrics.inflight.increment()
        start = time.perf_counter()
        try:
            attempts, error = await self._attempt_all(order)
        finally:
            elapsed = time.perf_counter() - start
            self.metrics.order_processing_timer(symbol).record(elapsed)
            self.metrics.inflight.decrement()

        if error is None:
            logger.info(f"Order {order.id} OK {symbol} {order.side.value} after {attempts} attempt(s)")
            return SubmissionResult(order=order, ok=True, attempts=attempts, elapsed=elapsed)

        self.metrics.orders_failed(symbol).increment()
        logger.warning(f"Order {order.id} failed {symbol} after {attempts} attempt(s): {error}")
        return SubmissionResult(
            order=order, ok=False, attempts=attempts, elapsed=elapsed, error=error
        )

    async def _attempt_all(self, order: OrderRequest) -> tuple[int, str | None]:
        """Run attempts until one succeeds or retries are exhausted.

        Returns:
            (attempts made, last error or None on success)
        """
        error: str | None = None
        for attempt in range(self.policy.max_attempts):
            if attempt > 0:
                delay = self.policy.backoff(attempt - 1)
                logger.debug(f"Retrying order {order.id} in {delay:.3f}s ({error})")
                await self._sleep(delay)
            try:
                await asyncio.wait_for(self.port.submit(order), timeout=self.policy.timeout)
                return attempt + 1, None
            except asyncio.TimeoutError:
                error = f"timeout after {self.policy.timeout}s"
            except asyncio.CancelledError:
                raise
            except Exception as e:
                error = f"{type(e).__name__}: {e}"
        return self.policy.max_attempts, error
