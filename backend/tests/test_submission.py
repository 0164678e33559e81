"""Tests for the order submission pipeline."""

import asyncio
import random
from decimal import Decimal
from unittest.mock import AsyncMock, call

import pytest

from tradebot.exceptions import ExecutionError
from tradebot.services.submission import RetryPolicy, SubmissionPipeline
from tradecore.models import OrderRequest, OrderType, Side


@pytest.fixture
def order():
    return OrderRequest(
        symbol="BTCUSDT",
        side=Side.BUY,
        type=OrderType.MARKET,
        qty=Decimal("0.001"),
        reason="test",
        exchange="binance",
    )


class TestRetryPolicy:
    """Tests for backoff computation."""

    def test_max_attempts(self):
        assert RetryPolicy(max_retries=3).max_attempts == 4
        assert RetryPolicy(max_retries=0).max_attempts == 1

    def test_exponential_backoff(self):
        policy = RetryPolicy(base_delay=0.2, max_backoff=2.0)
        assert [policy.backoff(n) for n in range(3)] == pytest.approx([0.2, 0.4, 0.8])

    def test_backoff_capped(self):
        policy = RetryPolicy(base_delay=0.2, max_backoff=2.0)
        assert policy.backoff(4) == pytest.approx(2.0)
        assert policy.backoff(10) == pytest.approx(2.0)

    def test_jitter_stays_within_bounds(self):
        policy = RetryPolicy(base_delay=0.2, max_backoff=2.0, jitter=0.5)
        rng = random.Random(1)
        for retry in range(8):
            base = min(0.2 * 2**retry, 2.0)
            for _ in range(50):
                delay = policy.backoff(retry, rng)
                assert base * 0.5 - 1e-9 <= delay <= min(base * 1.5, 2.0) + 1e-9


class TestSubmissionPipeline:
    """Tests for SubmissionPipeline."""

    @pytest.mark.asyncio
    async def test_success_first_attempt(self, pipeline, port, metrics, no_sleep, order):
        result = await pipeline.submit(order)

        assert result.ok
        assert result.attempts == 1
        assert result.error is None
        port.submit.assert_awaited_once_with(order)
        no_sleep.assert_not_awaited()
        assert metrics.orders_submitted("BTCUSDT").value == 1
        assert metrics.orders_failed("BTCUSDT").value == 0
        assert metrics.order_processing_timer("BTCUSDT").count == 1
        assert metrics.inflight.value == 0

    @pytest.mark.asyncio
    async def test_retries_then_succeeds(self, pipeline, port, metrics, no_sleep, order):
        port.submit.side_effect = [ExecutionError("boom"), ExecutionError("boom"), None]

        result = await pipeline.submit(order)

        assert result.ok
        assert result.attempts == 3
        assert port.submit.await_count == 3
        assert no_sleep.await_args_list == [call(pytest.approx(0.2)), call(pytest.approx(0.4))]
        assert metrics.orders_submitted("BTCUSDT").value == 1
        assert metrics.orders_failed("BTCUSDT").value == 0

    @pytest.mark.asyncio
    async def test_exhausted_retries_absorbed(self, pipeline, port, metrics, no_sleep, order):
        port.submit.side_effect = ExecutionError("HTTP 503", status_code=503)

        result = await pipeline.submit(order)

        assert not result.ok
        assert result.attempts == 4
        assert result.error == "ExecutionError: HTTP 503"
        assert port.submit.await_count == 4
        assert no_sleep.await_count == 3
        assert metrics.orders_failed("BTCUSDT").value == 1
        # duration recorded on failure too
        assert metrics.order_processing_timer("BTCUSDT").count == 1
        assert metrics.inflight.value == 0

    @pytest.mark.asyncio
    async def test_timeout_counts_as_failure(self, port, metrics, no_sleep, order):
        async def hang(_order):
            await asyncio.sleep(10)

        port.submit.side_effect = hang
        pipeline = SubmissionPipeline(
            port, metrics, RetryPolicy(timeout=0.01, max_retries=1), sleep=no_sleep
        )

        result = await pipeline.submit(order)

        assert not result.ok
        assert result.attempts == 2
        assert result.error == "timeout after 0.01s"
        assert metrics.orders_failed("BTCUSDT").value == 1

    @pytest.mark.asyncio
    async def test_inflight_held_during_call(self, pipeline, port, metrics, order):
        seen = []

        async def record(_order):
            seen.append(metrics.inflight.value)

        port.submit.side_effect = record

        await pipeline.submit(order)

        assert seen == [1]
        assert pipeline.inflight == 0

    @pytest.mark.asyncio
    async def test_cancellation_propagates(self, pipeline, port, metrics, no_sleep, order):
        port.submit.side_effect = asyncio.CancelledError()

        with pytest.raises(asyncio.CancelledError):
            await pipeline.submit(order)

        assert port.submit.await_count == 1
        no_sleep.assert_not_awaited()
        assert metrics.inflight.value == 0

    @pytest.mark.asyncio
    async def test_no_retries_policy(self, port, metrics, order):
        port.submit.side_effect = RuntimeError("down")
        sleep = AsyncMock()
        pipeline = SubmissionPipeline(port, metrics, RetryPolicy(max_retries=0), sleep=sleep)

        result = await pipeline.submit(order)

        assert not result.ok
        assert result.attempts == 1
        assert result.error == "RuntimeError: down"
        sleep.assert_not_awaited()
