"""Shared test fixtures."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from tradebot.metrics import MetricsSink
from tradebot.services.submission import RetryPolicy, SubmissionPipeline


@pytest.fixture
def metrics():
    return MetricsSink()


@pytest.fixture
def port():
    """Execution port whose submit always succeeds."""
    port = MagicMock()
    port.submit = AsyncMock(return_value=None)
    return port


@pytest.fixture
def no_sleep():
    return AsyncMock(return_value=None)


@pytest.fixture
def pipeline(port, metrics, no_sleep):
    return SubmissionPipeline(
        port,
        metrics,
        RetryPolicy(timeout=1.0, max_retries=3, base_delay=0.2, max_backoff=2.0),
        sleep=no_sleep,
    )
