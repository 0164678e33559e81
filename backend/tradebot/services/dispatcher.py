"""Tick dispatcher: the single consumer driving the decision pipeline.

Ticks are processed strictly one at a time, in arrival order:
indicator update -> strategy decision -> order build -> submission ->
position update. Tick n+1 is not read before every submission
triggered by tick n has resolved, so symbol state has exactly one
writer and needs no lock.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import AsyncIterable, Callable, Iterable

from tradebot.metrics import MetricsSink
from tradebot.services.submission import SubmissionPipeline, SubmissionResult
from tradecore.models import Tick
from tradecore.state import SymbolStateStore
from tradecore.strategy import BaseStrategy

logger = logging.getLogger(__name__)

Clock = Callable[[], float]


@dataclass
class TickOutcome:
    """What happened for one tick."""

    tick: Tick
    skipped: bool = False
    results: list[SubmissionResult] = field(default_factory=list)

    @property
    def failed(self) -> bool:
        return any(not r.ok for r in self.results)


@dataclass
class DispatchSummary:
    """Totals for one run of the dispatcher."""

    ticks: int = 0
    skipped: int = 0
    orders_submitted: int = 0
    orders_failed: int = 0

    def add(self, outcome: TickOutcome) -> None:
        self.ticks += 1
        if outcome.skipped:
            self.skipped += 1
        self.orders_submitted += len(outcome.results)
        self.orders_failed += sum(1 for r in outcome.results if not r.ok)


class TickDispatcher:
    """Consume a tick stream and route each tick through the strategy.

    Args:
        strategy: Strategy deciding actions for every symbol.
        pipeline: Submission pipeline for built orders.
        metrics: Metrics sink (ticks received, price distribution).
        store: Symbol state store; a fresh one is created when omitted.
        symbols: Only trade these symbols (empty/None = all).
        clock: Monotonic clock in seconds, used for cooldown/cadence timers.
    """

    def __init__(
        self,
        strategy: BaseStrategy,
        pipeline: SubmissionPipeline,
        metrics: MetricsSink,
        store: SymbolStateStore | None = None,
        symbols: Iterable[str] | None = None,
        clock: Clock = time.monotonic,
    ):
        self.strategy = strategy
        self.pipeline = pipeline
        self.metrics = metrics
        self.store = store if store is not None else SymbolStateStore()
        self.symbols = frozenset(symbols or ())
        self._clock = clock
        self._processing = False

    @property
    def is_processing(self) -> bool:
        """True while a tick is in flight (Processing), False when Idle."""
        return self._processing

    async def run(self, ticks: AsyncIterable[Tick]) -> DispatchSummary:
        """Process ticks until the source is exhausted.

        Order failures are absorbed by the pipeline. An exception raised
        by the tick source ends the run and is re-raised.
        """
        summary = DispatchSummary()
        logger.info(f"Started market processing ({self.strategy.name})")
        try:
            async for tick in ticks:
                outcome = await self.process_tick(tick)
                summary.add(outcome)
        except Exception:
            logger.exception("Market processing error")
            raise
        finally:
            logger.info(
                f"Market processing terminated: ticks={summary.ticks} "
                f"skipped={summary.skipped} orders={summary.orders_submitted} "
                f"failed={summary.orders_failed}"
            )
        return summary

    async def process_tick(self, tick: Tick) -> TickOutcome:
        """Run one tick end to end."""
        self._processing = True
        try:
            return await self._process(tick)
        finally:
            self._processing = False

    async def _process(self, tick: Tick) -> TickOutcome:
        self.metrics.ticks_received(tick.symbol).increment()

        if not tick.has_price:
            return TickOutcome(tick=tick, skipped=True)
        if self.symbols and tick.symbol not in self.symbols:
            return TickOutcome(tick=tick, skipped=True)

        self.metrics.tick_price(tick.symbol).record(float(tick.last))

        state = self.store.get_or_create(tick.symbol, self.strategy.new_indicator)
        if state.indicator is not None:
            state.indicator.update(tick.last)

        now = self._clock()
        actions = self.strategy.evaluate(state, tick, now)
        if state.indicator is not None and logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                f"{tick.symbol} @ {tick.last} actions={[a.value for a in actions]} "
                f"indicator={state.indicator.snapshot()}"
            )
        outcome = TickOutcome(tick=tick)

        for action in actions:
            order = self.strategy.build_order(state, tick, action)
            result = await self.pipeline.submit(order)
            outcome.results.append(result)
            if not result.ok:
                # Remaining steps depend on this one (close before open)
                break
            self.strategy.on_success(state, action, now)

        return outcome
