"""Bot services."""

from tradebot.services.submission import RetryPolicy, SubmissionPipeline, SubmissionResult
from tradebot.services.dispatcher import DispatchSummary, TickDispatcher, TickOutcome
from tradebot.services.tick_source import JsonLinesTickSource, iter_ticks, parse_tick

__all__ = [
    "RetryPolicy",
    "SubmissionPipeline",
    "SubmissionResult",
    "DispatchSummary",
    "TickDispatcher",
    "TickOutcome",
    "JsonLinesTickSource",
    "iter_ticks",
    "parse_tick",
]
