"""Bot entry point: replay a tick stream through the configured strategy.

Usage:
    python -m tradebot --ticks ticks.jsonl
    python -m tradebot --strategy rsi_trend < ticks.jsonl
"""

import argparse
import asyncio
import logging

from tradebot.bot_config import load_bot_config, load_config_env
from tradebot.clients.execution import HttpExecutionClient
from tradebot.config import Settings, get_settings
from tradebot.metrics import MetricsSink
from tradebot.services.dispatcher import DispatchSummary, TickDispatcher
from tradebot.services.submission import RetryPolicy, SubmissionPipeline
from tradebot.services.tick_source import JsonLinesTickSource
from tradecore.strategy import StrategyKind, list_strategies

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s - %(levelname)s - %(message)s",
    )
    # Reduce noise from third-party libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("asyncio").setLevel(logging.WARNING)


def retry_policy(settings: Settings) -> RetryPolicy:
    return RetryPolicy(
        timeout=settings.submit_timeout,
        max_retries=settings.max_retries,
        base_delay=settings.retry_base_delay,
        max_backoff=settings.retry_max_backoff,
        jitter=settings.retry_jitter,
    )


async def run_bot(args: argparse.Namespace, settings: Settings) -> DispatchSummary:
    bot_config = load_bot_config(args.config or settings.bot_config_path)
    if args.strategy:
        bot_config = bot_config.model_copy(update={"strategy": StrategyKind(args.strategy)})

    strategy = bot_config.build_strategy(settings.bot_id)
    metrics = MetricsSink()
    client = HttpExecutionClient(settings.exchange_urls)
    pipeline = SubmissionPipeline(client, metrics, retry_policy(settings))
    dispatcher = TickDispatcher(strategy, pipeline, metrics, symbols=bot_config.symbols)

    source = JsonLinesTickSource(args.ticks, interval=args.interval)
    try:
        return await dispatcher.run(source)
    finally:
        await client.close()
        logger.info(f"Metrics: {metrics.snapshot()}")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Tick-driven trading bot")
    parser.add_argument("--ticks", help="JSON-lines tick file (default: stdin)")
    parser.add_argument("--config", help="bot.yaml path (default from settings)")
    parser.add_argument("--strategy", choices=list_strategies(), help="Override strategy")
    parser.add_argument(
        "--interval", type=float, default=0.0, help="Seconds between replayed ticks"
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    load_config_env(args.config)
    settings = get_settings()
    configure_logging(settings.log_level)

    try:
        summary = asyncio.run(run_bot(args, settings))
    except KeyboardInterrupt:
        logger.info("Interrupted")
        return 130
    except Exception as e:
        logger.error(f"Bot stopped: {e}")
        return 1

    logger.info(
        f"Done: {summary.ticks} ticks, {summary.orders_submitted} orders, "
        f"{summary.orders_failed} failed"
    )
    return 0
