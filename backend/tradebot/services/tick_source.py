"""Tick sources for the dispatcher.

The live feed is wired elsewhere; these sources cover replaying
recorded ticks and feeding in-memory sequences.
"""

import asyncio
import logging
import sys
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import AsyncIterator, Iterable, TextIO

import orjson

from tradecore.models import Tick

logger = logging.getLogger(__name__)


async def iter_ticks(ticks: Iterable[Tick], interval: float = 0.0) -> AsyncIterator[Tick]:
    """Yield ticks from any iterable, optionally pacing them."""
    for tick in ticks:
        yield tick
        if interval > 0:
            await asyncio.sleep(interval)


def parse_tick(line: str | bytes) -> Tick:
    """Parse one JSON tick: {"symbol", "last", "exchange", "timestamp"?}.

    ``last`` may be null or missing. Send it as a JSON string (``"113.50"``)
    for an exact decimal: orjson decodes JSON numbers as binary floats, so a
    numeric ``last`` keeps only about 17 significant digits.

    Raises:
        ValueError: If the line is not a valid tick.
    """
    try:
        raw = orjson.loads(line)
    except orjson.JSONDecodeError as e:
        raise ValueError(f"Invalid tick JSON: {e}") from e
    if not isinstance(raw, dict) or "symbol" not in raw:
        raise ValueError(f"Tick must be an object with a symbol: {line!r}")

    last = raw.get("last")
    if last is not None:
        try:
            raw["last"] = Decimal(str(last))
        except InvalidOperation as e:
            raise ValueError(f"Invalid price {last!r}") from e
    return Tick(**raw)


class JsonLinesTickSource:
    """Replay ticks from a JSON-lines file (or stdin when path is None).

    Blank lines are ignored. A malformed line is a source failure and
    raises ValueError, ending the dispatcher run. Stdin is read in a
    worker thread so a live feed waiting for its next line does not
    block the event loop.
    """

    def __init__(self, path: Path | str | None = None, interval: float = 0.0):
        self.path = Path(path) if path is not None else None
        self.interval = interval

    def __aiter__(self) -> AsyncIterator[Tick]:
        return self._iterate()

    async def _iterate(self) -> AsyncIterator[Tick]:
        if self.path is None:
            async for tick in self._read(sys.stdin, threaded=True):
                yield tick
            return

        with open(self.path, encoding="utf-8") as f:
            async for tick in self._read(f, threaded=False):
                yield tick

    async def _read(self, stream: TextIO, threaded: bool) -> AsyncIterator[Tick]:
        count = 0
        lineno = 0
        while True:
            if threaded:
                line = await asyncio.to_thread(stream.readline)
            else:
                line = stream.readline()
            if not line:
                break
            lineno += 1
            line = line.strip()
            if not line:
                continue
            try:
                tick = parse_tick(line)
            except ValueError as e:
                raise ValueError(f"{self.path or '<stdin>'}:{lineno}: {e}") from e
            count += 1
            yield tick
            if self.interval > 0:
                await asyncio.sleep(self.interval)
            else:
                await asyncio.sleep(0)
        logger.info(f"Tick replay finished: {count} ticks")
