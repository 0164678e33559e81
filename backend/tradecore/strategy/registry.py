"""Strategy registry over the closed set of strategy kinds.

Usage:
    @register_strategy(StrategyKind.SMA_CROSSOVER)
    class SmaCrossoverStrategy:
        ...

    strategy = create_strategy("sma_crossover", bot_id="bot-1")
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any

logger = logging.getLogger(__name__)


class StrategyKind(str, Enum):
    """The fixed set of supported strategies."""

    RSI_REVERSION = "rsi_reversion"
    RSI_TREND = "rsi_trend"
    ROUNDTRIP = "roundtrip"
    SMA_CROSSOVER = "sma_crossover"


# kind -> strategy class
_REGISTRY: dict[StrategyKind, type] = {}


def register_strategy(kind: StrategyKind):
    """Decorator to register a strategy class for a strategy kind.

    Raises:
        ValueError: If the kind already has a registered class.
    """

    def decorator(cls):
        if kind in _REGISTRY:
            raise ValueError(
                f"Strategy '{kind.value}' is already registered by {_REGISTRY[kind].__name__}"
            )
        _REGISTRY[kind] = cls
        logger.debug("Registered strategy: %s -> %s", kind.value, cls.__name__)
        return cls

    return decorator


def get_strategy_class(kind: StrategyKind | str) -> type:
    """Get the strategy class for a kind (without instantiating).

    Raises:
        KeyError: If the kind is unknown or has no registered class.
    """
    try:
        key = StrategyKind(kind)
    except ValueError:
        key = None
    cls = _REGISTRY.get(key) if key is not None else None
    if cls is None:
        available = ", ".join(list_strategies()) or "(none)"
        raise KeyError(f"Unknown strategy '{kind}'. Available: {available}")
    return cls


def create_strategy(kind: StrategyKind | str, **kwargs: Any):
    """Create a strategy instance by kind.

    Args:
        kind: Strategy kind or its string value.
        **kwargs: Arguments passed to the strategy constructor.
    """
    return get_strategy_class(kind)(**kwargs)


def list_strategies() -> list[str]:
    """Return a sorted list of registered strategy names."""
    return sorted(k.value for k in _REGISTRY)
