"""Strategy (signal policy) package.

Public API:
- Strategy: Protocol that all strategies satisfy
- StrategyKind: the closed set of strategy kinds
- create_strategy / get_strategy_class / list_strategies

Importing this package registers all built-in strategies.
"""

from tradecore.strategy.protocol import BaseStrategy, Strategy
from tradecore.strategy.registry import (
    StrategyKind,
    create_strategy,
    get_strategy_class,
    list_strategies,
    register_strategy,
)
from tradecore.strategy.rsi_reversion import RsiReversionStrategy
from tradecore.strategy.rsi_trend import RsiTrendStrategy
from tradecore.strategy.roundtrip import RoundtripStrategy
from tradecore.strategy.sma_crossover import SmaCrossoverStrategy

__all__ = [
    "BaseStrategy",
    "Strategy",
    "StrategyKind",
    "create_strategy",
    "get_strategy_class",
    "list_strategies",
    "register_strategy",
    "RsiReversionStrategy",
    "RsiTrendStrategy",
    "RoundtripStrategy",
    "SmaCrossoverStrategy",
]
