"""Strategy configuration loaded from bot.yaml.

Example:

    strategy: sma_crossover
    sma_crossover:
      short_window: 20
      long_window: 100
      flip_on_reversal: true

No YAML file means the SMA crossover strategy with defaults.
"""

import logging
from pathlib import Path

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError, model_validator

from tradebot.exceptions import ConfigError
from tradecore.models import (
    RoundtripConfig,
    RsiReversionConfig,
    RsiTrendConfig,
    SmaCrossoverConfig,
)
from tradecore.strategy import StrategyKind, create_strategy

logger = logging.getLogger(__name__)


class BotConfig(BaseModel):
    """Top-level bot.yaml configuration."""

    strategy: StrategyKind = StrategyKind.SMA_CROSSOVER
    bot_id: str | None = None
    symbols: list[str] = []  # empty = trade every symbol the feed delivers

    rsi_reversion: RsiReversionConfig = Field(default_factory=RsiReversionConfig)
    rsi_trend: RsiTrendConfig = Field(default_factory=RsiTrendConfig)
    roundtrip: RoundtripConfig = Field(default_factory=RoundtripConfig)
    sma_crossover: SmaCrossoverConfig = Field(default_factory=SmaCrossoverConfig)

    @model_validator(mode="after")
    def _validate(self):
        if len(set(self.symbols)) != len(self.symbols):
            raise ValueError("symbols must not contain duplicates")
        return self

    def strategy_config(self) -> BaseModel:
        """Config block for the selected strategy."""
        return getattr(self, self.strategy.value)

    def build_strategy(self, bot_id: str):
        """Instantiate the selected strategy."""
        return create_strategy(
            self.strategy,
            bot_id=self.bot_id or bot_id,
            config=self.strategy_config(),
        )


_DEFAULT_PATH = Path("bot.yaml")


def load_config_env(path: Path | str | None = None) -> bool:
    """Load the .env file next to the bot config into the process environment.

    Must run before the first get_settings() call so TRADEBOT_* values
    from that file reach Settings. Variables already set win.

    Returns:
        True if a .env file was found and loaded.
    """
    config_path = Path(path) if path is not None else _DEFAULT_PATH
    env_path = config_path.parent / ".env"
    loaded = load_dotenv(env_path, override=False)
    if loaded:
        logger.info("Loaded environment from %s", env_path)
    return loaded


def load_bot_config(path: Path | str | None = None) -> BotConfig:
    """Load bot config from a YAML file.

    Falls back to defaults if the file doesn't exist.

    Raises:
        ConfigError: If the file is not valid YAML or fails validation.
    """
    config_path = Path(path) if path is not None else _DEFAULT_PATH

    if not config_path.exists():
        logger.info("No bot config found at %s, using defaults", config_path)
        return BotConfig()

    try:
        with open(config_path) as f:
            raw = yaml.safe_load(f) or {}
        config = BotConfig(**raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {config_path}: {e}") from e
    except (ValidationError, TypeError) as e:
        raise ConfigError(f"Invalid bot config {config_path}: {e}") from e

    logger.info(
        "Loaded bot config: strategy=%s, %d symbols",
        config.strategy.value,
        len(config.symbols),
    )
    return config
