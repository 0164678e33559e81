"""Application configuration."""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="TRADEBOT_",
        extra="ignore",
    )

    # Bot identity stamped on every order
    bot_id: str = "tradebot"

    # Execution endpoints: exchange name -> base URL
    exchange_urls: dict[str, str] = {"binance": "http://localhost:8080"}

    # Submission policy
    submit_timeout: float = 3.0
    max_retries: int = 3
    retry_base_delay: float = 0.2
    retry_max_backoff: float = 2.0
    retry_jitter: float = 0.5

    # Strategy selection file
    bot_config_path: str = "bot.yaml"

    log_level: str = "INFO"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
