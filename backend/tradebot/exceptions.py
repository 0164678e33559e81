"""Bot exception types."""


class TradeBotError(Exception):
    """Base class for bot errors."""


class ConfigError(TradeBotError):
    """Invalid or unreadable bot configuration."""


class ExecutionError(TradeBotError):
    """Order could not be placed by the execution endpoint."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code
