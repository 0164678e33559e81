"""External clients."""

from tradebot.clients.execution import ExecutionPort, HttpExecutionClient, order_payload

__all__ = ["ExecutionPort", "HttpExecutionClient", "order_payload"]
