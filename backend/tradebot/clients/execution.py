"""Execution endpoint client.

Orders are POSTed as JSON to ``{base_url}/api/orders``. One base URL is
configured per exchange name; an order is routed by its ``exchange``
field, falling back to the only endpoint when exactly one is configured.
"""

import logging
from typing import Protocol, runtime_checkable

import httpx
import orjson

from tradebot.exceptions import ExecutionError
from tradecore.models import OrderRequest

logger = logging.getLogger(__name__)

ORDERS_PATH = "/api/orders"


@runtime_checkable
class ExecutionPort(Protocol):
    """Anything that can place an order. Raises on failure."""

    async def submit(self, order: OrderRequest) -> None:
        ...


def order_payload(order: OrderRequest) -> bytes:
    """Serialize an order to the JSON body expected by the endpoint."""
    data = order.model_dump(mode="json", by_alias=True)
    return orjson.dumps(data)


class HttpExecutionClient:
    """Execution port backed by httpx.

    Args:
        endpoints: Exchange name -> base URL.
        transport: Optional httpx transport (for testing).
    """

    def __init__(
        self,
        endpoints: dict[str, str],
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._endpoints = {name.lower(): url for name, url in endpoints.items()}
        self._transport = transport
        self._clients: dict[str, httpx.AsyncClient] = {}
        logger.info(f"Initialized execution endpoints: {sorted(self._endpoints)}")

    @property
    def exchanges(self) -> list[str]:
        return sorted(self._endpoints)

    def _select(self, exchange: str | None) -> str | None:
        if exchange:
            key = exchange.lower()
            if key in self._endpoints:
                return key
        if len(self._endpoints) == 1:
            return next(iter(self._endpoints))
        return None

    def _get_client(self, key: str) -> httpx.AsyncClient:
        """Get or create the HTTP client for an exchange."""
        client = self._clients.get(key)
        if client is None or client.is_closed:
            client = httpx.AsyncClient(
                base_url=self._endpoints[key],
                headers={"Content-Type": "application/json"},
                transport=self._transport,
            )
            self._clients[key] = client
        return client

    async def submit(self, order: OrderRequest) -> None:
        """Place one order.

        Raises:
            ExecutionError: No endpoint for the exchange, or non-2xx response.
            httpx.TransportError: Network failure.
        """
        key = self._select(order.exchange)
        if key is None:
            raise ExecutionError(f"No endpoint configured for exchange: {order.exchange!r}")

        client = self._get_client(key)
        response = await client.post(ORDERS_PATH, content=order_payload(order))
        if response.is_error:
            raise ExecutionError(
                f"Order {order.id} rejected with HTTP {response.status_code}",
                status_code=response.status_code,
            )

    async def close(self) -> None:
        """Close all HTTP clients."""
        for client in self._clients.values():
            if not client.is_closed:
                await client.aclose()
        self._clients.clear()
