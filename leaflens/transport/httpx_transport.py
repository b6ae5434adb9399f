"""HttpxTransport — httpx.AsyncClient backed transport."""
import logging

import httpx

from leaflens.constants import DEFAULT_REQUEST_TIMEOUT
from leaflens.errors import TransportError
from leaflens.models import RequestSpec, TransportResponse
from leaflens.transport.client import Transport

logger = logging.getLogger(__name__)


class HttpxTransport(Transport):
    """Sends through one AsyncClient so retries reuse its connection pool.

    A client passed in stays owned by the caller; otherwise one is created on
    first send and closed by aclose().
    """

    def __init__(
        self,
        timeout: float = DEFAULT_REQUEST_TIMEOUT,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._timeout = timeout
        self._client = client
        self._owns_client = client is None

    def _get_client(self) -> httpx.AsyncClient:
        match self._client:
            case None:
                self._client = httpx.AsyncClient(timeout=self._timeout)
                return self._client
            case client:
                return client

    async def send(self, spec: RequestSpec) -> TransportResponse:
        client = self._get_client()
        try:
            response = await client.request(
                spec.method,
                spec.url,
                json=spec.body,
                headers=spec.headers,
                params=spec.params,
            )
        except httpx.TransportError as exc:
            logger.debug("Transport error for %s: %r", spec.url, exc)
            raise TransportError(exc) from exc
        return TransportResponse(status_code=response.status_code, body=response.text)

    async def aclose(self) -> None:
        match (self._owns_client, self._client):
            case (True, client) if client is not None:
                self._client = None
                await client.aclose()
            case _:
                pass
