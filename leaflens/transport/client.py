"""Transport — abstract base for sending one HTTP request."""
from abc import ABC, abstractmethod

from leaflens.models import RequestSpec, TransportResponse


class Transport(ABC):
    @abstractmethod
    async def send(self, spec: RequestSpec) -> TransportResponse:
        """Send the request once. Raises TransportError if the endpoint is unreachable;
        non-success statuses are returned, not raised."""
        ...

    async def aclose(self) -> None:
        """Release pooled connections. No-op unless the transport holds any."""
