import json

import httpx
import pytest
from unittest.mock import AsyncMock, patch

from leaflens.errors import TransportError
from leaflens.executor import RetryExecutor
from leaflens.models import RequestSpec, RetryPolicy
from leaflens.transport.client import Transport
from leaflens.transport.httpx_transport import HttpxTransport


def make_spec() -> RequestSpec:
    return RequestSpec(
        url="https://example.test/v1/models/m:generateContent",
        body={"contents": []},
        headers={"Content-Type": "application/json"},
        params={"key": "secret"},
    )


def test_httpx_transport_implements_abc():
    assert issubclass(HttpxTransport, Transport)


async def test_send_posts_json_with_params():
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, text='{"candidates": []}')

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
        response = await HttpxTransport(client=client).send(make_spec())

    assert response.status_code == 200
    assert response.ok
    assert response.body == '{"candidates": []}'
    request = seen[0]
    assert request.method == "POST"
    assert request.url.params["key"] == "secret"
    assert json.loads(request.content) == {"contents": []}


async def test_error_status_is_returned_not_raised():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(429, text="slow down")

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
        response = await HttpxTransport(client=client).send(make_spec())

    assert response.status_code == 429
    assert not response.ok


@pytest.mark.parametrize(
    "exc", [httpx.ConnectError("refused"), httpx.ReadTimeout("slow"), httpx.RemoteProtocolError("reset")]
)
async def test_network_failures_raise_transport_error(exc):
    def handler(request: httpx.Request) -> httpx.Response:
        raise exc

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
        with pytest.raises(TransportError) as excinfo:
            await HttpxTransport(client=client).send(make_spec())

    assert excinfo.value.cause is exc


async def test_owned_client_is_reused_across_retries_and_closed():
    statuses = [429, 200]
    created: list[httpx.AsyncClient] = []
    real_client = httpx.AsyncClient

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(statuses.pop(0), text="{}")

    def make_client(**kwargs) -> httpx.AsyncClient:
        client = real_client(transport=httpx.MockTransport(handler), **kwargs)
        created.append(client)
        return client

    transport = HttpxTransport(timeout=5.0)
    executor = RetryExecutor(transport, RetryPolicy(max_attempts=2), sleep=AsyncMock())
    with patch.object(httpx, "AsyncClient", side_effect=make_client):
        assert await executor.execute(make_spec()) == "{}"

    assert len(created) == 1
    await transport.aclose()
    assert created[0].is_closed


async def test_aclose_leaves_injected_client_open():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text="ok")

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
        transport = HttpxTransport(client=client)
        await transport.send(make_spec())
        await transport.aclose()

        assert not client.is_closed
