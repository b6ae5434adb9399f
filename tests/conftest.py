import json

import pytest

from leaflens.errors import TransportError
from leaflens.models import RequestSpec, TransportResponse
from leaflens.transport.client import Transport


def _gemini_body(text: str) -> str:
    return json.dumps({"candidates": [{"content": {"parts": [{"text": text}]}}]})


class ScriptedTransport(Transport):
    """Replays a script of status codes (int), bodies (str) or exceptions."""

    def __init__(self, script: list) -> None:
        self._script = list(script)
        self.requests: list[RequestSpec] = []

    async def send(self, spec: RequestSpec) -> TransportResponse:
        self.requests.append(spec)
        step = self._script.pop(0)
        match step:
            case BaseException() as exc:
                raise TransportError(exc)
            case int() as status:
                return TransportResponse(status_code=status, body="")
            case str() as body:
                return TransportResponse(status_code=200, body=body)
            case TransportResponse() as response:
                return response


class RecordingSleep:
    def __init__(self) -> None:
        self.delays: list[float] = []

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)


@pytest.fixture
def scripted():
    return ScriptedTransport


@pytest.fixture
def gemini_body():
    return _gemini_body


@pytest.fixture
def sleep() -> RecordingSleep:
    return RecordingSleep()


@pytest.fixture
def no_dotenv(monkeypatch):
    monkeypatch.setattr("leaflens.config.load_dotenv", lambda **_: None)
    for name in (
        "GEMINI_API_KEY",
        "GEMINI_API_URL",
        "LOG_LEVEL",
        "MAX_ATTEMPTS",
        "TRANSPORT_BASE_DELAY_MS",
        "RATE_LIMIT_BASE_DELAY_MS",
        "REQUEST_TIMEOUT",
        "TEMPERATURE",
    ):
        monkeypatch.delenv(name, raising=False)
