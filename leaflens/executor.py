"""RetryExecutor — sends one logical request with bounded exponential backoff."""
import asyncio
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Awaitable, Callable

from leaflens.constants import (
    MSG_ATTEMPT,
    MSG_RATE_LIMITED,
    MSG_REQUEST_FAILED,
    MSG_REQUEST_OK,
    MSG_TRANSPORT_RETRY,
)
from leaflens.errors import TransportError
from leaflens.models import RequestSpec, RetryPolicy
from leaflens.outcome import (
    AttemptOutcome,
    FatalHttpError,
    FatalTransportFailure,
    RetryableRateLimited,
    RetryableTransportFailure,
    Success,
    classify,
)
from leaflens.transport.client import Transport

logger = logging.getLogger(__name__)

Sleep = Callable[[float], Awaitable[None]]


class ExecutorState(Enum):
    ATTEMPTING = "attempting"
    BACKING_OFF = "backing_off"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass
class _Run:
    """Per-call state. Created fresh by every execute()."""

    state: ExecutorState = ExecutorState.ATTEMPTING
    attempt: int = 0
    outcome: AttemptOutcome | None = None


class RetryExecutor:
    """Executes a RequestSpec, retrying rate limits and transport failures.

    Delays follow base * multiplier**retry_index with independent bases for the
    two retryable kinds. Any other non-success status fails on the spot.
    """

    def __init__(
        self,
        transport: Transport,
        policy: RetryPolicy | None = None,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        self._transport = transport
        self._policy = policy or RetryPolicy()
        self._sleep = sleep

    @property
    def policy(self) -> RetryPolicy:
        return self._policy

    async def execute(self, spec: RequestSpec) -> Any:
        """Return the success body or raise an AnalysisRequestError subclass."""
        run = _Run()
        while True:
            match run.state:
                case ExecutorState.ATTEMPTING:
                    await self._attempt(run, spec)
                case ExecutorState.BACKING_OFF:
                    await self._back_off(run)
                case ExecutorState.SUCCEEDED:
                    logger.info(MSG_REQUEST_OK, run.attempt)
                    return run.outcome.body
                case ExecutorState.FAILED:
                    error = run.outcome.to_exception()
                    logger.error(MSG_REQUEST_FAILED, run.attempt, error)
                    raise error

    async def _attempt(self, run: _Run, spec: RequestSpec) -> None:
        run.attempt += 1
        is_last = run.attempt >= self._policy.max_attempts
        logger.debug(MSG_ATTEMPT, run.attempt, self._policy.max_attempts, spec.method)
        try:
            result = await self._transport.send(spec)
        except TransportError as exc:
            result = exc
        run.outcome = classify(result, is_last)
        match run.outcome:
            case Success():
                run.state = ExecutorState.SUCCEEDED
            case RetryableRateLimited() | RetryableTransportFailure():
                run.state = ExecutorState.BACKING_OFF
            case FatalHttpError() | FatalTransportFailure():
                run.state = ExecutorState.FAILED

    async def _back_off(self, run: _Run) -> None:
        retry_index = run.attempt - 1
        match run.outcome:
            case RetryableRateLimited(status_code=status):
                delay = self._policy.rate_limit_delay(retry_index)
                logger.warning(MSG_RATE_LIMITED, status, delay)
            case RetryableTransportFailure(cause=cause):
                delay = self._policy.transport_delay(retry_index)
                logger.warning(MSG_TRANSPORT_RETRY, cause, delay, run.attempt + 1)
        await self._sleep(delay)
        run.state = ExecutorState.ATTEMPTING
