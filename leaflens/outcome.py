"""AttemptOutcome — the result of a single network attempt."""
from dataclasses import dataclass
from typing import Any, Union

from leaflens.constants import HTTP_TOO_MANY_REQUESTS
from leaflens.errors import (
    AnalysisRequestError,
    HttpStatusError,
    TransportError,
    TransportFailureError,
)
from leaflens.models import TransportResponse


@dataclass(frozen=True)
class Success:
    body: Any


@dataclass(frozen=True)
class RetryableRateLimited:
    status_code: int


@dataclass(frozen=True)
class RetryableTransportFailure:
    cause: BaseException


@dataclass(frozen=True)
class FatalHttpError:
    status_code: int

    def to_exception(self) -> AnalysisRequestError:
        return HttpStatusError(self.status_code)


@dataclass(frozen=True)
class FatalTransportFailure:
    cause: BaseException

    def to_exception(self) -> AnalysisRequestError:
        return TransportFailureError(self.cause)


AttemptOutcome = Union[
    Success,
    RetryableRateLimited,
    RetryableTransportFailure,
    FatalHttpError,
    FatalTransportFailure,
]


def classify(result: TransportResponse | TransportError, is_last_attempt: bool) -> AttemptOutcome:
    """Map one attempt's response (or transport failure) to its outcome.

    Only rate-limit responses and transport failures are retryable, and only
    while attempts remain; every other non-success status is fatal at once.
    """
    match result:
        case TransportError(cause=cause) if is_last_attempt:
            return FatalTransportFailure(cause)
        case TransportError(cause=cause):
            return RetryableTransportFailure(cause)
        case TransportResponse(ok=True, body=body):
            return Success(body)
        case TransportResponse(status_code=status) if (
            status == HTTP_TOO_MANY_REQUESTS and not is_last_attempt
        ):
            return RetryableRateLimited(status)
        case TransportResponse(status_code=status):
            return FatalHttpError(status)
        case _:
            raise TypeError(f"Cannot classify {result!r}")
