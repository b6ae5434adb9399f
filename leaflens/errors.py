"""Error taxonomy for the analysis pipeline."""


class LeafLensError(Exception):
    """Base for every error the pipeline raises to its caller."""


class AssetEncodingError(LeafLensError):
    """The asset bytes could not be read or encoded. Never retried."""


class AnalysisRequestError(LeafLensError):
    """Terminal failure of the remote call: no answer was obtained."""


class HttpStatusError(AnalysisRequestError):

    def __init__(self, status_code: int) -> None:
        self.status_code = status_code
        super().__init__(f"HTTP {status_code}")


class TransportFailureError(AnalysisRequestError):

    def __init__(self, cause: BaseException) -> None:
        self.cause = cause
        super().__init__(f"Transport failure: {cause!r}")


class MalformedResponseError(LeafLensError):
    """The call succeeded but the analysis text was missing or not textual."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(reason)


class TransportError(Exception):
    """Endpoint unreachable. Raised by transports, consumed by the executor."""

    def __init__(self, cause: BaseException) -> None:
        self.cause = cause
        super().__init__(str(cause))
