"""Response extraction — pulls the analysis text out of a generateContent body."""
import json
from dataclasses import dataclass
from typing import Any, Union

from leaflens.errors import MalformedResponseError


@dataclass(frozen=True)
class AnalysisText:
    text: str


@dataclass(frozen=True)
class MalformedResponse:
    reason: str
    body: Any = None

    def to_exception(self) -> MalformedResponseError:
        return MalformedResponseError(self.reason)


AnalysisResult = Union[AnalysisText, MalformedResponse]


def parse_response_body(raw: str | bytes) -> Any | MalformedResponse:
    try:
        return json.loads(raw)
    except ValueError:
        return MalformedResponse("Response body is not JSON", raw)


def extract_analysis_text(body: Any) -> AnalysisResult:
    """Return the text at candidates[0].content.parts[0].text, or why it is missing."""
    match body:
        case MalformedResponse() as malformed:
            return malformed
        case {"candidates": [{"content": {"parts": [{"text": str() as text}, *_]}}, *_]}:
            match text.strip():
                case "":
                    return MalformedResponse("Response text is empty", body)
                case stripped:
                    return AnalysisText(stripped)
        case {"candidates": [{"content": {"parts": [{"text": _}, *_]}}, *_]}:
            return MalformedResponse("Response text is not a string", body)
        case {"candidates": [_, *_]}:
            return MalformedResponse("First candidate has no text part", body)
        case _:
            return MalformedResponse("Response has no candidates", body)
