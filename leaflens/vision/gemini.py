"""GeminiVisionClient — Gemini generateContent vision backend."""
import asyncio
import logging
from typing import Any

from leaflens.config import Config
from leaflens.constants import (
    ANALYSIS_INSTRUCTION,
    GEMINI_KEY_PARAM,
    JSON_HEADERS,
    MSG_MALFORMED_LOG,
    SYSTEM_INSTRUCTION,
)
from leaflens.encoder import encode_asset
from leaflens.executor import RetryExecutor, Sleep
from leaflens.extraction import (
    AnalysisText,
    MalformedResponse,
    extract_analysis_text,
    parse_response_body,
)
from leaflens.models import BinaryAsset, EncodedPayload, RequestSpec
from leaflens.transport.client import Transport
from leaflens.transport.httpx_transport import HttpxTransport
from leaflens.vision.client import VisionClient

logger = logging.getLogger(__name__)


def build_request_body(
    payload: EncodedPayload, instruction: str, temperature: float
) -> dict[str, Any]:
    return {
        "contents": [
            {
                "role": "user",
                "parts": [
                    {"text": instruction},
                    {
                        "inlineData": {
                            "mimeType": payload.media_type,
                            "data": payload.data,
                        },
                    },
                ],
            }
        ],
        "generationConfig": {
            "systemInstruction": SYSTEM_INSTRUCTION,
            "temperature": temperature,
        },
    }


class GeminiVisionClient(VisionClient):

    def __init__(
        self,
        config: Config,
        transport: Transport | None = None,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        self._config = config
        self._owned_transport = (
            None if transport else HttpxTransport(timeout=config.request_timeout)
        )
        self._executor = RetryExecutor(
            transport or self._owned_transport,
            config.retry_policy(),
            sleep=sleep,
        )

    def build_request(self, payload: EncodedPayload, instruction: str) -> RequestSpec:
        params = (
            {GEMINI_KEY_PARAM: self._config.gemini_api_key}
            if self._config.gemini_api_key
            else {}
        )
        return RequestSpec(
            url=self._config.gemini_api_url,
            body=build_request_body(payload, instruction, self._config.temperature),
            headers=dict(JSON_HEADERS),
            params=params,
        )

    async def analyze(self, asset: BinaryAsset, instruction: str | None = None) -> str:
        payload = await encode_asset(asset)
        spec = self.build_request(payload, instruction or ANALYSIS_INSTRUCTION)
        raw = await self._executor.execute(spec)
        match extract_analysis_text(parse_response_body(raw)):
            case AnalysisText(text=text):
                return text
            case MalformedResponse() as malformed:
                logger.error(MSG_MALFORMED_LOG, malformed.body)
                raise malformed.to_exception()

    async def aclose(self) -> None:
        match self._owned_transport:
            case None:
                pass
            case transport:
                await transport.aclose()
