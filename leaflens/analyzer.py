"""LeafAnalyzer — turns a vision call into a report with a user-facing message."""
import logging
from dataclasses import dataclass
from typing import Optional

from leaflens.constants import (
    MSG_ANALYSIS_FAILED_LOG,
    MSG_ANALYZER_STARTING,
    MSG_ASSET_UNREADABLE_LOG,
    MSG_ERR_ASSET_UNREADABLE,
    MSG_ERR_MALFORMED,
    MSG_ERR_NO_ASSET,
    MSG_ERR_REQUEST_FAILED,
    MSG_MALFORMED_RESPONSE_LOG,
)
from leaflens.errors import (
    AnalysisRequestError,
    AssetEncodingError,
    MalformedResponseError,
)
from leaflens.models import BinaryAsset
from leaflens.vision.client import VisionClient

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AnalysisReport:
    text: Optional[str] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class LeafAnalyzer:
    """Runs one analysis per call; no state is kept between calls."""

    def __init__(self, vision_client: VisionClient) -> None:
        self._vision = vision_client

    async def analyze(
        self, asset: BinaryAsset | None, instruction: str | None = None
    ) -> AnalysisReport:
        match asset:
            case None:
                return AnalysisReport(error=MSG_ERR_NO_ASSET)
            case _:
                logger.info(MSG_ANALYZER_STARTING, asset.name)

        try:
            text = await self._vision.analyze(asset, instruction)
        except AssetEncodingError:
            logger.exception(MSG_ASSET_UNREADABLE_LOG)
            return AnalysisReport(error=MSG_ERR_ASSET_UNREADABLE)
        except MalformedResponseError as exc:
            logger.error(MSG_MALFORMED_RESPONSE_LOG, exc.reason)
            return AnalysisReport(error=MSG_ERR_MALFORMED)
        except AnalysisRequestError:
            logger.exception(MSG_ANALYSIS_FAILED_LOG)
            return AnalysisReport(error=MSG_ERR_REQUEST_FAILED)
        return AnalysisReport(text=text)
