import pytest
from unittest.mock import AsyncMock

from leaflens.analyzer import AnalysisReport, LeafAnalyzer
from leaflens.constants import (
    MSG_ASSET_UNREADABLE_LOG,
    MSG_ERR_ASSET_UNREADABLE,
    MSG_ERR_MALFORMED,
    MSG_ERR_NO_ASSET,
    MSG_ERR_REQUEST_FAILED,
    MSG_MALFORMED_RESPONSE_LOG,
)
from leaflens.errors import (
    AssetEncodingError,
    HttpStatusError,
    MalformedResponseError,
    TransportFailureError,
)
from leaflens.models import BinaryAsset
from leaflens.vision.client import VisionClient

ASSET = BinaryAsset(media_type="image/jpeg", data=b"leaf")


def make_analyzer(**kwargs) -> tuple[LeafAnalyzer, AsyncMock]:
    vision = AsyncMock(spec=VisionClient)
    vision.analyze = AsyncMock(**kwargs)
    return LeafAnalyzer(vision), vision.analyze


async def test_analyze_returns_text_on_success():
    analyzer, analyze = make_analyzer(return_value="Mango leaf")

    report = await analyzer.analyze(ASSET)

    assert report == AnalysisReport(text="Mango leaf")
    assert report.ok
    analyze.assert_awaited_once_with(ASSET, None)


async def test_analyze_passes_instruction_through():
    analyzer, analyze = make_analyzer(return_value="ok")

    await analyzer.analyze(ASSET, "Only English please")

    analyze.assert_awaited_once_with(ASSET, "Only English please")


async def test_analyze_without_asset_asks_for_upload():
    analyzer, analyze = make_analyzer(return_value="unused")

    report = await analyzer.analyze(None)

    assert report.error == MSG_ERR_NO_ASSET
    analyze.assert_not_awaited()


@pytest.mark.parametrize(
    "error, message",
    [
        (AssetEncodingError("unreadable"), MSG_ERR_ASSET_UNREADABLE),
        (MalformedResponseError("no candidates"), MSG_ERR_MALFORMED),
        (HttpStatusError(403), MSG_ERR_REQUEST_FAILED),
        (TransportFailureError(ConnectionError()), MSG_ERR_REQUEST_FAILED),
    ],
)
async def test_analyze_maps_failures_to_messages(error, message):
    analyzer, _ = make_analyzer(side_effect=error)

    report = await analyzer.analyze(ASSET)

    assert not report.ok
    assert report.text is None
    assert report.error == message


def test_malformed_and_request_failure_messages_differ():
    assert MSG_ERR_MALFORMED != MSG_ERR_REQUEST_FAILED


async def test_analyze_propagates_unexpected_errors():
    analyzer, _ = make_analyzer(side_effect=RuntimeError("bug"))

    with pytest.raises(RuntimeError):
        await analyzer.analyze(ASSET)


@pytest.mark.parametrize(
    "error, logged",
    [
        (AssetEncodingError("unreadable"), MSG_ASSET_UNREADABLE_LOG),
        (MalformedResponseError("no candidates"), MSG_MALFORMED_RESPONSE_LOG % "no candidates"),
    ],
)
async def test_analyze_logs_diagnostics_not_user_message(caplog, error, logged):
    analyzer, _ = make_analyzer(side_effect=error)

    report = await analyzer.analyze(ASSET)

    assert logged in caplog.text
    assert report.error not in caplog.text
