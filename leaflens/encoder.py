"""Payload encoder — turns a BinaryAsset into base64 text for a JSON body."""
import asyncio
import base64
import logging
from pathlib import Path

from leaflens.errors import AssetEncodingError
from leaflens.models import BinaryAsset, EncodedPayload

logger = logging.getLogger(__name__)


async def _read_bytes(asset: BinaryAsset) -> bytes:
    match (asset.data, asset.path):
        case (bytes() | bytearray() | memoryview() as data, _):
            return bytes(data)
        case (None, None):
            raise AssetEncodingError("Asset has neither bytes nor a path")
        case (None, Path() as path):
            try:
                return await asyncio.to_thread(path.read_bytes)
            except OSError as exc:
                raise AssetEncodingError(f"Asset unreadable: {path}") from exc
        case (data, path):
            raise AssetEncodingError(
                f"Unsupported asset source: data={type(data).__name__}, path={path!r}"
            )


async def encode_asset(asset: BinaryAsset) -> EncodedPayload:
    """Read the asset once and return its base64 encoding. Raises AssetEncodingError."""
    if not asset.media_type:
        raise AssetEncodingError("Asset has no media type")
    raw = await _read_bytes(asset)
    logger.debug("Encoding %s (%d bytes, %s)", asset.name, len(raw), asset.media_type)
    return EncodedPayload(
        media_type=asset.media_type,
        data=base64.standard_b64encode(raw).decode("ascii"),
    )


def decode_payload(payload: EncodedPayload) -> bytes:
    return payload.decode()
