"""Turns moodboard assets into inline request parts."""

import base64
import logging
from typing import List, Optional, Sequence

import aiofiles
import httpx

from ..config import settings
from ..models.visual_asset import (
    AssetOrigin,
    DEFAULT_IMAGE_MIME_TYPE,
    EncodedAsset,
    EncodingOutcome,
    InlineDataPart,
    SkippedAsset,
    TextPart,
    VisualAsset,
)


logger = logging.getLogger(__name__)


def url_placeholder(url: str) -> TextPart:
    """Text stand-in for a remote image whose bytes could not be fetched."""
    return TextPart(text=f"[Image URL Source]: {url}")


async def encode_asset(
    asset: VisualAsset,
    http_client: Optional[httpx.AsyncClient] = None,
) -> EncodingOutcome:
    """Encode one asset as an inline-data part.
    
    Local files that cannot be read are skipped. Remote images that cannot be
    fetched degrade to a text part carrying the URL.
    
    Args:
        asset: Asset to encode
        http_client: Client used for remote fetches; a short-lived one is
            created when omitted
        
    Returns:
        EncodedAsset or SkippedAsset
    """
    if asset.origin == AssetOrigin.FILE:
        return await _encode_file(asset)
    
    if http_client is None:
        async with _new_http_client() as client:
            return await _encode_url(asset, client)
    return await _encode_url(asset, http_client)


async def encode_assets(
    assets: Sequence[VisualAsset],
    http_client: Optional[httpx.AsyncClient] = None,
    timeout: Optional[float] = None,
) -> List[EncodingOutcome]:
    """Encode assets one after another, keeping the input order.
    
    A single http client is shared by all remote fetches of the batch.
    """
    outcomes: List[EncodingOutcome] = []
    
    if http_client is None and any(a.origin == AssetOrigin.URL for a in assets):
        async with _new_http_client(timeout) as client:
            for asset in assets:
                outcomes.append(await encode_asset(asset, client))
        return outcomes
    
    for asset in assets:
        outcomes.append(await encode_asset(asset, http_client))
    return outcomes


def _new_http_client(timeout: Optional[float] = None) -> httpx.AsyncClient:
    return httpx.AsyncClient(
        timeout=timeout if timeout is not None else settings.request_timeout,
        follow_redirects=True,
    )


async def _encode_file(asset: VisualAsset) -> EncodingOutcome:
    try:
        async with aiofiles.open(asset.file_path, 'rb') as f:
            content = await f.read()
    except OSError as e:
        logger.warning(f"Could not read asset {asset.file_path}: {e}")
        return SkippedAsset(asset_id=asset.id, reason=f"Failed to read file: {e}")
    
    return EncodedAsset(
        asset_id=asset.id,
        part=InlineDataPart(
            mime_type=asset.resolved_mime_type(),
            data=base64.b64encode(content).decode("ascii"),
        ),
    )


async def _encode_url(asset: VisualAsset, client: httpx.AsyncClient) -> EncodingOutcome:
    # Hosts failing IDNA checks raise UnicodeError before any request is sent
    try:
        response = await client.get(asset.url)
        response.raise_for_status()
    except (httpx.HTTPError, httpx.InvalidURL, UnicodeError) as e:
        logger.warning(f"Could not fetch {asset.url} ({e}). Sending URL as text instead.")
        return EncodedAsset(asset_id=asset.id, part=url_placeholder(asset.url))
    
    content_type = response.headers.get("content-type", "").split(";")[0].strip().lower()
    mime_type = content_type if content_type.startswith("image/") else DEFAULT_IMAGE_MIME_TYPE
    
    return EncodedAsset(
        asset_id=asset.id,
        part=InlineDataPart(
            mime_type=mime_type,
            data=base64.b64encode(response.content).decode("ascii"),
        ),
    )
