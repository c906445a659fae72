# photo_overlay/services/overlay_pipeline/utils/image_path_utils.py
"""
Image Path Utilities - Overlay asset retrieval for compositing.

Handles the supported asset reference formats (http(s) URLs and opt-in
file:// URLs) and exposes them through an async fetch interface. Nothing is
cached; every fetch goes to the source.
"""

import asyncio
from pathlib import Path
from typing import Optional, Protocol
from urllib.parse import unquote, urlparse

import requests

from ....config import Settings, settings as default_settings
from ....constants import FILE_URL_PREFIX, HTTP_URL_PREFIXES
from ....enums import LogEmoji, LoggerName, LogSource
from ....exceptions import AssetFetchError
from ...logger import get_service_logger

logger = get_service_logger(LoggerName.ASSET_FETCHER, LogSource.NETWORK)


class AssetFetcher(Protocol):
    """Capability to retrieve decodable image bytes for an asset URL."""

    async def fetch(self, url: str) -> bytes: ...


def resolve_local_asset_path(asset_ref: str) -> Path:
    """
    Resolve a file:// URL or plain path to a file system path.

    Args:
        asset_ref: file:// URL or path

    Returns:
        Resolved file system path
    """
    if asset_ref.startswith(FILE_URL_PREFIX):
        return Path(unquote(urlparse(asset_ref).path))
    return Path(asset_ref)


def read_local_asset(asset_ref: str) -> bytes:
    """
    Read an overlay asset from the file system.

    Raises:
        AssetFetchError: If the path does not exist or is not a readable file
    """
    actual_path = resolve_local_asset_path(asset_ref)
    logger.debug(f"📂 Using direct file path: {actual_path}")

    if not actual_path.exists():
        raise AssetFetchError(f"Overlay asset not found: {actual_path}")
    if not actual_path.is_file():
        raise AssetFetchError(f"Overlay asset path is not a file: {actual_path}")

    try:
        return actual_path.read_bytes()
    except OSError as e:
        raise AssetFetchError(f"Cannot read overlay asset {actual_path}: {e}") from e


class HttpAssetFetcher:
    """
    Default asset fetcher backed by requests.

    HTTP(S) URLs are downloaded. file:// URLs are read from disk only when
    settings.allow_local_assets is on; any other reference is rejected.
    Blocking I/O runs in the event loop's default executor.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        session: Optional[requests.Session] = None,
    ):
        self.settings = settings or default_settings
        self.session = session

    def fetch_sync(self, url: str) -> bytes:
        """
        Retrieve asset bytes synchronously.

        Raises:
            AssetFetchError: On an empty, unsupported or disallowed URL, a network
                failure, a non-200 status or an empty body
        """
        if not url:
            raise AssetFetchError("Overlay asset URL is empty")

        if url.startswith(FILE_URL_PREFIX):
            if not self.settings.allow_local_assets:
                raise AssetFetchError(f"Local overlay assets are disabled: {url}")
            return read_local_asset(url)
        if not url.startswith(HTTP_URL_PREFIXES):
            raise AssetFetchError(f"Unsupported overlay asset URL: {url}")

        logger.debug(f"Fetching overlay asset: {url}", emoji=LogEmoji.NETWORK)
        getter = self.session.get if self.session is not None else requests.get
        try:
            response = getter(url, timeout=self.settings.asset_fetch_timeout_seconds)
        except requests.exceptions.RequestException as e:
            raise AssetFetchError(f"Failed to load overlay from {url}: {e}") from e

        if response.status_code != 200:
            raise AssetFetchError(
                f"Failed to load overlay from {url}: HTTP {response.status_code}"
            )
        if not response.content:
            raise AssetFetchError(f"Failed to load overlay from {url}: empty body")

        return response.content

    async def fetch(self, url: str) -> bytes:
        """Retrieve asset bytes without blocking the event loop."""
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, self.fetch_sync, url)
