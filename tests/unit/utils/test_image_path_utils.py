#!/usr/bin/env python3
"""
Unit tests for overlay asset retrieval.

HTTP access is mocked; local paths use temporary files.
"""

from unittest.mock import MagicMock, patch

import pytest
import requests

from photo_overlay.config import Settings
from photo_overlay.exceptions import AssetFetchError
from photo_overlay.services.overlay_pipeline.utils.image_path_utils import (
    HttpAssetFetcher,
    read_local_asset,
    resolve_local_asset_path,
)

ASSET_URL = "https://cdn.example.com/overlays/logo.png"


def _response(status_code=200, content=b"png-bytes"):
    response = MagicMock()
    response.status_code = status_code
    response.content = content
    return response


@pytest.mark.unit
@pytest.mark.overlay
class TestLocalAssets:
    """Test suite for file system assets."""

    def test_file_url_resolved(self):
        assert str(resolve_local_asset_path("file:///tmp/logo%20a.png")) == "/tmp/logo a.png"

    def test_plain_path_resolved(self):
        assert str(resolve_local_asset_path("/data/logo.png")) == "/data/logo.png"

    def test_reads_existing_file(self, tmp_path):
        asset = tmp_path / "logo.png"
        asset.write_bytes(b"png-bytes")

        assert read_local_asset(str(asset)) == b"png-bytes"

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(AssetFetchError):
            read_local_asset(str(tmp_path / "missing.png"))

    def test_directory_raises(self, tmp_path):
        with pytest.raises(AssetFetchError):
            read_local_asset(str(tmp_path))


@pytest.mark.unit
@pytest.mark.overlay
class TestHttpAssetFetcher:
    """Test suite for the default asset fetcher."""

    @pytest.fixture
    def fetcher(self):
        return HttpAssetFetcher(settings=Settings(asset_fetch_timeout_seconds=3))

    @patch("requests.get")
    def test_fetch_success(self, mock_get, fetcher):
        mock_get.return_value = _response()

        assert fetcher.fetch_sync(ASSET_URL) == b"png-bytes"
        mock_get.assert_called_once_with(ASSET_URL, timeout=3)

    @patch("requests.get")
    def test_non_200_raises(self, mock_get, fetcher):
        mock_get.return_value = _response(status_code=404)

        with pytest.raises(AssetFetchError, match="HTTP 404"):
            fetcher.fetch_sync(ASSET_URL)

    @patch("requests.get")
    def test_empty_body_raises(self, mock_get, fetcher):
        mock_get.return_value = _response(content=b"")

        with pytest.raises(AssetFetchError):
            fetcher.fetch_sync(ASSET_URL)

    @patch("requests.get")
    def test_network_error_raises(self, mock_get, fetcher):
        mock_get.side_effect = requests.exceptions.ConnectionError("unreachable")

        with pytest.raises(AssetFetchError):
            fetcher.fetch_sync(ASSET_URL)

    @patch("requests.get")
    def test_timeout_raises(self, mock_get, fetcher):
        mock_get.side_effect = requests.exceptions.Timeout("too slow")

        with pytest.raises(AssetFetchError):
            fetcher.fetch_sync(ASSET_URL)

    def test_empty_url_raises(self, fetcher):
        with pytest.raises(AssetFetchError):
            fetcher.fetch_sync("")

    def test_uses_session_when_given(self):
        session = MagicMock()
        session.get.return_value = _response()
        fetcher = HttpAssetFetcher(settings=Settings(), session=session)

        assert fetcher.fetch_sync(ASSET_URL) == b"png-bytes"
        session.get.assert_called_once()

    def test_file_url_read_when_local_assets_allowed(self, tmp_path):
        asset = tmp_path / "logo.png"
        asset.write_bytes(b"local")
        fetcher = HttpAssetFetcher(settings=Settings(allow_local_assets=True))

        with patch("requests.get") as mock_get:
            assert fetcher.fetch_sync(f"file://{asset}") == b"local"
            mock_get.assert_not_called()

    def test_file_url_rejected_by_default(self, fetcher, tmp_path):
        asset = tmp_path / "logo.png"
        asset.write_bytes(b"local")

        with patch("requests.get") as mock_get:
            with pytest.raises(AssetFetchError, match="disabled"):
                fetcher.fetch_sync(f"file://{asset}")
            mock_get.assert_not_called()

    @pytest.mark.parametrize("url", ["/etc/passwd", "../secrets/key.png", "ftp://host/logo.png"])
    def test_non_http_reference_rejected(self, url):
        fetcher = HttpAssetFetcher(settings=Settings(allow_local_assets=True))

        with patch("requests.get") as mock_get:
            with pytest.raises(AssetFetchError, match="Unsupported"):
                fetcher.fetch_sync(url)
            mock_get.assert_not_called()

    def test_plain_path_to_existing_file_not_read(self, tmp_path):
        asset = tmp_path / "logo.png"
        asset.write_bytes(b"local")
        fetcher = HttpAssetFetcher(settings=Settings(allow_local_assets=True))

        with pytest.raises(AssetFetchError):
            fetcher.fetch_sync(str(asset))

    @pytest.mark.asyncio
    @patch("requests.get")
    async def test_async_fetch(self, mock_get, fetcher):
        mock_get.return_value = _response(content=b"async-bytes")

        assert await fetcher.fetch(ASSET_URL) == b"async-bytes"
