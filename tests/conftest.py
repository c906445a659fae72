#!/usr/bin/env python3
# tests/conftest.py
"""
Pytest configuration and shared fixtures for photo overlay engine tests.
"""

import io
import random
from typing import Dict, Tuple

import pytest
from PIL import Image

from photo_overlay.config import Settings
from photo_overlay.enums import OverlayMode, OverlayPosition
from photo_overlay.exceptions import AssetFetchError
from photo_overlay.models.overlay_model import (
    OrientationSettings,
    OverlayConfig,
    OverlayItem,
)


# Custom pytest markers for organizing tests
def pytest_configure(config):
    """Configure custom pytest markers."""
    config.addinivalue_line("markers", "unit: marks tests as unit tests")
    config.addinivalue_line(
        "markers", "overlay: marks tests for overlay configuration and compositing"
    )
    config.addinivalue_line(
        "markers", "capture: marks tests for the per-capture pipeline"
    )
    config.addinivalue_line(
        "markers", "integration: marks tests as end-to-end pipeline tests"
    )


# ====================================================================
# IMAGE HELPERS
# ====================================================================


def make_image_bytes(
    size: Tuple[int, int],
    color=(0, 0, 255),
    mode: str = "RGB",
    image_format: str = "JPEG",
) -> bytes:
    """Encode a solid-color image."""
    img = Image.new(mode, size, color)
    buffer = io.BytesIO()
    img.save(buffer, format=image_format)
    return buffer.getvalue()


def open_image(data: bytes) -> Image.Image:
    img = Image.open(io.BytesIO(data))
    img.load()
    return img


@pytest.fixture
def portrait_photo_bytes() -> bytes:
    """600x800 blue JPEG photo."""
    return make_image_bytes((600, 800), (0, 0, 255))


@pytest.fixture
def landscape_photo_bytes() -> bytes:
    """800x600 blue JPEG photo."""
    return make_image_bytes((800, 600), (0, 0, 255))


@pytest.fixture
def red_overlay_png() -> bytes:
    """100x100 opaque red PNG overlay."""
    return make_image_bytes((100, 100), (255, 0, 0, 255), mode="RGBA", image_format="PNG")


@pytest.fixture
def transparent_overlay_png() -> bytes:
    """100x100 fully transparent PNG overlay."""
    return make_image_bytes((100, 100), (255, 0, 0, 0), mode="RGBA", image_format="PNG")


# ====================================================================
# CONFIGURATION FIXTURES
# ====================================================================


@pytest.fixture
def dev_settings() -> Settings:
    """Development settings (programmer errors raise)."""
    return Settings(environment="development")


@pytest.fixture
def production_settings() -> Settings:
    """Production settings (programmer errors are logged and ignored)."""
    return Settings(environment="production")


def make_overlay_item(
    overlay_id: str,
    name: str = None,
    portrait_url: str = "",
    landscape_url: str = "",
    portrait_enabled: bool = True,
    landscape_enabled: bool = True,
    position: OverlayPosition = OverlayPosition.BOTTOM_RIGHT,
    opacity: float = 1.0,
    scale: float = 0.3,
) -> OverlayItem:
    """Build an overlay item with identical placement for both orientations."""
    return OverlayItem(
        id=overlay_id,
        name=name or overlay_id.upper(),
        portrait_url=portrait_url,
        landscape_url=landscape_url,
        portrait=OrientationSettings(
            enabled=portrait_enabled, position=position, opacity=opacity, scale=scale
        ),
        landscape=OrientationSettings(
            enabled=landscape_enabled, position=position, opacity=opacity, scale=scale
        ),
    )


@pytest.fixture
def user_choice_config() -> OverlayConfig:
    """Three overlays; B is disabled for portrait, C has no landscape asset."""
    return OverlayConfig(
        enabled=True,
        mode=OverlayMode.USER_CHOICE,
        overlays=[
            make_overlay_item("a", portrait_url="mem://a", landscape_url="mem://a"),
            make_overlay_item(
                "b",
                portrait_url="mem://b",
                landscape_url="mem://b",
                portrait_enabled=False,
            ),
            make_overlay_item("c", portrait_url="mem://c", landscape_url=""),
        ],
    )


@pytest.fixture
def legacy_config_raw() -> Dict:
    """Persisted legacy single-overlay blob."""
    return {
        "enabled": True,
        "url": "https://cdn.example.com/overlays/logo.png",
        "position": "top-left",
        "opacity": 0.5,
        "scale": 0.2,
    }


class FakeAssetFetcher:
    """In-memory AssetFetcher; unknown URLs fail like a network error."""

    def __init__(self, assets: Dict[str, bytes] = None):
        self.assets = dict(assets or {})
        self.requested = []

    async def fetch(self, url: str) -> bytes:
        self.requested.append(url)
        if url not in self.assets:
            raise AssetFetchError(f"Failed to load overlay from {url}: HTTP 404")
        return self.assets[url]


@pytest.fixture
def fake_fetcher(red_overlay_png) -> FakeAssetFetcher:
    return FakeAssetFetcher(
        {"mem://a": red_overlay_png, "mem://b": red_overlay_png, "mem://c": red_overlay_png}
    )


@pytest.fixture
def seeded_rng() -> random.Random:
    return random.Random(1234)


# ====================================================================
# FACTORY FIXTURES
# ====================================================================


@pytest.fixture
def image_bytes_factory():
    """Provide make_image_bytes to tests."""
    return make_image_bytes


@pytest.fixture
def decode_bytes():
    """Provide open_image to tests."""
    return open_image


@pytest.fixture
def overlay_item_factory():
    """Provide make_overlay_item to tests."""
    return make_overlay_item


@pytest.fixture
def fetcher_factory():
    """Provide FakeAssetFetcher to tests."""
    return FakeAssetFetcher
