#!/usr/bin/env python3
"""
Unit tests for overlay configuration and capture result models.

Covers:
- Clamping of opacity and scale
- camelCase aliases of the persisted shape
- Capacity and id uniqueness of OverlayConfig
- CaptureArtifact provenance metadata
"""

import pytest
from pydantic import ValidationError

from photo_overlay.constants import MAX_OVERLAYS
from photo_overlay.enums import Orientation, OverlayMode, OverlayPosition
from photo_overlay.models.capture_pipeline_models import (
    CaptureArtifact,
    UserChoiceRequired,
)
from photo_overlay.models.overlay_model import (
    LegacyOverlayConfig,
    OrientationSettings,
    OverlayConfig,
    OverlayItem,
)


@pytest.mark.unit
@pytest.mark.overlay
class TestOrientationSettings:
    """Test suite for per-orientation placement settings."""

    def test_defaults(self):
        settings = OrientationSettings()

        assert settings.enabled is True
        assert settings.position == OverlayPosition.BOTTOM_RIGHT
        assert settings.opacity == 0.8
        assert settings.scale == 0.3

    @pytest.mark.parametrize(
        "value,expected", [(-0.5, 0.0), (0.0, 0.0), (0.42, 0.42), (1.0, 1.0), (7, 1.0)]
    )
    def test_opacity_and_scale_clamped(self, value, expected):
        settings = OrientationSettings(opacity=value, scale=value)

        assert settings.opacity == expected
        assert settings.scale == expected

    def test_assignment_is_clamped(self):
        settings = OrientationSettings()
        settings.opacity = 3.0

        assert settings.opacity == 1.0

    def test_unknown_position_rejected(self):
        with pytest.raises(ValidationError):
            OrientationSettings(position="middle")


@pytest.mark.unit
@pytest.mark.overlay
class TestOverlayItem:
    """Test suite for overlay items."""

    def test_generates_id(self):
        first = OverlayItem()
        second = OverlayItem()

        assert first.id
        assert first.id != second.id

    def test_accepts_camel_case_urls(self):
        item = OverlayItem.model_validate(
            {"id": "x", "name": "X", "portraitUrl": "p.png", "landscapeUrl": "l.png"}
        )

        assert item.portrait_url == "p.png"
        assert item.landscape_url == "l.png"

    def test_null_urls_become_empty(self):
        item = OverlayItem.model_validate({"id": "x", "portraitUrl": None})

        assert item.portrait_url == ""

    def test_orientation_accessors(self):
        item = OverlayItem(
            id="x",
            portrait_url="p.png",
            landscape_url="l.png",
            portrait=OrientationSettings(scale=0.1),
            landscape=OrientationSettings(scale=0.9),
        )

        assert item.url_for(Orientation.PORTRAIT) == "p.png"
        assert item.url_for(Orientation.LANDSCAPE) == "l.png"
        assert item.settings_for(Orientation.PORTRAIT).scale == 0.1
        assert item.settings_for(Orientation.LANDSCAPE).scale == 0.9


@pytest.mark.unit
@pytest.mark.overlay
class TestOverlayConfig:
    """Test suite for the multi-overlay configuration."""

    def test_defaults_disabled_random(self):
        config = OverlayConfig()

        assert config.enabled is False
        assert config.mode == OverlayMode.RANDOM
        assert config.overlays == []

    def test_capacity_enforced(self):
        items = [OverlayItem() for _ in range(MAX_OVERLAYS + 1)]

        with pytest.raises(ValidationError):
            OverlayConfig(enabled=True, overlays=items)

    def test_duplicate_ids_rejected(self):
        with pytest.raises(ValidationError):
            OverlayConfig(overlays=[OverlayItem(id="dup"), OverlayItem(id="dup")])

    def test_get_item(self):
        config = OverlayConfig(overlays=[OverlayItem(id="a"), OverlayItem(id="b")])

        assert config.get_item("b").id == "b"
        assert config.get_item("missing") is None

    def test_to_raw_uses_persisted_keys(self):
        config = OverlayConfig(
            enabled=True,
            mode=OverlayMode.USER_CHOICE,
            overlays=[OverlayItem(id="a", name="A", portrait_url="p.png")],
        )

        raw = config.to_raw()

        assert raw["mode"] == "user_choice"
        assert raw["overlays"][0]["portraitUrl"] == "p.png"
        assert raw["overlays"][0]["portrait"]["position"] == "bottom-right"
        assert OverlayConfig.model_validate(raw) == config


@pytest.mark.unit
@pytest.mark.overlay
class TestLegacyOverlayConfig:
    """Test suite for the legacy single-overlay shape."""

    def test_url_required(self):
        with pytest.raises(ValidationError):
            LegacyOverlayConfig(enabled=True)

    def test_clamps(self):
        legacy = LegacyOverlayConfig(url="x.png", opacity=2, scale=-1)

        assert legacy.opacity == 1.0
        assert legacy.scale == 0.0


@pytest.mark.unit
@pytest.mark.capture
class TestCaptureModels:
    """Test suite for capture hand-off models."""

    def test_artifact_without_overlay(self):
        artifact = CaptureArtifact(
            original_bytes=b"abc",
            manipulated_bytes=b"abc",
            orientation=Orientation.PORTRAIT,
        )

        assert artifact.has_overlay is False
        assert artifact.mime_type == "image/jpeg"

    def test_upload_metadata(self):
        artifact = CaptureArtifact(
            original_bytes=b"abc",
            manipulated_bytes=b"abcdef",
            orientation=Orientation.LANDSCAPE,
            chosen_overlay_id="a",
            chosen_overlay_name="Logo",
        )

        metadata = artifact.upload_metadata()

        assert metadata["has_overlay"] is True
        assert metadata["overlay_id"] == "a"
        assert metadata["overlay_name"] == "Logo"
        assert metadata["orientation"] == "landscape"
        assert metadata["original_size"] == 3
        assert metadata["manipulated_size"] == 6

    def test_user_choice_slot_count(self):
        request = UserChoiceRequired(
            orientation=Orientation.PORTRAIT,
            eligible=[OverlayItem(id="a"), OverlayItem(id="b")],
        )

        assert request.slot_count == 3
        assert request.highlighted_index == 0
