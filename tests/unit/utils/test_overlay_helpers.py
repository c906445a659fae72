#!/usr/bin/env python3
"""
Unit tests for overlay configuration helpers.

Tests legacy detection and migration, boundary parsing and link config loading.
"""

import json
from unittest.mock import MagicMock

import pytest

from photo_overlay.enums import OverlayMode, OverlayPosition
from photo_overlay.exceptions import ConfigError
from photo_overlay.models.overlay_model import LegacyOverlayConfig, OverlayConfig
from photo_overlay.services.overlay_pipeline.utils.overlay_helpers import (
    create_empty_overlay_item,
    get_default_overlay_config,
    is_legacy_overlay_config,
    load_link_overlay_config,
    migrate_legacy_config,
    parse_overlay_config,
    resolve_overlay_config,
)


@pytest.mark.unit
@pytest.mark.overlay
class TestLegacyDetection:
    """Test suite for structural legacy-format detection."""

    def test_legacy_blob_detected(self, legacy_config_raw):
        assert is_legacy_overlay_config(legacy_config_raw) is True

    def test_current_blob_not_legacy(self):
        assert is_legacy_overlay_config({"enabled": True, "overlays": []}) is False

    def test_url_with_overlays_key_not_legacy(self):
        raw = {"url": "x.png", "overlays": []}

        assert is_legacy_overlay_config(raw) is False

    def test_non_string_url_not_legacy(self):
        assert is_legacy_overlay_config({"url": 42}) is False

    @pytest.mark.parametrize("raw", [None, "x.png", 5, ["url"]])
    def test_non_mapping_not_legacy(self, raw):
        assert is_legacy_overlay_config(raw) is False


@pytest.mark.unit
@pytest.mark.overlay
class TestLegacyMigration:
    """Test suite for legacy-to-current migration."""

    def test_migrates_to_single_item(self, legacy_config_raw):
        legacy = LegacyOverlayConfig.model_validate(legacy_config_raw)

        config = migrate_legacy_config(legacy)

        assert config.enabled is True
        assert config.mode == OverlayMode.RANDOM
        assert len(config.overlays) == 1

        item = config.overlays[0]
        assert item.name == "Default Overlay"
        assert item.portrait_url == legacy_config_raw["url"]
        assert item.landscape_url == legacy_config_raw["url"]
        for settings in (item.portrait, item.landscape):
            assert settings.enabled is True
            assert settings.position == OverlayPosition.TOP_LEFT
            assert settings.opacity == 0.5
            assert settings.scale == 0.2

    def test_disabled_legacy_stays_disabled(self):
        legacy = LegacyOverlayConfig(enabled=False, url="x.png")

        assert migrate_legacy_config(legacy).enabled is False

    def test_orientation_settings_are_independent(self):
        config = migrate_legacy_config(LegacyOverlayConfig(url="x.png"))
        item = config.overlays[0]

        item.portrait.scale = 0.9

        assert item.landscape.scale != 0.9

    def test_fresh_id_per_migration(self):
        legacy = LegacyOverlayConfig(url="x.png")

        first = migrate_legacy_config(legacy).overlays[0].id
        second = migrate_legacy_config(legacy).overlays[0].id

        assert first != second


@pytest.mark.unit
@pytest.mark.overlay
class TestParseAndResolve:
    """Test suite for boundary parsing."""

    def test_none_resolves_to_default(self):
        assert resolve_overlay_config(None) == get_default_overlay_config()

    def test_legacy_resolves_to_current(self, legacy_config_raw):
        config = resolve_overlay_config(legacy_config_raw)

        assert isinstance(config, OverlayConfig)
        assert config.overlays[0].portrait_url == legacy_config_raw["url"]

    def test_current_blob_parsed(self):
        raw = {
            "enabled": True,
            "mode": "user_choice",
            "overlays": [{"id": "a", "name": "A", "portraitUrl": "p.png"}],
        }

        config = resolve_overlay_config(raw)

        assert config.mode == OverlayMode.USER_CHOICE
        assert config.overlays[0].id == "a"

    def test_json_string_parsed(self, legacy_config_raw):
        parsed = parse_overlay_config(json.dumps(legacy_config_raw))

        assert isinstance(parsed, LegacyOverlayConfig)

    def test_typed_config_passes_through(self):
        config = OverlayConfig(enabled=True)

        assert parse_overlay_config(config) is config

    @pytest.mark.parametrize(
        "raw",
        [
            "not json",
            "[1, 2]",
            42,
            {"enabled": True, "mode": "sometimes"},
            {"overlays": "nope"},
        ],
    )
    def test_malformed_raises_config_error(self, raw):
        with pytest.raises(ConfigError):
            resolve_overlay_config(raw)


@pytest.mark.unit
@pytest.mark.overlay
class TestDefaultsAndLoading:
    """Test suite for defaults and link config loading."""

    def test_empty_item_defaults(self):
        item = create_empty_overlay_item()

        assert item.id
        assert item.portrait_url == ""
        assert item.portrait.enabled is True
        assert item.landscape.opacity == 0.8

    def test_load_link_config(self, legacy_config_raw):
        source = MagicMock()
        source.get_link_overlay_config.return_value = legacy_config_raw

        config = load_link_overlay_config(source, "link-1")

        source.get_link_overlay_config.assert_called_once_with("link-1")
        assert config.enabled is True

    def test_load_link_config_propagates_config_error(self):
        source = MagicMock()
        source.get_link_overlay_config.return_value = {"overlays": 7}

        with pytest.raises(ConfigError):
            load_link_overlay_config(source, "link-1")
