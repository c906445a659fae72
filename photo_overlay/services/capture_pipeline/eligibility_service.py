# photo_overlay/services/capture_pipeline/eligibility_service.py
"""
Eligibility Service - Which configured overlays can be offered for a photo.
"""

from typing import List

from ...enums import Orientation
from ...models.overlay_model import OverlayConfig, OverlayItem


def should_run_overlay_flow(config: OverlayConfig) -> bool:
    """Whether the overlay flow is triggered at all for this config."""
    return config.enabled and len(config.overlays) > 0


def is_eligible(item: OverlayItem, orientation: Orientation) -> bool:
    """Enabled for the orientation and backed by an asset for it."""
    return item.settings_for(orientation).enabled and bool(item.url_for(orientation))


def get_eligible_overlays(
    config: OverlayConfig, orientation: Orientation
) -> List[OverlayItem]:
    """
    Filter overlays to those usable for the given orientation.

    Configured order is preserved. A disabled or empty config yields nothing,
    whatever its items contain.
    """
    if not should_run_overlay_flow(config):
        return []

    return [item for item in config.overlays if is_eligible(item, orientation)]
