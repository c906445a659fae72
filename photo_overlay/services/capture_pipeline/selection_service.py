# photo_overlay/services/capture_pipeline/selection_service.py
"""
Selection Service - Resolves one overlay (or none) from the eligible set.

State machine per capture:

    UNSELECTED --random--------> AUTO_SELECTED (terminal)
    UNSELECTED --user_choice---> AWAITING_USER_CHOICE --confirm--> CONFIRMED
    any state  --reset---------> UNSELECTED

While awaiting a choice the carousel has ``len(eligible) + 1`` slots: slot 0 is
"no overlay" and slot k is eligible item k-1. Navigation wraps around all slots.
"""

import random
from typing import Callable, Dict, List, Optional

from ...enums import (
    LoggerName,
    LogSource,
    NavigationDirection,
    OverlayMode,
    SelectionState,
)
from ...exceptions import SelectionStateError
from ...models.overlay_model import OverlayItem
from ..logger import get_service_logger

logger = get_service_logger(LoggerName.CAPTURE_PIPELINE, LogSource.PIPELINE)

NO_OVERLAY_SLOT = 0

CURRENT_HIGHLIGHT = object()


def index_to_slot(index: Optional[int]) -> int:
    """Map an eligible-item index (None = no overlay) to its carousel slot."""
    return NO_OVERLAY_SLOT if index is None else index + 1


def slot_to_index(slot: int) -> Optional[int]:
    """Map a carousel slot back to an eligible-item index (None = no overlay)."""
    return None if slot == NO_OVERLAY_SLOT else slot - 1


def navigate_index(
    current: Optional[int], direction: NavigationDirection, eligible_count: int
) -> Optional[int]:
    """
    Move one carousel slot left or right, wrapping modulo eligible_count + 1.

    "No overlay" is an ordinary member of the cycle.
    """
    total_slots = eligible_count + 1
    step = -1 if NavigationDirection(direction) == NavigationDirection.LEFT else 1
    return slot_to_index((index_to_slot(current) + step) % total_slots)


class OverlaySelection:
    """
    Per-capture selection state.

    Args:
        rng: Random source for random mode (injectable for deterministic tests)
    """

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()
        self.reset()

    def reset(self) -> None:
        """Discard all state (retake). No carryover between captures."""
        self.state = SelectionState.UNSELECTED
        self.eligible: List[OverlayItem] = []
        self.highlighted_index: Optional[int] = None
        self.chosen_index: Optional[int] = None

    @property
    def is_resolved(self) -> bool:
        """Whether a final choice (possibly 'no overlay') exists."""
        return self.state in (SelectionState.AUTO_SELECTED, SelectionState.CONFIRMED)

    @property
    def chosen_item(self) -> Optional[OverlayItem]:
        """The resolved overlay item, or None for 'no overlay' / unresolved."""
        if not self.is_resolved or self.chosen_index is None:
            return None
        return self.eligible[self.chosen_index]

    def _require_state(self, expected: SelectionState, action: str) -> None:
        if self.state != expected:
            raise SelectionStateError(
                f"Cannot {action} in state {self.state.value}; "
                f"expected {expected.value}"
            )

    def _check_index(self, index: Optional[int]) -> None:
        if index is not None and not 0 <= index < len(self.eligible):
            raise IndexError(
                f"Overlay index {index} out of range for {len(self.eligible)} eligible overlays"
            )

    def begin(self, eligible: List[OverlayItem], mode: OverlayMode) -> SelectionState:
        """
        Start selection over a non-empty eligible set.

        Raises:
            SelectionStateError: If selection already started or eligible is empty
        """
        self._require_state(SelectionState.UNSELECTED, "begin selection")
        if not eligible:
            raise SelectionStateError("Cannot begin selection without eligible overlays")

        self.eligible = list(eligible)
        _SELECTION_STRATEGIES[OverlayMode(mode)](self)
        return self.state

    def _select_random(self) -> None:
        self.chosen_index = self.rng.randrange(len(self.eligible))
        self.highlighted_index = self.chosen_index
        self.state = SelectionState.AUTO_SELECTED
        logger.debug(
            f"Randomly selected overlay {self.chosen_index + 1}/{len(self.eligible)}"
        )

    def _await_user_choice(self) -> None:
        self.highlighted_index = 0
        self.state = SelectionState.AWAITING_USER_CHOICE

    def navigate(self, direction: NavigationDirection) -> Optional[int]:
        """
        Move the highlight one slot; never confirms.

        Raises:
            SelectionStateError: If not awaiting a user choice
        """
        self._require_state(SelectionState.AWAITING_USER_CHOICE, "navigate")
        self.highlighted_index = navigate_index(
            self.highlighted_index, direction, len(self.eligible)
        )
        return self.highlighted_index

    def highlight(self, index: Optional[int]) -> None:
        """
        Highlight an item directly (None = no overlay); never confirms.

        Raises:
            SelectionStateError: If not awaiting a user choice
            IndexError: If index is outside the eligible set
        """
        self._require_state(SelectionState.AWAITING_USER_CHOICE, "highlight")
        self._check_index(index)
        self.highlighted_index = index

    def confirm(self, index=CURRENT_HIGHLIGHT) -> Optional[int]:
        """
        Confirm the user's choice; defaults to the highlighted item.

        Raises:
            SelectionStateError: If not awaiting a user choice
            IndexError: If index is outside the eligible set
        """
        self._require_state(SelectionState.AWAITING_USER_CHOICE, "confirm selection")
        chosen = self.highlighted_index if index is CURRENT_HIGHLIGHT else index
        self._check_index(chosen)

        self.highlighted_index = chosen
        self.chosen_index = chosen
        self.state = SelectionState.CONFIRMED
        return chosen


_SELECTION_STRATEGIES: Dict[OverlayMode, Callable[[OverlaySelection], None]] = {
    OverlayMode.RANDOM: OverlaySelection._select_random,
    OverlayMode.USER_CHOICE: OverlaySelection._await_user_choice,
}
