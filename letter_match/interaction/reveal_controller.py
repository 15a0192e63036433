from __future__ import annotations

import logging
from typing import Callable

from letter_match.model.pairing_store import PairingStore

logger = logging.getLogger(__name__)


class RevealController:
    """Shows or hides the ground-truth pairing through the store."""

    def __init__(
        self,
        store: PairingStore,
        clear: Callable[[], None],
        on_change: Callable[[bool], None] | None = None,
    ) -> None:
        self._store = store
        self._clear = clear
        self._on_change = on_change
        self._revealed = False

    @property
    def revealed(self) -> bool:
        return self._revealed

    def toggle(self) -> bool:
        """Flip the reveal flag and return the new value."""

        reveal = not self._revealed
        self._clear()
        if reveal:
            for left_index, right_index in self._store.round.solution():
                self._store.add(left_index, right_index)
            logger.debug("Revealed %d pairings", len(self._store))
        self._set(reveal)
        return reveal

    def reset(self) -> None:
        self._set(False)

    def _set(self, revealed: bool) -> None:
        if revealed == self._revealed:
            return
        self._revealed = revealed
        if self._on_change is not None:
            self._on_change(revealed)
