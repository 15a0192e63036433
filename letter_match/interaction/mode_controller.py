from __future__ import annotations

import logging
from typing import Callable

from letter_match.interaction import Mode

logger = logging.getLogger(__name__)


class ModeController:
    """Connect/Delete mode flag and the gates derived from it."""

    def __init__(self, on_change: Callable[[Mode], None] | None = None) -> None:
        self._mode = Mode.CONNECT
        self._gestures_enabled = True
        self._on_change = on_change

    @property
    def mode(self) -> Mode:
        return self._mode

    @property
    def delete_active(self) -> bool:
        return self._mode is Mode.DELETE

    @property
    def allow_start(self) -> bool:
        """Whether a new drag may begin."""
        return self._gestures_enabled and self._mode is Mode.CONNECT

    @property
    def connectors_interactive(self) -> bool:
        return self._mode is Mode.DELETE

    def set_gestures_enabled(self, enabled: bool) -> None:
        self._gestures_enabled = bool(enabled)

    def enter_delete(self) -> bool:
        return self._set_mode(Mode.DELETE)

    def exit_delete(self) -> bool:
        return self._set_mode(Mode.CONNECT)

    def toggle(self) -> Mode:
        if self.delete_active:
            self.exit_delete()
        else:
            self.enter_delete()
        return self._mode

    def accepts_connector_tap(self) -> bool:
        return self.delete_active

    def _set_mode(self, mode: Mode) -> bool:
        if mode is self._mode:
            return False
        self._mode = mode
        logger.debug("Mode changed to %s", mode.value)
        if self._on_change is not None:
            self._on_change(mode)
        return True
