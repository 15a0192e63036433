"""Coalesced connector refresh after layout changes."""
from __future__ import annotations

import logging
from typing import Callable, Protocol

from PyQt5 import QtCore

logger = logging.getLogger(__name__)

DEFAULT_REFRESH_DELAY_MS = 100


class RefreshScheduling(Protocol):
    def schedule(self, delay_ms: int | None = None) -> None:
        ...

    def cancel(self) -> None:
        ...

    def flush(self) -> bool:
        ...

    def is_pending(self) -> bool:
        ...


class RefreshScheduler:
    """Single restartable timer: bursts of layout events produce one refresh.

    Each ``schedule`` restarts the pending countdown instead of queueing a
    second one, so the callback fires once, ``delay_ms`` after the last call.
    """

    def __init__(
        self,
        callback: Callable[[], None],
        delay_ms: int = DEFAULT_REFRESH_DELAY_MS,
        parent: QtCore.QObject | None = None,
    ) -> None:
        self._callback = callback
        self._delay_ms = max(0, int(delay_ms))
        self._timer = QtCore.QTimer(parent)
        self._timer.setSingleShot(True)
        self._timer.timeout.connect(self._fire)
        self.fired_count = 0

    @property
    def delay_ms(self) -> int:
        return self._delay_ms

    def schedule(self, delay_ms: int | None = None) -> None:
        interval = self._delay_ms if delay_ms is None else max(0, int(delay_ms))
        self._timer.start(interval)

    def cancel(self) -> None:
        self._timer.stop()

    def is_pending(self) -> bool:
        return self._timer.isActive()

    def flush(self) -> bool:
        """Run a pending refresh now; False when nothing was pending."""
        if not self._timer.isActive():
            return False
        self._timer.stop()
        self._fire()
        return True

    def _fire(self) -> None:
        self.fired_count += 1
        logger.debug("Refreshing connectors after layout change")
        self._callback()
