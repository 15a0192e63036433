"""Drag/tap state machine that turns input into committed pairings."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Protocol

from letter_match.geometry.curves import CubicCurve, Point, curve_between
from letter_match.geometry.layout import anchor_of, to_surface
from letter_match.interaction import EventKind, InputEvent
from letter_match.interaction.mode_controller import ModeController
from letter_match.model.pairing_store import ItemState, Pairing, PairingStore
from letter_match.model.round import ItemRef, Side

logger = logging.getLogger(__name__)


class GestureState(Enum):
    IDLE = "idle"
    DRAGGING = "dragging"


class PointerCapture(Protocol):
    """Move/end subscription held for the lifetime of one drag."""

    def acquire(self) -> None:
        ...

    def release(self) -> None:
        ...


class NullCapture:
    def __init__(self) -> None:
        self.active = False

    def acquire(self) -> None:
        self.active = True

    def release(self) -> None:
        self.active = False


@dataclass(frozen=True)
class DragSource:
    ref: ItemRef
    anchor: Point


class GestureStateMachine:
    """Idle/Dragging machine over normalized input events.

    Only one drag exists at a time. Every way out of Dragging (commit,
    drop on nothing, cancel) goes through ``_finish`` which removes the
    indicator, clears the source highlight and releases pointer capture.
    """

    def __init__(
        self,
        store: PairingStore,
        modes: ModeController,
        capture: PointerCapture | None = None,
        on_indicator: Callable[[CubicCurve | None], None] | None = None,
        on_item_state: Callable[[ItemRef, ItemState], None] | None = None,
    ) -> None:
        self._store = store
        self._modes = modes
        self._capture: PointerCapture = capture or NullCapture()
        self._on_indicator = on_indicator
        self._on_item_state = on_item_state
        self._state = GestureState.IDLE
        self._source: DragSource | None = None
        self._indicator: CubicCurve | None = None
        self._capture_held = False

    @property
    def state(self) -> GestureState:
        return self._state

    @property
    def is_dragging(self) -> bool:
        return self._state is GestureState.DRAGGING

    @property
    def source(self) -> ItemRef | None:
        return self._source.ref if self._source is not None else None

    @property
    def indicator(self) -> CubicCurve | None:
        return self._indicator

    def handle(self, event: InputEvent) -> bool:
        """Route one event; returns True when the host should treat it as consumed."""

        if event.kind is EventKind.START:
            return event.target is not None and self.start(event.target)
        if event.kind is EventKind.MOVE:
            return self.move(event.position, event.contacts)
        if event.kind is EventKind.END:
            if not self.is_dragging:
                return False
            self.end(event.position, event.contacts)
            return True
        if event.kind is EventKind.TAP:
            if event.target is None or not self.is_dragging:
                return False
            self.tap(event.target)
            return True
        return False

    def start(self, ref: ItemRef) -> bool:
        if self.is_dragging:
            logger.debug("Start on %s ignored: drag already active", ref)
            return False
        if not self._modes.allow_start:
            logger.debug("Start on %s ignored: starts disallowed in %s mode", ref, self._modes.mode.value)
            return False
        if ref.side is not Side.LEFT or not self._store.round.contains(ref):
            return False
        if self._store.is_paired(ref):
            return False
        anchor = anchor_of(ref, self._store.layout)
        if anchor is None:
            return False

        self._state = GestureState.DRAGGING
        self._source = DragSource(ref, anchor)
        self._set_item_state(ref, ItemState.ACTIVE)
        self._set_indicator(curve_between(anchor, anchor))
        self._capture.acquire()
        self._capture_held = True
        logger.debug("Drag started from left %d", ref.index)
        return True

    def move(self, position: Point | None, contacts: int = 1) -> bool:
        if not self.is_dragging or self._source is None:
            return False
        if contacts != 1:
            # extra fingers: swallow the scroll, keep the last indicator
            return True
        if position is None:
            return False
        anchor = anchor_of(self._source.ref, self._store.layout) or self._source.anchor
        self._set_indicator(curve_between(anchor, to_surface(position, self._store.layout)))
        return True

    def end(self, position: Point | None, contacts: int = 1) -> Pairing | None:
        """Resolve the drag at ``position``; the pairing created, if any."""

        if not self.is_dragging or self._source is None:
            return None
        if contacts < 1 or position is None:
            logger.debug("Drag cancelled: release without contact point")
            self._finish()
            return None

        target = self._store.layout.item_at(position)
        return self._commit(target)

    def tap(self, ref: ItemRef) -> Pairing | None:
        """Connect the current source to a tapped item without a drag."""

        if not self.is_dragging:
            return None
        return self._commit(ref)

    def cancel(self) -> bool:
        if not self.is_dragging:
            return False
        logger.debug("Drag cancelled")
        self._finish()
        return True

    def _commit(self, target: ItemRef | None) -> Pairing | None:
        if self._source is None:
            return None
        source = self._source.ref
        self._finish()
        if (
            target is None
            or target.side is not source.side.opposite
            or not self._store.round.contains(target)
        ):
            logger.debug("Drag from left %d dropped on %s: nothing paired", source.index, target)
            return None
        return self._store.add(source.index, target.index)

    def _finish(self) -> None:
        source = self._source
        self._state = GestureState.IDLE
        self._source = None
        try:
            self._set_indicator(None)
            if source is not None:
                self._set_item_state(source.ref, ItemState.NORMAL)
        finally:
            if self._capture_held:
                self._capture_held = False
                self._capture.release()

    def _set_indicator(self, curve: CubicCurve | None) -> None:
        self._indicator = curve
        if self._on_indicator is not None:
            self._on_indicator(curve)

    def _set_item_state(self, ref: ItemRef, state: ItemState) -> None:
        if self._on_item_state is not None:
            self._on_item_state(ref, state)
