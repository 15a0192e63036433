"""Session object tying the round, pairings, modes and gestures together."""
from __future__ import annotations

import logging
import random

from letter_match.config import MatchConfig
from letter_match.geometry.curves import Point
from letter_match.geometry.layout import BoardLayout, StaticLayout, to_surface
from letter_match.geometry.picking import find_connector_hit
from letter_match.interaction import BoardCallbacks, EventKind, InputEvent, Mode
from letter_match.interaction.gesture_state import GestureStateMachine, PointerCapture
from letter_match.interaction.mode_controller import ModeController
from letter_match.interaction.refresh import RefreshScheduler, RefreshScheduling
from letter_match.interaction.reveal_controller import RevealController
from letter_match.model.invariants import validate_pairings
from letter_match.model.pairing_store import Pairing, PairingStore
from letter_match.model.round import Round, build_round

logger = logging.getLogger(__name__)


class MatchSession:
    """All mutable board state for one board instance.

    The host feeds normalized input through :meth:`dispatch` and drives the
    buttons through the remaining public methods; rendering happens through
    ``callbacks``.
    """

    def __init__(
        self,
        layout: BoardLayout | None = None,
        callbacks: BoardCallbacks | None = None,
        config: MatchConfig | None = None,
        rng: random.Random | None = None,
        capture: PointerCapture | None = None,
        scheduler: RefreshScheduling | None = None,
    ) -> None:
        self.config = config or MatchConfig()
        self.callbacks = callbacks or BoardCallbacks()
        self._rng = rng or random.Random()
        self.store = PairingStore(
            layout or StaticLayout(),
            on_connector=self.callbacks.connector_changed,
            on_item_state=self.callbacks.item_state_changed,
        )
        self.modes = ModeController(on_change=self.callbacks.mode_changed)
        self.gestures = GestureStateMachine(
            self.store,
            self.modes,
            capture=capture,
            on_indicator=self.callbacks.indicator_changed,
            on_item_state=self.callbacks.item_state_changed,
        )
        self.reveal = RevealController(
            self.store, self.clear, on_change=self.callbacks.reveal_changed
        )
        self._scheduler = scheduler

    @property
    def round(self) -> Round:
        return self.store.round

    @property
    def mode(self) -> Mode:
        return self.modes.mode

    @property
    def revealed(self) -> bool:
        return self.reveal.revealed

    @property
    def scheduler(self) -> RefreshScheduling:
        if self._scheduler is None:
            self._scheduler = RefreshScheduler(
                self.store.refresh_all, delay_ms=self.config.refresh_delay_ms
            )
        return self._scheduler

    def build_round(self, count: int | None = None) -> Round:
        """Draw a new round and make it current."""

        size = self.config.letters_count if count is None else count
        round_ = build_round(size, self.config.alphabet, self._rng)
        self.set_round(round_)
        return round_

    def set_round(self, round_: Round) -> None:
        self.clear()
        self.store.set_round(round_)
        logger.debug("Round set with %d items", round_.size)
        self.callbacks.round_changed(round_)
        self.scheduler.schedule()

    def clear(self) -> None:
        """Remove every pairing and return to Connect mode."""

        self.modes.exit_delete()
        self.gestures.cancel()
        self.store.clear()
        self.reveal.reset()

    def toggle_reveal(self) -> bool:
        return self.reveal.toggle()

    def enter_delete_mode(self) -> None:
        self.gestures.cancel()
        self.modes.enter_delete()

    def exit_delete_mode(self) -> None:
        self.modes.exit_delete()

    def toggle_delete_mode(self) -> Mode:
        if self.modes.delete_active:
            self.exit_delete_mode()
        else:
            self.enter_delete_mode()
        return self.modes.mode

    def dispatch(self, event: InputEvent) -> bool:
        if event.kind is EventKind.LAYOUT_CHANGED:
            self.scheduler.schedule()
            return False
        return self.gestures.handle(event)

    def connector_at(self, position: Point) -> Pairing | None:
        surface_point = to_surface(position, self.store.layout)
        return find_connector_hit(surface_point, self.store, self.config.delete_hit_tolerance)

    def tap_connector(self, pairing_id: int) -> bool:
        """Delete a pairing by connector id; only honoured in Delete mode."""

        if not self.modes.accepts_connector_tap():
            return False
        pairing = self.store.find_by_id(pairing_id)
        if pairing is None:
            return False
        return self.store.remove(pairing)

    def tap_connector_at(self, position: Point) -> bool:
        if not self.modes.accepts_connector_tap():
            return False
        pairing = self.connector_at(position)
        if pairing is None:
            return False
        return self.tap_connector(pairing.pairing_id)

    def refresh_now(self) -> None:
        self.scheduler.cancel()
        self.store.refresh_all()

    def check_invariants(self) -> None:
        validate_pairings(self.store, self.round)
