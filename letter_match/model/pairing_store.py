"""Committed left/right pairings and their connector curves."""

from __future__ import annotations

import itertools
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Iterator

from letter_match.geometry.curves import CubicCurve, curve_between
from letter_match.geometry.layout import BoardLayout, anchor_of
from letter_match.model.round import ItemRef, Round, Side

logger = logging.getLogger(__name__)


class ConnectorChange(Enum):
    CREATED = "created"
    UPDATED = "updated"
    REMOVED = "removed"


class ItemState(Enum):
    NORMAL = "normal"
    ACTIVE = "active"
    PAIRED = "paired"


@dataclass(frozen=True)
class ConnectorUpdate:
    """Render instruction for one connector."""

    change: ConnectorChange
    pairing_id: int
    curve: CubicCurve | None


@dataclass(eq=False)
class Pairing:
    pairing_id: int
    left_index: int
    right_index: int
    curve: CubicCurve | None = None

    @property
    def key(self) -> tuple[int, int]:
        return (self.left_index, self.right_index)


def _noop(*_args) -> None:
    return None


class PairingStore:
    """Holds the current pairings and keeps them one-to-one.

    ``add`` replaces conflicting pairings instead of rejecting the new one.
    Every mutation reports connector changes and item paired/unpaired state
    through the callbacks so a renderer can follow along.
    """

    def __init__(
        self,
        layout: BoardLayout,
        on_connector: Callable[[ConnectorUpdate], None] = _noop,
        on_item_state: Callable[[ItemRef, ItemState], None] = _noop,
    ) -> None:
        self._layout = layout
        self._on_connector = on_connector
        self._on_item_state = on_item_state
        self._round = Round.empty()
        self._pairings: list[Pairing] = []
        self._ids = itertools.count(1)

    @property
    def round(self) -> Round:
        return self._round

    @property
    def layout(self) -> BoardLayout:
        return self._layout

    @property
    def pairings(self) -> tuple[Pairing, ...]:
        return tuple(self._pairings)

    def __len__(self) -> int:
        return len(self._pairings)

    def __iter__(self) -> Iterator[Pairing]:
        return iter(tuple(self._pairings))

    def set_round(self, round_: Round) -> None:
        """Drop every pairing and bind to a new round."""
        self.clear()
        self._round = round_

    def pairs(self) -> set[tuple[int, int]]:
        return {p.key for p in self._pairings}

    def find_by_left(self, index: int) -> Pairing | None:
        for pairing in self._pairings:
            if pairing.left_index == index:
                return pairing
        return None

    def find_by_right(self, index: int) -> Pairing | None:
        for pairing in self._pairings:
            if pairing.right_index == index:
                return pairing
        return None

    def find_by_id(self, pairing_id: int) -> Pairing | None:
        for pairing in self._pairings:
            if pairing.pairing_id == pairing_id:
                return pairing
        return None

    def is_paired(self, ref: ItemRef) -> bool:
        if ref.side is Side.LEFT:
            return self.find_by_left(ref.index) is not None
        return self.find_by_right(ref.index) is not None

    def add(self, left_index: int, right_index: int) -> Pairing | None:
        """Pair two items, replacing whatever either of them was paired with.

        Returns None, changing nothing, when either index is not a live item.
        """

        left = ItemRef(Side.LEFT, left_index)
        right = ItemRef(Side.RIGHT, right_index)
        if not (self._round.contains(left) and self._round.contains(right)):
            logger.debug("Ignoring pairing of unknown items (%s, %s)", left_index, right_index)
            return None

        existing = self.find_by_left(left_index)
        if existing is not None:
            self.remove(existing)
        existing = self.find_by_right(right_index)
        if existing is not None:
            self.remove(existing)

        pairing = Pairing(next(self._ids), left_index, right_index)
        pairing.curve = self._curve_for(pairing)
        self._pairings.append(pairing)
        self._on_connector(ConnectorUpdate(ConnectorChange.CREATED, pairing.pairing_id, pairing.curve))
        self._on_item_state(left, ItemState.PAIRED)
        self._on_item_state(right, ItemState.PAIRED)
        logger.debug("Paired left %d with right %d (id %d)", left_index, right_index, pairing.pairing_id)
        return pairing

    def remove(self, pairing: Pairing) -> bool:
        """Remove ``pairing``; returns False when it was already gone."""

        if pairing not in self._pairings:
            return False
        self._pairings.remove(pairing)
        self._on_connector(ConnectorUpdate(ConnectorChange.REMOVED, pairing.pairing_id, None))
        pairing.curve = None
        self._on_item_state(ItemRef(Side.LEFT, pairing.left_index), ItemState.NORMAL)
        self._on_item_state(ItemRef(Side.RIGHT, pairing.right_index), ItemState.NORMAL)
        logger.debug(
            "Removed pairing %d (left %d, right %d)",
            pairing.pairing_id,
            pairing.left_index,
            pairing.right_index,
        )
        return True

    def clear(self) -> None:
        for pairing in tuple(self._pairings):
            self.remove(pairing)

    def refresh_all(self) -> None:
        """Recompute every connector from the current item anchors."""

        for pairing in self._pairings:
            pairing.curve = self._curve_for(pairing)
            self._on_connector(
                ConnectorUpdate(ConnectorChange.UPDATED, pairing.pairing_id, pairing.curve)
            )

    def _curve_for(self, pairing: Pairing) -> CubicCurve | None:
        start = anchor_of(ItemRef(Side.LEFT, pairing.left_index), self._layout)
        end = anchor_of(ItemRef(Side.RIGHT, pairing.right_index), self._layout)
        if start is None or end is None:
            return None
        return curve_between(start, end)
