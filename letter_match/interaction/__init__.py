"""Input vocabulary and renderer callbacks for the match board."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable

from letter_match.geometry.curves import CubicCurve, Point
from letter_match.model.pairing_store import ConnectorUpdate, ItemState
from letter_match.model.round import ItemRef, Round


class EventKind(Enum):
    """Normalized input event kinds."""

    START = "start"
    MOVE = "move"
    END = "end"
    TAP = "tap"
    LAYOUT_CHANGED = "layout_changed"


class Mode(Enum):
    CONNECT = "connect"
    DELETE = "delete"


@dataclass(frozen=True)
class InputEvent:
    kind: EventKind
    position: Point | None = None
    target: ItemRef | None = None
    contacts: int = 1

    @classmethod
    def start(cls, target: ItemRef, position: Point | None = None) -> "InputEvent":
        return cls(EventKind.START, position, target)

    @classmethod
    def move(cls, position: Point, contacts: int = 1) -> "InputEvent":
        return cls(EventKind.MOVE, position, None, contacts)

    @classmethod
    def end(cls, position: Point | None, contacts: int = 1) -> "InputEvent":
        return cls(EventKind.END, position, None, contacts)

    @classmethod
    def tap(cls, target: ItemRef, position: Point | None = None) -> "InputEvent":
        return cls(EventKind.TAP, position, target)

    @classmethod
    def layout_changed(cls) -> "InputEvent":
        return cls(EventKind.LAYOUT_CHANGED, contacts=0)


def _ignore(*_args) -> None:
    return None


@dataclass
class BoardCallbacks:
    connector_changed: Callable[[ConnectorUpdate], None] = _ignore
    indicator_changed: Callable[[CubicCurve | None], None] = _ignore
    item_state_changed: Callable[[ItemRef, ItemState], None] = _ignore
    mode_changed: Callable[[Mode], None] = _ignore
    reveal_changed: Callable[[bool], None] = _ignore
    round_changed: Callable[[Round], None] = _ignore
