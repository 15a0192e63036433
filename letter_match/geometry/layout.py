"""Board layout collaborator and anchor computation."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Protocol, runtime_checkable

from letter_match.geometry.curves import Point
from letter_match.geometry.picking import item_at_point
from letter_match.model.round import ItemRef


@dataclass(frozen=True)
class Rect:
    x: float
    y: float
    width: float
    height: float

    @property
    def center(self) -> Point:
        return (self.x + self.width / 2.0, self.y + self.height / 2.0)

    def contains(self, point: Point) -> bool:
        px, py = point
        return self.x <= px <= self.x + self.width and self.y <= py <= self.y + self.height


@runtime_checkable
class BoardLayout(Protocol):
    """Geometry source for the items currently on screen.

    All coordinates share the space that input events are reported in.
    """

    def surface_origin(self) -> Point:
        ...

    def item_rect(self, ref: ItemRef) -> Rect | None:
        ...

    def item_at(self, point: Point) -> ItemRef | None:
        ...


@dataclass
class StaticLayout:
    """Layout backed by a plain mapping of item boxes."""

    rects: Dict[ItemRef, Rect] = field(default_factory=dict)
    origin: Point = (0.0, 0.0)

    def surface_origin(self) -> Point:
        return self.origin

    def item_rect(self, ref: ItemRef) -> Rect | None:
        return self.rects.get(ref)

    def item_at(self, point: Point) -> ItemRef | None:
        return item_at_point(point, self.rects)

    def place(self, ref: ItemRef, rect: Rect) -> None:
        self.rects[ref] = rect


def to_surface(point: Point, layout: BoardLayout) -> Point:
    """Convert an event position into drawing-surface coordinates."""

    ox, oy = layout.surface_origin()
    return (point[0] - ox, point[1] - oy)


def anchor_of(ref: ItemRef, layout: BoardLayout) -> Point | None:
    """Centre of the item's box relative to the drawing surface.

    Always read from ``layout``; boxes move on resize and reflow.
    """

    rect = layout.item_rect(ref)
    if rect is None:
        return None
    return to_surface(rect.center, layout)
