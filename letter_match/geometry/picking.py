# letter_match/geometry/picking.py

from __future__ import annotations

from typing import TYPE_CHECKING, Callable, Iterable, Mapping, Optional, TypeVar

from letter_match.geometry.curves import Point, distance_to_curve

if TYPE_CHECKING:
    from letter_match.geometry.layout import Rect
    from letter_match.model.pairing_store import Pairing
    from letter_match.model.round import ItemRef

E = TypeVar("E")

_MAX_CHAIN_DEPTH = 64


def item_at_point(point: Point, rects: Mapping["ItemRef", "Rect"]) -> Optional["ItemRef"]:
    """Return the item whose box contains ``point``, or None."""

    for ref, rect in rects.items():
        if rect.contains(point):
            return ref
    return None


def resolve_item(
    element: Optional[E],
    item_of: Callable[[E], Optional["ItemRef"]],
    parent_of: Callable[[E], Optional[E]],
) -> Optional["ItemRef"]:
    """
    Walk up the containment chain from ``element`` until an item is found.

    ``element`` is whatever sits directly under the pointer; a label or other
    decorative child of an item resolves to the item that owns it.
    """

    depth = 0
    while element is not None and depth < _MAX_CHAIN_DEPTH:
        ref = item_of(element)
        if ref is not None:
            return ref
        element = parent_of(element)
        depth += 1
    return None


def find_connector_hit(
    point: Point,
    pairings: Iterable["Pairing"],
    tolerance: float,
) -> Optional["Pairing"]:
    """Closest pairing whose connector passes within ``tolerance`` of ``point``."""

    best = None
    best_d = tolerance
    for pairing in pairings:
        if pairing.curve is None:
            continue
        d = distance_to_curve(point, pairing.curve)
        if d <= best_d:
            best = pairing
            best_d = d
    return best
