"""Invariant checks for rounds and committed pairings."""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable, Sequence

if TYPE_CHECKING:
    from letter_match.model.pairing_store import Pairing
    from letter_match.model.round import Round


class InvariantError(ValueError):
    """Raised when a round or pairing set violates a structural invariant."""


def assert_unique_symbols(symbols: Sequence[str], side: str) -> None:
    """Assert a side carries no empty or repeated symbols."""

    seen: set[str] = set()
    for index, symbol in enumerate(symbols):
        if not symbol:
            raise InvariantError(f"{side} item {index} has an empty symbol.")
        if symbol in seen:
            raise InvariantError(f"Duplicate {side} symbol {symbol!r} at index {index}.")
        seen.add(symbol)


def assert_permutation(left: Sequence[str], right: Sequence[str]) -> None:
    """Assert the right column is a reordering of the left column."""

    if len(left) != len(right):
        raise InvariantError(
            f"Column size mismatch: {len(left)} left items, {len(right)} right items."
        )
    missing = set(left) - set(right)
    if missing:
        raise InvariantError(
            "Right column is not a permutation of the left column; "
            f"missing {sorted(missing)}."
        )


def validate_round(round_: "Round") -> None:
    """Run all round invariants."""

    left = [item.symbol for item in round_.left]
    right = [item.symbol for item in round_.right]
    assert_unique_symbols(left, "left")
    assert_unique_symbols(right, "right")
    assert_permutation(left, right)
    for side, items in (("left", round_.left), ("right", round_.right)):
        for position, item in enumerate(items):
            if item.index != position:
                raise InvariantError(
                    f"{side} item index/position mismatch at {position}: index={item.index}."
                )


def validate_pairings(pairings: Iterable["Pairing"], round_: "Round | None" = None) -> None:
    """Assert no two pairings share a left or a right index.

    When ``round_`` is given, every referenced index must also be a live item
    of that round.
    """

    lefts: set[int] = set()
    rights: set[int] = set()
    for pairing in pairings:
        if pairing.left_index in lefts:
            raise InvariantError(f"Left item {pairing.left_index} is paired twice.")
        if pairing.right_index in rights:
            raise InvariantError(f"Right item {pairing.right_index} is paired twice.")
        lefts.add(pairing.left_index)
        rights.add(pairing.right_index)
        if round_ is not None and (
            not 0 <= pairing.left_index < round_.size
            or not 0 <= pairing.right_index < round_.size
        ):
            raise InvariantError(
                f"Pairing {pairing.pairing_id} references an item outside the round."
            )
