"""Round data: the two columns of symbols for a single play-through."""
from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from enum import Enum
from typing import Sequence

from letter_match.model.invariants import assert_unique_symbols, assert_permutation

logger = logging.getLogger(__name__)

ARABIC_LETTERS: tuple[str, ...] = (
    "أ", "ب", "ت", "ث", "ج", "ح", "خ", "د", "ذ", "ر", "ز", "س", "ش", "ص",
    "ض", "ط", "ظ", "ع", "غ", "ف", "ق", "ك", "ل", "م", "ن", "ه", "و", "ي",
)
DEFAULT_LETTERS_COUNT = 4


class Side(Enum):
    LEFT = "left"
    RIGHT = "right"

    @property
    def opposite(self) -> "Side":
        return Side.RIGHT if self is Side.LEFT else Side.LEFT


@dataclass(frozen=True)
class ItemRef:
    """Stable identity of an item within a round."""

    side: Side
    index: int


@dataclass(frozen=True)
class Item:
    side: Side
    index: int
    symbol: str

    @property
    def ref(self) -> ItemRef:
        return ItemRef(self.side, self.index)


@dataclass(frozen=True)
class Round:
    """Immutable pair of columns; the right column reorders the left one."""

    left: tuple[Item, ...]
    right: tuple[Item, ...]

    @classmethod
    def from_symbols(cls, left: Sequence[str], right: Sequence[str]) -> "Round":
        """Build a round, raising ``InvariantError`` on malformed columns."""

        assert_unique_symbols(left, "left")
        assert_unique_symbols(right, "right")
        assert_permutation(left, right)
        return cls(
            left=tuple(Item(Side.LEFT, i, s) for i, s in enumerate(left)),
            right=tuple(Item(Side.RIGHT, i, s) for i, s in enumerate(right)),
        )

    @classmethod
    def empty(cls) -> "Round":
        return cls(left=(), right=())

    @property
    def size(self) -> int:
        return len(self.left)

    def column(self, side: Side) -> tuple[Item, ...]:
        return self.left if side is Side.LEFT else self.right

    def item(self, ref: ItemRef) -> Item | None:
        column = self.column(ref.side)
        if 0 <= ref.index < len(column):
            return column[ref.index]
        return None

    def contains(self, ref: ItemRef) -> bool:
        return self.item(ref) is not None

    def match_for_left(self, left_index: int) -> int | None:
        """Index of the right item carrying the same symbol as ``left_index``."""

        if not 0 <= left_index < len(self.left):
            return None
        symbol = self.left[left_index].symbol
        for item in self.right:
            if item.symbol == symbol:
                return item.index
        return None

    def solution(self) -> list[tuple[int, int]]:
        """Ground-truth ``(left, right)`` pairs in left order."""

        pairs: list[tuple[int, int]] = []
        for item in self.left:
            right_index = self.match_for_left(item.index)
            if right_index is not None:
                pairs.append((item.index, right_index))
        return pairs


def pick_random_symbols(
    count: int,
    alphabet: Sequence[str] = ARABIC_LETTERS,
    rng: random.Random | None = None,
) -> list[str]:
    """Draw ``count`` symbols from ``alphabet`` without repetition."""

    rng = rng or random.Random()
    count = max(0, min(count, len(alphabet)))
    return rng.sample(list(alphabet), count)


def build_round(
    count: int = DEFAULT_LETTERS_COUNT,
    alphabet: Sequence[str] = ARABIC_LETTERS,
    rng: random.Random | None = None,
) -> Round:
    """Draw a fresh round: random left column, independently shuffled right column."""

    rng = rng or random.Random()
    left = pick_random_symbols(count, alphabet, rng)
    right = list(left)
    rng.shuffle(right)
    logger.info("Built round of %d items: left=%s right=%s", len(left), left, right)
    return Round.from_symbols(left, right)
