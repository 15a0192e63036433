from __future__ import annotations

import random
from typing import List

from PyQt5 import QtWidgets

from letter_match.config import MatchConfig
from letter_match.ui.main_window import MatchWindow


class LetterMatchApp(QtWidgets.QApplication):
    """Thin application wrapper for the letter match board."""

    def __init__(self, argv: List[str]):
        super().__init__(argv)
        self.setQuitOnLastWindowClosed(True)
        self.window: MatchWindow | None = None


def bootstrap_window(config: MatchConfig, seed: int | None = None) -> MatchWindow:
    """Build the main window with its own seeded RNG."""

    rng = random.Random(seed) if seed is not None else random.Random()
    return MatchWindow(config, rng=rng)
