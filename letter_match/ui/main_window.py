from __future__ import annotations

import logging
import random

from PyQt5 import QtCore, QtWidgets

from letter_match.config import MatchConfig
from letter_match.interaction import Mode
from letter_match.session import MatchSession
from letter_match.ui import text
from letter_match.ui.board_widget import BoardWidget

logger = logging.getLogger(__name__)


class MatchWindow(QtWidgets.QMainWindow):
    """Main window: mode indicator, the board, and the control buttons."""

    def __init__(
        self,
        config: MatchConfig | None = None,
        rng: random.Random | None = None,
        parent: QtWidgets.QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self._config = config or MatchConfig()
        self.setWindowTitle(text.WINDOW_TITLE)
        self.setLayoutDirection(QtCore.Qt.RightToLeft)
        self.resize(480, 640)

        central = QtWidgets.QWidget(self)
        layout = QtWidgets.QVBoxLayout(central)

        self.mode_indicator = QtWidgets.QLabel(central)
        self.mode_indicator.setAlignment(QtCore.Qt.AlignCenter)
        layout.addWidget(self.mode_indicator)

        self.board = BoardWidget(self._config, rng=rng, parent=central)
        layout.addWidget(self.board, 1)

        buttons = QtWidgets.QHBoxLayout()
        self.new_button = QtWidgets.QPushButton(text.BUTTON_NEW, central)
        self.clear_button = QtWidgets.QPushButton(text.BUTTON_CLEAR, central)
        self.reveal_button = QtWidgets.QPushButton(text.BUTTON_REVEAL, central)
        self.delete_button = QtWidgets.QPushButton(text.BUTTON_DELETE, central)
        self.help_button = QtWidgets.QPushButton(text.BUTTON_HELP, central)
        for button in (
            self.new_button,
            self.clear_button,
            self.reveal_button,
            self.delete_button,
            self.help_button,
        ):
            button.setFocusPolicy(QtCore.Qt.NoFocus)
            buttons.addWidget(button)
        layout.addLayout(buttons)
        self.setCentralWidget(central)

        self._instructions = QtWidgets.QMessageBox(self)
        self._instructions.setWindowTitle(text.INSTRUCTIONS_TITLE)
        self._instructions.setTextFormat(QtCore.Qt.RichText)
        self._instructions.setText(text.INSTRUCTIONS_HTML)
        self._instructions.setModal(False)

        self.new_button.clicked.connect(self.new_round)
        self.clear_button.clicked.connect(self.board.session.clear)
        self.reveal_button.clicked.connect(self.board.session.toggle_reveal)
        self.delete_button.clicked.connect(self.board.session.toggle_delete_mode)
        self.help_button.clicked.connect(self.show_instructions)
        self.board.modeChanged.connect(self._on_mode_changed)
        self.board.revealChanged.connect(self._on_reveal_changed)

        self._on_mode_changed(self.board.session.mode)
        self._on_reveal_changed(False)
        self.new_round()

        if self._config.show_instructions:
            QtCore.QTimer.singleShot(self._config.instructions_delay_ms, self.show_instructions)

    @property
    def session(self) -> MatchSession:
        return self.board.session

    def new_round(self) -> None:
        round_ = self.board.session.build_round()
        logger.info("New round with %d letters", round_.size)

    def show_instructions(self) -> None:
        self._instructions.show()
        self._instructions.raise_()

    def hide_instructions(self) -> None:
        self._instructions.hide()

    def _on_mode_changed(self, mode: Mode) -> None:
        delete_active = mode is Mode.DELETE
        self.mode_indicator.setText(text.mode_label(delete_active))
        self.mode_indicator.setStyleSheet(
            "color: #c0392b; font-weight: bold;" if delete_active else "color: #27ae60; font-weight: bold;"
        )
        self.delete_button.setText(text.delete_button_label(delete_active))

    def _on_reveal_changed(self, revealed: bool) -> None:
        self.reveal_button.setText(text.reveal_button_label(revealed))
