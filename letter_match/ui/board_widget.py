"""Qt board: two columns of letter cells with a connector overlay on top."""
from __future__ import annotations

import logging
import random
from typing import Dict

from PyQt5 import QtCore, QtGui, QtWidgets

from letter_match.config import MatchConfig
from letter_match.geometry.curves import CubicCurve, Point
from letter_match.geometry.layout import Rect
from letter_match.geometry.picking import item_at_point, resolve_item
from letter_match.interaction import BoardCallbacks, InputEvent, Mode
from letter_match.model.pairing_store import ConnectorChange, ConnectorUpdate, ItemState
from letter_match.model.round import Item, ItemRef, Round, Side
from letter_match.session import MatchSession

logger = logging.getLogger(__name__)

_CELL_STYLES = {
    ItemState.NORMAL: "QFrame#cell { background: #ffffff; border: 2px solid #d0d7de; border-radius: 12px; }",
    ItemState.ACTIVE: "QFrame#cell { background: #eaf4fd; border: 2px solid #3498db; border-radius: 12px; }",
    ItemState.PAIRED: "QFrame#cell { background: #f2f2f2; border: 2px solid #b0b0b0; border-radius: 12px; }",
}


def _to_point(pos: QtCore.QPoint | QtCore.QPointF) -> Point:
    return (float(pos.x()), float(pos.y()))


class ItemCell(QtWidgets.QFrame):
    """One letter tile. The label inside is decorative only."""

    def __init__(self, item: Item, parent: QtWidgets.QWidget | None = None) -> None:
        super().__init__(parent)
        self.ref = item.ref
        self.symbol = item.symbol
        self.state = ItemState.NORMAL
        self.setObjectName("cell")
        self.setMinimumSize(64, 64)
        self.setSizePolicy(QtWidgets.QSizePolicy.Expanding, QtWidgets.QSizePolicy.Expanding)
        layout = QtWidgets.QVBoxLayout(self)
        layout.setContentsMargins(4, 4, 4, 4)
        self.label = QtWidgets.QLabel(item.symbol, self)
        self.label.setAlignment(QtCore.Qt.AlignCenter)
        font = self.label.font()
        font.setPointSize(28)
        font.setBold(True)
        self.label.setFont(font)
        layout.addWidget(self.label)
        self.set_state(ItemState.NORMAL)

    def set_state(self, state: ItemState) -> None:
        self.state = state
        self.setStyleSheet(_CELL_STYLES[state])


class ConnectorOverlay(QtWidgets.QWidget):
    """Transparent drawing surface for connectors and the drag indicator.

    Input passes through to the cells underneath except in Delete mode.
    """

    connectorClicked = QtCore.pyqtSignal(QtCore.QPointF)

    def __init__(self, config: MatchConfig, parent: QtWidgets.QWidget | None = None) -> None:
        super().__init__(parent)
        self._config = config
        self.connectors: Dict[int, CubicCurve] = {}
        self.indicator: CubicCurve | None = None
        self.setAttribute(QtCore.Qt.WA_NoSystemBackground, True)
        self.set_interactive(False)

    def set_interactive(self, interactive: bool) -> None:
        self.setAttribute(QtCore.Qt.WA_TransparentForMouseEvents, not interactive)
        self.setCursor(QtCore.Qt.PointingHandCursor if interactive else QtCore.Qt.ArrowCursor)

    def is_interactive(self) -> bool:
        return not self.testAttribute(QtCore.Qt.WA_TransparentForMouseEvents)

    def apply_update(self, update: ConnectorUpdate) -> None:
        if update.change is ConnectorChange.REMOVED or update.curve is None:
            self.connectors.pop(update.pairing_id, None)
        else:
            self.connectors[update.pairing_id] = update.curve
        self.update()

    def set_indicator(self, curve: CubicCurve | None) -> None:
        self.indicator = curve
        self.update()

    def clear(self) -> None:
        self.connectors.clear()
        self.indicator = None
        self.update()

    def mousePressEvent(self, event: QtGui.QMouseEvent) -> None:  # noqa: N802
        if event.button() == QtCore.Qt.LeftButton:
            self.connectorClicked.emit(QtCore.QPointF(event.pos()))
            event.accept()
            return
        super().mousePressEvent(event)

    def paintEvent(self, event: QtGui.QPaintEvent) -> None:  # noqa: D401
        _ = event
        painter = QtGui.QPainter(self)
        painter.setRenderHint(QtGui.QPainter.Antialiasing, True)
        pen = QtGui.QPen(QtGui.QColor(self._config.connector_color))
        pen.setWidth(self._config.connector_width)
        pen.setCapStyle(QtCore.Qt.RoundCap)
        painter.setPen(pen)
        painter.setBrush(QtCore.Qt.NoBrush)
        for curve in self.connectors.values():
            painter.drawPath(curve_to_path(curve))
        if self.indicator is not None:
            painter.setOpacity(self._config.indicator_opacity)
            painter.drawPath(curve_to_path(self.indicator))
        painter.end()


def curve_to_path(curve: CubicCurve) -> QtGui.QPainterPath:
    path = QtGui.QPainterPath(QtCore.QPointF(*curve.start))
    path.cubicTo(
        QtCore.QPointF(*curve.control1),
        QtCore.QPointF(*curve.control2),
        QtCore.QPointF(*curve.end),
    )
    return path


class WidgetLayout:
    """Board layout read live from the cell widgets."""

    def __init__(self, board: "BoardWidget") -> None:
        self._board = board

    def surface_origin(self) -> Point:
        return _to_point(self._board.overlay.pos())

    def item_rect(self, ref: ItemRef) -> Rect | None:
        cell = self._board.cell(ref)
        if cell is None or cell.isHidden():
            return None
        top_left = cell.mapTo(self._board, QtCore.QPoint(0, 0))
        return Rect(float(top_left.x()), float(top_left.y()), float(cell.width()), float(cell.height()))

    def item_at(self, point: Point) -> ItemRef | None:
        board = self._board
        element = board.childAt(QtCore.QPoint(int(round(point[0])), int(round(point[1]))))
        ref = resolve_item(
            element,
            item_of=lambda w: w.ref if isinstance(w, ItemCell) else None,
            parent_of=lambda w: w.parentWidget() if w is not board else None,
        )
        if ref is not None:
            return ref
        rects = {}
        for cell in board.cells():
            rect = self.item_rect(cell.ref)
            if rect is not None:
                rects[cell.ref] = rect
        return item_at_point(point, rects)


class WidgetPointerCapture:
    """Routes all mouse input to the board for the duration of a drag."""

    def __init__(self, widget: QtWidgets.QWidget) -> None:
        self._widget = widget
        self.active = False

    def acquire(self) -> None:
        self.active = True
        self._widget.grabMouse()

    def release(self) -> None:
        if self.active:
            self.active = False
            self._widget.releaseMouse()


class BoardWidget(QtWidgets.QWidget):
    """Hosts the cells, translates Qt input into board events."""

    modeChanged = QtCore.pyqtSignal(object)
    revealChanged = QtCore.pyqtSignal(bool)
    roundChanged = QtCore.pyqtSignal(object)

    def __init__(
        self,
        config: MatchConfig | None = None,
        rng: random.Random | None = None,
        parent: QtWidgets.QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self._config = config or MatchConfig()
        self._cells: Dict[ItemRef, ItemCell] = {}
        self._drag_touch_id: int | None = None
        self._shown_once = False

        self.setAttribute(QtCore.Qt.WA_AcceptTouchEvents, True)
        self.setLayoutDirection(QtCore.Qt.LeftToRight)

        self._left_column = QtWidgets.QWidget(self)
        self._right_column = QtWidgets.QWidget(self)
        self._left_layout = QtWidgets.QVBoxLayout(self._left_column)
        self._right_layout = QtWidgets.QVBoxLayout(self._right_column)
        for column_layout in (self._left_layout, self._right_layout):
            column_layout.setSpacing(16)
        layout = QtWidgets.QHBoxLayout(self)
        layout.setContentsMargins(16, 16, 16, 16)
        layout.addWidget(self._left_column, 1)
        layout.addStretch(2)
        layout.addWidget(self._right_column, 1)

        self.overlay = ConnectorOverlay(self._config, self)
        self.overlay.connectorClicked.connect(self._on_connector_clicked)
        self.overlay.raise_()

        callbacks = BoardCallbacks(
            connector_changed=self.overlay.apply_update,
            indicator_changed=self.overlay.set_indicator,
            item_state_changed=self._on_item_state,
            mode_changed=self._on_mode_changed,
            reveal_changed=self.revealChanged.emit,
            round_changed=self._on_round_changed,
        )
        self.capture = WidgetPointerCapture(self)
        self.session = MatchSession(
            layout=WidgetLayout(self),
            callbacks=callbacks,
            config=self._config,
            rng=rng,
            capture=self.capture,
        )

    # -- cells -----------------------------------------------------------
    def cell(self, ref: ItemRef) -> ItemCell | None:
        return self._cells.get(ref)

    def cells(self) -> list[ItemCell]:
        return list(self._cells.values())

    def _on_round_changed(self, round_: Round) -> None:
        for cell in self._cells.values():
            cell.hide()
            cell.setParent(None)
            cell.deleteLater()
        self._cells.clear()
        self.overlay.clear()
        for side, column_layout, parent in (
            (Side.LEFT, self._left_layout, self._left_column),
            (Side.RIGHT, self._right_layout, self._right_column),
        ):
            for item in round_.column(side):
                cell = ItemCell(item, parent)
                column_layout.addWidget(cell)
                self._cells[item.ref] = cell
        self.overlay.raise_()
        logger.debug("Rebuilt board with %d cells", len(self._cells))
        self.roundChanged.emit(round_)

    def _on_item_state(self, ref: ItemRef, state: ItemState) -> None:
        cell = self._cells.get(ref)
        if cell is not None:
            cell.set_state(state)

    def _on_mode_changed(self, mode: Mode) -> None:
        self.overlay.set_interactive(self.session.modes.connectors_interactive)
        self.modeChanged.emit(mode)

    def _on_connector_clicked(self, pos: QtCore.QPointF) -> None:
        board_pos = self.overlay.mapTo(self, pos.toPoint())
        self.session.tap_connector_at(_to_point(board_pos))

    # -- layout ----------------------------------------------------------
    def resizeEvent(self, event: QtGui.QResizeEvent) -> None:  # noqa: D401
        super().resizeEvent(event)
        self.overlay.setGeometry(self.rect())
        self.session.dispatch(InputEvent.layout_changed())

    def showEvent(self, event: QtGui.QShowEvent) -> None:  # noqa: D401
        super().showEvent(event)
        if not self._shown_once:
            self._shown_once = True
            self.session.scheduler.schedule(self._config.initial_refresh_delay_ms)

    # -- mouse -----------------------------------------------------------
    def mousePressEvent(self, event: QtGui.QMouseEvent) -> None:  # noqa: N802
        if event.button() != QtCore.Qt.LeftButton:
            super().mousePressEvent(event)
            return
        point = _to_point(event.pos())
        ref = self.session.store.layout.item_at(point)
        if ref is None:
            event.ignore()
            return
        if ref.side is Side.LEFT:
            handled = self.session.dispatch(InputEvent.start(ref, point))
        else:
            handled = self.session.dispatch(InputEvent.tap(ref, point))
        event.setAccepted(handled)

    def mouseMoveEvent(self, event: QtGui.QMouseEvent) -> None:  # noqa: N802
        if self.session.gestures.is_dragging:
            self.session.dispatch(InputEvent.move(_to_point(event.pos())))
            event.accept()
            return
        super().mouseMoveEvent(event)

    def mouseReleaseEvent(self, event: QtGui.QMouseEvent) -> None:  # noqa: N802
        if event.button() == QtCore.Qt.LeftButton and self.session.gestures.is_dragging:
            self.session.dispatch(InputEvent.end(_to_point(event.pos())))
            event.accept()
            return
        super().mouseReleaseEvent(event)

    # -- touch -----------------------------------------------------------
    def event(self, event: QtCore.QEvent) -> bool:
        if event.type() in (
            QtCore.QEvent.TouchBegin,
            QtCore.QEvent.TouchUpdate,
            QtCore.QEvent.TouchEnd,
            QtCore.QEvent.TouchCancel,
        ):
            self._handle_touch(event)
            event.accept()
            return True
        return super().event(event)

    def _handle_touch(self, event: QtGui.QTouchEvent) -> None:
        gestures = self.session.gestures
        if event.type() == QtCore.QEvent.TouchCancel:
            self._drag_touch_id = None
            gestures.cancel()
            return

        points = event.touchPoints()
        active = [p for p in points if p.state() != QtCore.Qt.TouchPointReleased]

        if self.session.modes.delete_active:
            # the overlay never sees touches; hit-test connectors here
            for point in points:
                if point.state() == QtCore.Qt.TouchPointPressed:
                    self.session.tap_connector_at(_to_point(point.pos()))
            return

        for point in points:
            if point.state() != QtCore.Qt.TouchPointPressed:
                continue
            pos = _to_point(point.pos())
            ref = self.session.store.layout.item_at(pos)
            if ref is None:
                continue
            if ref.side is Side.LEFT and not gestures.is_dragging and len(active) == 1:
                if self.session.dispatch(InputEvent.start(ref, pos)):
                    self._drag_touch_id = point.id()
            elif ref.side is Side.RIGHT and gestures.is_dragging:
                self.session.dispatch(InputEvent.tap(ref, pos))
                self._drag_touch_id = None

        if not gestures.is_dragging:
            self._drag_touch_id = None
            return

        drag_point = next((p for p in points if p.id() == self._drag_touch_id), None)
        if drag_point is None:
            if event.type() == QtCore.QEvent.TouchEnd:
                self._drag_touch_id = None
                self.session.dispatch(InputEvent.end(None, contacts=0))
            return
        if drag_point.state() == QtCore.Qt.TouchPointReleased:
            self._drag_touch_id = None
            self.session.dispatch(InputEvent.end(_to_point(drag_point.pos())))
            return
        if drag_point.state() == QtCore.Qt.TouchPointMoved:
            self.session.dispatch(InputEvent.move(_to_point(drag_point.pos()), contacts=len(active)))
