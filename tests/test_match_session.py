import random

import pytest

pytest.importorskip("PyQt5")

from letter_match.config import MatchConfig
from letter_match.geometry.layout import Rect, StaticLayout
from letter_match.interaction import BoardCallbacks, InputEvent, Mode
from letter_match.model.pairing_store import ConnectorChange
from letter_match.model.round import ItemRef, Round, Side
from letter_match.session import MatchSession


class _FakeScheduler:
    def __init__(self):
        self.scheduled = []
        self.cancelled = 0

    def schedule(self, delay_ms=None):
        self.scheduled.append(delay_ms)

    def cancel(self):
        self.cancelled += 1

    def flush(self):
        return False

    def is_pending(self):
        return bool(self.scheduled)


def _make_layout(size: int) -> StaticLayout:
    layout = StaticLayout()
    for i in range(size):
        layout.place(ItemRef(Side.LEFT, i), Rect(0, i * 100, 50, 50))
        layout.place(ItemRef(Side.RIGHT, i), Rect(300, i * 100, 50, 50))
    return layout


def _right_center(i):
    return (325.0, i * 100 + 25.0)


@pytest.fixture
def log():
    return {"modes": [], "reveal": [], "connectors": [], "rounds": [], "indicator": []}


@pytest.fixture
def session(log):
    callbacks = BoardCallbacks(
        connector_changed=log["connectors"].append,
        indicator_changed=log["indicator"].append,
        mode_changed=log["modes"].append,
        reveal_changed=log["reveal"].append,
        round_changed=log["rounds"].append,
    )
    s = MatchSession(
        layout=_make_layout(4),
        callbacks=callbacks,
        scheduler=_FakeScheduler(),
        rng=random.Random(3),
    )
    s.set_round(Round.from_symbols(["A", "B", "C", "D"], ["C", "A", "D", "B"]))
    return s


def test_reveal_pairs_matching_symbols(session, log):
    assert session.toggle_reveal() is True

    assert session.store.pairs() == {(0, 1), (1, 3), (2, 0), (3, 2)}
    assert session.revealed
    assert log["reveal"] == [True]
    session.check_invariants()


def test_second_reveal_toggle_clears(session, log):
    session.toggle_reveal()

    assert session.toggle_reveal() is False

    assert session.store.pairs() == set()
    assert log["reveal"] == [True, False]


def test_reveal_replaces_user_pairings_and_exits_delete_mode(session, log):
    session.store.add(0, 0)
    session.enter_delete_mode()

    session.toggle_reveal()

    assert session.mode is Mode.CONNECT
    assert len(session.store) == 4
    assert log["modes"] == [Mode.DELETE, Mode.CONNECT]


def test_clear_resets_reveal_flag(session, log):
    session.toggle_reveal()

    session.clear()

    assert not session.revealed
    assert len(session.store) == 0
    assert log["reveal"] == [True, False]


def test_delete_mode_gates_gesture_start(session):
    session.enter_delete_mode()

    assert session.dispatch(InputEvent.start(ItemRef(Side.LEFT, 0))) is False
    session.dispatch(InputEvent.end(_right_center(0)))

    assert len(session.store) == 0
    assert session.gestures.indicator is None


def test_entering_delete_mode_mid_drag_cancels_the_drag(session, log):
    session.dispatch(InputEvent.start(ItemRef(Side.LEFT, 0)))

    session.enter_delete_mode()
    session.dispatch(InputEvent.end(_right_center(1)))

    assert not session.gestures.is_dragging
    assert len(session.store) == 0
    assert log["indicator"][-1] is None


def test_connector_tap_only_deletes_in_delete_mode(session, log):
    pairing = session.store.add(0, 1)

    assert session.tap_connector(pairing.pairing_id) is False
    assert len(session.store) == 1

    session.enter_delete_mode()
    assert session.tap_connector(pairing.pairing_id) is True
    assert session.tap_connector(pairing.pairing_id) is False

    assert len(session.store) == 0
    assert log["connectors"][-1].change is ConnectorChange.REMOVED


def test_tap_connector_at_position(session):
    session.store.add(0, 0)
    session.store.add(1, 1)
    session.enter_delete_mode()
    midpoint = session.store.find_by_left(1).curve.point_at(0.5)

    assert session.tap_connector_at(midpoint) is True

    assert session.store.pairs() == {(0, 0)}
    assert session.tap_connector_at((160.0, 1000.0)) is False


def test_toggle_delete_mode(session, log):
    assert session.toggle_delete_mode() is Mode.DELETE
    assert session.toggle_delete_mode() is Mode.CONNECT
    assert log["modes"] == [Mode.DELETE, Mode.CONNECT]


def test_layout_change_schedules_refresh_without_touching_pairs(session):
    session.store.add(2, 0)
    scheduler = session.scheduler
    scheduler.scheduled.clear()

    for _ in range(5):
        assert session.dispatch(InputEvent.layout_changed()) is False

    assert len(scheduler.scheduled) == 5
    assert session.store.pairs() == {(2, 0)}


def test_refresh_now_updates_curves(session):
    pairing = session.store.add(2, 0)
    session.store.layout.place(ItemRef(Side.LEFT, 2), Rect(0, 0, 10, 10))

    session.refresh_now()

    assert pairing.curve.start == (5.0, 5.0)
    assert session.scheduler.cancelled == 1


def test_build_round_replaces_state(session, log):
    session.store.add(0, 0)
    session.enter_delete_mode()

    round_ = session.build_round(3)

    assert round_.size == 3
    assert session.round is round_
    assert len(session.store) == 0
    assert session.mode is Mode.CONNECT
    assert log["rounds"][-1] is round_


def test_build_round_uses_configured_size():
    s = MatchSession(
        config=MatchConfig(letters_count=5),
        scheduler=_FakeScheduler(),
        rng=random.Random(1),
    )

    assert s.build_round().size == 5


def test_drag_through_session_commits(session):
    session.dispatch(InputEvent.start(ItemRef(Side.LEFT, 3)))
    session.dispatch(InputEvent.move((200.0, 250.0)))
    session.dispatch(InputEvent.end(_right_center(2)))

    assert session.store.pairs() == {(3, 2)}
    session.check_invariants()
