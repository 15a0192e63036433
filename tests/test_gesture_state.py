import pytest

from letter_match.geometry.layout import Rect, StaticLayout
from letter_match.interaction import InputEvent
from letter_match.interaction.gesture_state import GestureState, GestureStateMachine, NullCapture
from letter_match.interaction.mode_controller import ModeController
from letter_match.model.pairing_store import ItemState, PairingStore
from letter_match.model.round import ItemRef, Round, Side


def L(i):
    return ItemRef(Side.LEFT, i)


def R(i):
    return ItemRef(Side.RIGHT, i)


class _CountingCapture(NullCapture):
    def __init__(self):
        super().__init__()
        self.acquired = 0
        self.released = 0

    def acquire(self):
        super().acquire()
        self.acquired += 1

    def release(self):
        super().release()
        self.released += 1


def _make_layout(size: int) -> StaticLayout:
    layout = StaticLayout()
    for i in range(size):
        layout.place(L(i), Rect(0, i * 100, 50, 50))
        layout.place(R(i), Rect(300, i * 100, 50, 50))
    return layout


def _center(ref):
    x = 25.0 if ref.side is Side.LEFT else 325.0
    return (x, ref.index * 100 + 25.0)


@pytest.fixture
def machine():
    store = PairingStore(_make_layout(4))
    store.set_round(Round.from_symbols(["A", "B", "C", "D"], ["C", "A", "D", "B"]))
    indicators = []
    item_states = []
    capture = _CountingCapture()
    sm = GestureStateMachine(
        store,
        ModeController(),
        capture=capture,
        on_indicator=indicators.append,
        on_item_state=lambda ref, state: item_states.append((ref, state)),
    )
    sm.indicators = indicators
    sm.item_states = item_states
    sm.capture_probe = capture
    sm.store = store
    return sm


def test_start_creates_zero_length_indicator(machine):
    assert machine.handle(InputEvent.start(L(2)))

    assert machine.state is GestureState.DRAGGING
    assert machine.source == L(2)
    assert machine.indicator.is_degenerate
    assert machine.indicator.start == _center(L(2))
    assert machine.item_states == [(L(2), ItemState.ACTIVE)]
    assert machine.capture_probe.active


def test_drop_on_right_item_commits_pairing(machine):
    machine.handle(InputEvent.start(L(2)))
    machine.handle(InputEvent.move((200.0, 120.0)))

    machine.handle(InputEvent.end((330.0, 110.0)))

    assert machine.store.pairs() == {(2, 1)}
    assert machine.state is GestureState.IDLE
    assert machine.indicator is None
    assert machine.indicators[-1] is None
    assert machine.capture_probe.released == 1
    assert machine.item_states == [(L(2), ItemState.ACTIVE), (L(2), ItemState.NORMAL)]


def test_drop_on_empty_space_commits_nothing(machine):
    machine.handle(InputEvent.start(L(2)))

    assert machine.end((175.0, 175.0)) is None

    assert len(machine.store) == 0
    assert machine.state is GestureState.IDLE
    assert not machine.capture_probe.active


@pytest.mark.parametrize("drop", [L(0), L(2)])
def test_drop_on_same_side_commits_nothing(machine, drop):
    machine.handle(InputEvent.start(L(2)))

    machine.handle(InputEvent.end(_center(drop)))

    assert len(machine.store) == 0
    assert machine.state is GestureState.IDLE


def test_move_replaces_single_indicator(machine):
    machine.handle(InputEvent.start(L(0)))

    machine.handle(InputEvent.move((100.0, 40.0)))
    machine.handle(InputEvent.move((150.0, 80.0)))

    assert machine.indicator.start == _center(L(0))
    assert machine.indicator.end == (150.0, 80.0)
    assert len(machine.indicators) == 3


def test_move_while_idle_is_ignored(machine):
    assert machine.handle(InputEvent.move((10.0, 10.0))) is False
    assert machine.indicators == []


def test_multi_touch_move_is_consumed_without_cancelling(machine):
    machine.handle(InputEvent.start(L(0)))
    machine.handle(InputEvent.move((100.0, 40.0)))

    assert machine.handle(InputEvent.move((900.0, 900.0), contacts=2)) is True

    assert machine.is_dragging
    assert machine.indicator.end == (100.0, 40.0)


def test_release_with_zero_contacts_cancels(machine):
    machine.handle(InputEvent.start(L(0)))

    machine.handle(InputEvent.end(None, contacts=0))

    assert machine.state is GestureState.IDLE
    assert len(machine.store) == 0
    assert machine.capture_probe.released == 1


def test_second_start_while_dragging_is_refused(machine):
    machine.handle(InputEvent.start(L(0)))

    assert machine.handle(InputEvent.start(L(1))) is False

    assert machine.source == L(0)
    assert machine.capture_probe.acquired == 1


def test_start_refused_in_delete_mode(machine):
    machine._modes.enter_delete()

    assert machine.handle(InputEvent.start(L(0))) is False
    machine.handle(InputEvent.end(_center(R(0))))

    assert machine.indicator is None
    assert machine.indicators == []
    assert len(machine.store) == 0


def test_start_refused_when_gestures_disabled(machine):
    machine._modes.set_gestures_enabled(False)

    assert machine.start(L(0)) is False


def test_start_refused_on_right_or_unknown_items(machine):
    assert machine.start(R(0)) is False
    assert machine.start(L(7)) is False
    assert machine.state is GestureState.IDLE


def test_start_refused_on_paired_item(machine):
    machine.store.add(1, 1)

    assert machine.start(L(1)) is False


def test_tap_on_right_item_commits_with_selected_source(machine):
    machine.handle(InputEvent.start(L(3)))

    assert machine.handle(InputEvent.tap(R(2))) is True

    assert machine.store.pairs() == {(3, 2)}
    assert machine.state is GestureState.IDLE
    assert machine.capture_probe.released == 1


def test_tap_without_source_is_ignored(machine):
    assert machine.handle(InputEvent.tap(R(2))) is False
    assert len(machine.store) == 0


def test_commit_without_source_is_a_no_op(machine):
    assert machine._commit(R(2)) is None

    assert len(machine.store) == 0
    assert machine.indicators == []
    assert machine.capture_probe.released == 0


def test_drop_on_paired_right_item_replaces_pairing(machine):
    machine.store.add(0, 1)
    machine.handle(InputEvent.start(L(2)))

    machine.handle(InputEvent.end(_center(R(1))))

    assert machine.store.pairs() == {(2, 1)}


def test_cancel_releases_capture_once(machine):
    machine.handle(InputEvent.start(L(0)))

    assert machine.cancel() is True
    assert machine.cancel() is False

    assert machine.capture_probe.acquired == 1
    assert machine.capture_probe.released == 1
    assert machine.item_states[-1] == (L(0), ItemState.NORMAL)


def test_capture_released_even_if_renderer_fails(machine):
    def explode(_curve):
        if _curve is None:
            raise RuntimeError("renderer gone")

    machine._on_indicator = explode
    machine.handle(InputEvent.start(L(0)))

    with pytest.raises(RuntimeError):
        machine.cancel()

    assert machine.state is GestureState.IDLE
    assert not machine.capture_probe.active


def test_new_start_accepted_after_commit(machine):
    machine.handle(InputEvent.start(L(0)))
    machine.handle(InputEvent.end(_center(R(1))))

    assert machine.handle(InputEvent.start(L(1))) is True
