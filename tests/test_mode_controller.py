from letter_match.interaction import Mode
from letter_match.interaction.mode_controller import ModeController


def test_starts_in_connect_mode():
    modes = ModeController()

    assert modes.mode is Mode.CONNECT
    assert modes.allow_start
    assert not modes.connectors_interactive
    assert not modes.accepts_connector_tap()


def test_delete_mode_flips_gates():
    changes = []
    modes = ModeController(on_change=changes.append)

    assert modes.enter_delete() is True

    assert not modes.allow_start
    assert modes.connectors_interactive
    assert modes.accepts_connector_tap()
    assert changes == [Mode.DELETE]


def test_repeated_transitions_are_silent():
    changes = []
    modes = ModeController(on_change=changes.append)

    modes.enter_delete()
    assert modes.enter_delete() is False
    modes.exit_delete()
    assert modes.exit_delete() is False

    assert changes == [Mode.DELETE, Mode.CONNECT]


def test_toggle():
    modes = ModeController()

    assert modes.toggle() is Mode.DELETE
    assert modes.toggle() is Mode.CONNECT


def test_gestures_disabled_blocks_start_in_connect_mode():
    modes = ModeController()
    modes.set_gestures_enabled(False)

    assert not modes.allow_start
    modes.set_gestures_enabled(True)
    assert modes.allow_start
