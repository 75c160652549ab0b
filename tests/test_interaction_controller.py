import logging

from qnav.viewers.controllers.interaction_controller import InteractionController, NavigationMode


def test_starts_idle():
    assert InteractionController().current_mode is NavigationMode.IDLE
    assert InteractionController(NavigationMode.SEEK_WAIT).current_mode is NavigationMode.SEEK_WAIT


def test_callbacks_run_exit_enter_changed_in_order():
    controller = InteractionController()
    calls = []
    controller.add_mode_exit_callback(NavigationMode.IDLE, lambda: calls.append("exit idle"))
    controller.add_mode_enter_callback(NavigationMode.PANNING, lambda: calls.append("enter panning"))
    controller.add_mode_enter_callback(NavigationMode.ZOOMING, lambda: calls.append("enter zooming"))
    controller.add_mode_changed_callback(lambda old, new: calls.append((old, new)))

    assert controller.set_mode(NavigationMode.PANNING) is True

    assert calls == ["exit idle", "enter panning", (NavigationMode.IDLE, NavigationMode.PANNING)]
    assert controller.current_mode is NavigationMode.PANNING


def test_same_mode_fires_nothing():
    controller = InteractionController()
    calls = []
    controller.add_mode_changed_callback(lambda old, new: calls.append(new))
    controller.add_mode_enter_callback(NavigationMode.IDLE, lambda: calls.append("enter"))

    assert controller.set_mode(NavigationMode.IDLE) is False
    assert calls == []


def test_failing_callback_is_logged_and_change_completes(caplog):
    """コールバックの例外はログに残し、モード変更は継続する"""
    controller = InteractionController()
    calls = []

    def bad():
        raise RuntimeError("boom")

    controller.add_mode_enter_callback(NavigationMode.DRAGGING, bad)
    controller.add_mode_changed_callback(lambda old, new: calls.append(new))

    with caplog.at_level(logging.ERROR):
        assert controller.set_mode(NavigationMode.DRAGGING)

    assert controller.current_mode is NavigationMode.DRAGGING
    assert calls == [NavigationMode.DRAGGING]
    assert "boom" in caplog.text


def test_reset_returns_to_idle():
    controller = InteractionController()
    exited = []
    controller.add_mode_exit_callback(NavigationMode.SPINNING, lambda: exited.append(True))
    controller.set_mode(NavigationMode.SPINNING)

    controller.reset()

    assert controller.current_mode is NavigationMode.IDLE
    assert exited == [True]
