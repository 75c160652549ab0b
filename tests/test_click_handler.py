from qnav.core.events import MouseButton
from qnav.core.gesture_clock import GestureClock
from qnav.navigation.click_handler import ClickHandler

from conftest import RecordingHandler, press, release


def test_single_press_is_not_consumed():
    fallback = RecordingHandler()
    handler = ClickHandler(GestureClock(0.4), fallback.forward)

    assert handler(press(t=0.0)) is False
    assert handler(release(t=0.1)) is False
    assert handler.pending is None
    assert fallback.events == []


def test_double_press_held_and_replayed_on_release():
    """The second press is consumed, then handed on before its release"""
    fallback = RecordingHandler()
    handler = ClickHandler(GestureClock(0.4), fallback.forward)

    handler(press(t=0.0))
    handler(release(t=0.1))
    second = press(t=0.2)
    assert handler(second) is True
    assert handler.pending is second

    assert handler(release(t=0.3)) is False
    assert fallback.events == [second]
    assert handler.pending is None


def test_slow_second_press_is_a_new_click():
    fallback = RecordingHandler()
    handler = ClickHandler(GestureClock(0.4), fallback.forward)

    handler(press(t=0.0))
    assert handler(press(t=1.0)) is False


def test_pending_press_only_replayed_for_its_button():
    fallback = RecordingHandler()
    handler = ClickHandler(GestureClock(0.4), fallback.forward)
    handler(press(t=0.0))
    handler(press(t=0.1))

    handler(release(MouseButton.RIGHT, t=0.2))
    assert fallback.events == []

    handler.reset()
    assert handler.pending is None

