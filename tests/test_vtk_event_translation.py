import pytest
import vtk

from qnav.core.events import (
    ButtonEvent, Key, KeyboardEvent, MouseButton, PointerMoveEvent, WheelEvent,
)
from qnav.viewers.interactor_styles.navigation_interactor_style import (
    NavigationInteractorStyle, event_from_interactor,
)


class FakeInteractor:
    def __init__(self, pos=(10, 20), ctrl=0, shift=0, keysym=None):
        self.pos = pos
        self.ctrl = ctrl
        self.shift = shift
        self.keysym = keysym

    def GetEventPosition(self):
        return self.pos

    def GetControlKey(self):
        return self.ctrl

    def GetShiftKey(self):
        return self.shift

    def GetKeySym(self):
        return self.keysym


@pytest.mark.parametrize("name, button, pressed", [
    ("LeftButtonPressEvent", MouseButton.LEFT, True),
    ("MiddleButtonReleaseEvent", MouseButton.MIDDLE, False),
    ("RightButtonPressEvent", MouseButton.RIGHT, True),
])
def test_button_events(name, button, pressed):
    event = event_from_interactor(FakeInteractor(ctrl=1), name, 2.5)

    assert isinstance(event, ButtonEvent)
    assert (event.button, event.pressed) == (button, pressed)
    assert event.position == (10, 20)
    assert event.timestamp == 2.5
    assert event.ctrl_down is True and event.shift_down is False


def test_move_and_wheel():
    assert isinstance(event_from_interactor(FakeInteractor(), "MouseMoveEvent", 0.0),
                      PointerMoveEvent)
    assert event_from_interactor(FakeInteractor(), "MouseWheelForwardEvent", 0.0) \
        == WheelEvent(position=(10, 20), delta=1.0)
    assert event_from_interactor(FakeInteractor(), "MouseWheelBackwardEvent", 0.0).delta == -1.0


@pytest.mark.parametrize("keysym, expected", [
    ("Prior", Key.PAGE_UP),
    ("Next", Key.PAGE_DOWN),
    ("Control_R", Key.CONTROL),
    ("Escape", Key.ESCAPE),
    ("S", Key.S),
    ("a", "a"),
    (None, ""),
])
def test_key_names(keysym, expected):
    event = event_from_interactor(FakeInteractor(keysym=keysym), "KeyReleaseEvent", 0.0)

    assert isinstance(event, KeyboardEvent)
    assert event.key == expected
    assert event.pressed is False


def test_unused_vtk_events_are_dropped():
    assert event_from_interactor(FakeInteractor(), "EnterEvent", 0.0) is None


class RecordingNavigation:
    def __init__(self):
        self.events = []

    def handle(self, event):
        self.events.append(event)
        return True


def test_style_routes_interactor_events():
    navigation = RecordingNavigation()
    handled = []
    style = NavigationInteractorStyle(navigation, on_handled=lambda: handled.append(True))
    iren = vtk.vtkGenericRenderWindowInteractor()
    style.SetInteractor(iren)
    iren.SetEventInformation(30, 40, 0, 1)

    style.on_event(iren, "LeftButtonPressEvent")
    style.on_event(iren, "EnterEvent")

    assert len(navigation.events) == 1
    event = navigation.events[0]
    assert event.position == (30, 40)
    assert event.shift_down is True
    assert handled == [True]
