from __future__ import annotations

import logging
import time
from typing import Callable, TYPE_CHECKING

from vtkmodules.vtkInteractionStyle import vtkInteractorStyleTrackballCamera

from qnav.core.events import (
    ButtonEvent, Key, KeyboardEvent, MouseButton, NavigationEvent, PointerMoveEvent, WheelEvent,
)

if TYPE_CHECKING:
    import vtk
    from qnav.navigation.base_style import NavigationStyle

logger = logging.getLogger(__name__)

_BUTTON_EVENTS: dict[str, tuple[MouseButton, bool]] = {
    "LeftButtonPressEvent": (MouseButton.LEFT, True),
    "LeftButtonReleaseEvent": (MouseButton.LEFT, False),
    "RightButtonPressEvent": (MouseButton.RIGHT, True),
    "RightButtonReleaseEvent": (MouseButton.RIGHT, False),
    "MiddleButtonPressEvent": (MouseButton.MIDDLE, True),
    "MiddleButtonReleaseEvent": (MouseButton.MIDDLE, False),
}

_WHEEL_EVENTS: dict[str, float] = {
    "MouseWheelForwardEvent": 1.0,
    "MouseWheelBackwardEvent": -1.0,
}

# VTK key symbols -> navigation key names
_KEYSYMS: dict[str, str] = {
    "Control_L": Key.CONTROL,
    "Control_R": Key.CONTROL,
    "Shift_L": Key.SHIFT,
    "Shift_R": Key.SHIFT,
    "Escape": Key.ESCAPE,
    "Prior": Key.PAGE_UP,
    "Next": Key.PAGE_DOWN,
    "Home": Key.HOME,
    "Left": Key.LEFT,
    "Right": Key.RIGHT,
    "Up": Key.UP,
    "Down": Key.DOWN,
    "s": Key.S,
    "S": Key.S,
}


def event_from_interactor(iren: vtk.vtkRenderWindowInteractor, vtk_event: str,
                          timestamp: float) -> NavigationEvent | None:
    """
    Build a navigation event from the interactor's current event state.

    :param iren: Interactor that fired the event
    :param vtk_event: VTK event name, e.g. "LeftButtonPressEvent"
    :param timestamp: Event time in seconds
    :return: The event, None for VTK events navigation does not use
    """
    x, y = iren.GetEventPosition()
    common = dict(
        position=(int(x), int(y)),
        timestamp=timestamp,
        ctrl_down=bool(iren.GetControlKey()),
        shift_down=bool(iren.GetShiftKey()),
    )
    if vtk_event in _BUTTON_EVENTS:
        button, pressed = _BUTTON_EVENTS[vtk_event]
        return ButtonEvent(button=button, pressed=pressed, **common)
    if vtk_event == "MouseMoveEvent":
        return PointerMoveEvent(**common)
    if vtk_event in _WHEEL_EVENTS:
        return WheelEvent(delta=_WHEEL_EVENTS[vtk_event], **common)
    if vtk_event in ("KeyPressEvent", "KeyReleaseEvent"):
        keysym = iren.GetKeySym() or ""
        return KeyboardEvent(key=_KEYSYMS.get(keysym, keysym),
                             pressed=vtk_event == "KeyPressEvent", **common)
    return None


class NavigationInteractorStyle(vtkInteractorStyleTrackballCamera):
    """
    Routes VTK interactor events to a navigation style.

    The trackball camera behaviour of the base class is switched off; every
    camera change comes from the navigation style. Events the style does
    not consume reach `on_unhandled` through its fallback handler.
    """

    OBSERVED_EVENTS = (*_BUTTON_EVENTS, "MouseMoveEvent", *_WHEEL_EVENTS,
                       "KeyPressEvent", "KeyReleaseEvent")

    def __init__(self, navigation: NavigationStyle,
                 on_handled: Callable[[], None] | None = None):
        super().__init__()
        self.navigation = navigation
        self.on_handled = on_handled

        for name in self.OBSERVED_EVENTS:
            self.RemoveObservers(name)
            self.AddObserver(name, self.on_event)
        # Swallow the default key bindings (wireframe, stereo, exit, ...).
        self.RemoveObservers("CharEvent")
        self.AddObserver("CharEvent", self.on_char)

        logger.debug("[NavigationInteractorStyle] Initialized.")

    def on_event(self, obj, event):
        iren = self.GetInteractor()
        if iren is None:
            return
        nav_event = event_from_interactor(iren, event, time.monotonic())
        if nav_event is None:
            return
        self.navigation.handle(nav_event)
        if self.on_handled is not None:
            self.on_handled()

    def on_char(self, obj, event):
        return
