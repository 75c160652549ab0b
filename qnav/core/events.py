"""Viewer events consumed by the navigation styles.

Positions are viewport pixels with the origin at the lower-left corner
(VTK display coordinates). Timestamps are seconds on a monotonic clock.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import ClassVar


class EventKind(Enum):
    """Kind of an incoming event, used to route it to a handler."""
    KEYBOARD = auto()
    BUTTON = auto()
    POINTER_MOVE = auto()
    MOTION3 = auto()
    WHEEL = auto()
    OTHER = auto()


class MouseButton(Enum):
    """Pointer buttons in Inventor numbering."""
    LEFT = 1     # primary, selection and drag
    RIGHT = 2    # secondary, context menu
    MIDDLE = 3   # tertiary, pan and center


class Key:
    """Key names understood by the keyboard handler."""
    CONTROL = "Control"
    SHIFT = "Shift"
    ESCAPE = "Escape"
    PAGE_UP = "Page_Up"
    PAGE_DOWN = "Page_Down"
    HOME = "Home"
    LEFT = "Left"
    RIGHT = "Right"
    UP = "Up"
    DOWN = "Down"
    S = "s"


@dataclass(frozen=True)
class NavigationEvent:
    """
    Base class for events.

    :ivar position: Pointer position in pixels, None when the event carries none.
    :ivar timestamp: Event time in seconds.
    :ivar ctrl_down: Control modifier state when the event was generated.
    :ivar shift_down: Shift modifier state when the event was generated.
    """
    kind: ClassVar[EventKind] = EventKind.OTHER

    position: tuple[int, int] | None = None
    timestamp: float = 0.0
    ctrl_down: bool = False
    shift_down: bool = False


@dataclass(frozen=True)
class KeyboardEvent(NavigationEvent):
    kind: ClassVar[EventKind] = EventKind.KEYBOARD

    key: str = ""
    pressed: bool = True


@dataclass(frozen=True)
class ButtonEvent(NavigationEvent):
    kind: ClassVar[EventKind] = EventKind.BUTTON

    button: MouseButton = MouseButton.LEFT
    pressed: bool = True


@dataclass(frozen=True)
class PointerMoveEvent(NavigationEvent):
    kind: ClassVar[EventKind] = EventKind.POINTER_MOVE


@dataclass(frozen=True)
class Motion3Event(NavigationEvent):
    """
    Spaceball / 3D mouse motion.

    translation and the rotation axis are given in the camera frame
    (x right, y up, z towards the viewer); the angle is in radians.
    """
    kind: ClassVar[EventKind] = EventKind.MOTION3

    translation: tuple[float, float, float] = (0.0, 0.0, 0.0)
    rotation_axis: tuple[float, float, float] = (0.0, 0.0, 1.0)
    rotation_angle: float = 0.0


@dataclass(frozen=True)
class WheelEvent(NavigationEvent):
    """Mouse wheel; positive delta is a forward (away from the user) step."""
    kind: ClassVar[EventKind] = EventKind.WHEEL

    delta: float = 0.0
