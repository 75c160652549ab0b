"""Core components layer - shared, view-independent functionality."""

from qnav.core.events import (
    ButtonEvent,
    EventKind,
    Key,
    KeyboardEvent,
    Motion3Event,
    MouseButton,
    NavigationEvent,
    PointerMoveEvent,
    WheelEvent,
)
from qnav.core.gesture_clock import GestureClock
from qnav.core.motion_log import MotionLog, MotionSample
from qnav.core.navigation_config import NavigationConfig, RotationCenterMode

__all__ = [
    "ButtonEvent",
    "EventKind",
    "Key",
    "KeyboardEvent",
    "Motion3Event",
    "MouseButton",
    "NavigationEvent",
    "PointerMoveEvent",
    "WheelEvent",
    "GestureClock",
    "MotionLog",
    "MotionSample",
    "NavigationConfig",
    "RotationCenterMode",
]
