"""Mutable per-interaction state shared by the navigation handlers."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from qnav.core.events import MouseButton, NavigationEvent

if TYPE_CHECKING:
    from qnav.viewers.camera.camera_state import PanningPlane


@dataclass
class ModifierState:
    ctrl_down: bool = False
    shift_down: bool = False

    def sync(self, event: NavigationEvent) -> bool:
        """
        Take the modifier flags carried by the event.

        Modifiers pressed or released while the viewport had no focus leave
        the tracked state stale; every event corrects it.

        :return: True if the tracked state was out of date
        """
        drifted = (self.ctrl_down != event.ctrl_down) or (self.shift_down != event.shift_down)
        self.ctrl_down = event.ctrl_down
        self.shift_down = event.shift_down
        return drifted


@dataclass
class ButtonState:
    button1_down: bool = False
    button2_down: bool = False
    button3_down: bool = False

    def set(self, button: MouseButton, pressed: bool) -> None:
        if button is MouseButton.LEFT:
            self.button1_down = pressed
        elif button is MouseButton.RIGHT:
            self.button2_down = pressed
        elif button is MouseButton.MIDDLE:
            self.button3_down = pressed


@dataclass(frozen=True)
class PointerSample:
    """
    Pointer position at one event.

    position is normalized to the unit square of the viewport, pixel is the
    raw viewport position it came from.
    """
    position: tuple[float, float] = (0.5, 0.5)
    timestamp: float = 0.0
    pixel: tuple[int, int] = (0, 0)


@dataclass
class NavigationState:
    """
    Everything a navigation style remembers between events.

    Kept in one place so the handlers' inputs and outputs stay explicit.

    :ivar lock_recenter: Set once an interaction turned out to be real
        motion; a release then no longer counts as a recentering click.
    :ivar camera_moved: A camera manipulator ran since the last secondary
        button press; suppresses the context menu on release.
    :ivar centering_button: Button whose press started a centering
        interaction that may still end as a click.
    """
    buttons: ButtonState = field(default_factory=ButtonState)
    modifiers: ModifierState = field(default_factory=ModifierState)
    current: PointerSample = field(default_factory=PointerSample)
    previous: PointerSample = field(default_factory=PointerSample)
    lock_recenter: bool = False
    camera_moved: bool = False
    centering_button: MouseButton | None = None
    panning_plane: PanningPlane | None = None
    zoom_anchor: tuple[float, float] | None = None
    rotation_center: tuple[float, float, float] | None = None
    saved_cursor: tuple[int, int] | None = None
    cursor_position: tuple[int, int] | None = None

    def advance(self, sample: PointerSample) -> None:
        """Make `sample` current and keep the old current one as previous."""
        self.previous = self.current
        self.current = sample
