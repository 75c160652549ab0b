"""
Base class of the navigation styles.

A navigation style sits between the viewer's raw events and the camera.
It owns the per-interaction state, turns events into mode changes and runs
the camera manipulators that belong to the current mode. Events it does
not consume go on to a fallback handler.
"""
from __future__ import annotations

import logging
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Sequence

from qnav.core.events import ButtonEvent, EventKind, Key, KeyboardEvent, Motion3Event, NavigationEvent
from qnav.core.gesture_clock import GestureClock
from qnav.core.motion_log import MotionLog
from qnav.core.navigation_config import NavigationConfig
from qnav.core.navigation_state import NavigationState, PointerSample
from qnav.navigation.click_handler import ClickHandler
from qnav.navigation.interfaces import (
    FallbackHandler, ForegroundHandler, PopupMenu, ScenePicker, ViewerContext,
)
from qnav.utils.log_util import log_io
from qnav.viewers.camera import manipulators
from qnav.viewers.camera.camera_adapter import CameraAdapter
from qnav.viewers.camera.manipulators import CameraAnimation, SpinVelocity, TrackballProjector
from qnav.viewers.controllers.interaction_controller import InteractionController, NavigationMode

logger = logging.getLogger(__name__)

SEEK_MODES = (NavigationMode.SEEK_WAIT, NavigationMode.SEEK)

VIEWING_KEYS = (Key.S, Key.HOME, Key.LEFT, Key.RIGHT, Key.UP, Key.DOWN)


@dataclass
class Dispatch:
    """
    Outcome of one event as it moves through the handlers.

    :ivar next_mode: Mode proposed so far
    :ivar consumed: The event was used and should not be forwarded
    :ivar directed: A handler picked the next mode itself; the transition
        table is not consulted
    """
    previous_mode: NavigationMode
    next_mode: NavigationMode
    consumed: bool = False
    directed: bool = False


class NavigationStyle(ABC):
    """
    Common machinery of the navigation styles.

    Subclasses implement process_event(), which decides what an event means;
    this class provides the state, the manipulators bound to that state and
    the seek, spin and animation timing driven by tick().
    """

    def __init__(self, camera: CameraAdapter, viewer: ViewerContext, *,
                 picker: ScenePicker | None = None,
                 foreground: ForegroundHandler | None = None,
                 fallback: FallbackHandler | None = None,
                 popup_menu: PopupMenu | None = None,
                 click_handler: ClickHandler | None = None,
                 config: NavigationConfig | None = None) -> None:
        self.camera = camera
        self.viewer = viewer
        self.picker = picker
        self.foreground = foreground
        self.fallback = fallback
        self.popup_menu = popup_menu
        self.config = config if config is not None else NavigationConfig()

        self.state = NavigationState()
        self.gesture_clock = GestureClock(self.config.double_click_interval)
        self.motion_log = MotionLog(self.config.motion_log_size)
        self.projector = TrackballProjector()
        self.controller = InteractionController()
        self.click_handler = click_handler if click_handler is not None \
            else ClickHandler(self.gesture_clock, self.forward)

        self._spin: SpinVelocity | None = None
        self._animation: CameraAnimation | None = None
        self._last_tick: float | None = None

        self._register_mode_actions()

    def _register_mode_actions(self) -> None:
        c = self.controller
        c.add_mode_enter_callback(NavigationMode.DRAGGING, self._on_enter_dragging)
        c.add_mode_exit_callback(NavigationMode.DRAGGING, self.motion_log.clear)
        c.add_mode_enter_callback(NavigationMode.PANNING, self._on_enter_panning)
        c.add_mode_enter_callback(NavigationMode.ZOOMING, self._on_enter_zooming)
        c.add_mode_exit_callback(NavigationMode.ZOOMING, self._on_exit_zooming)
        c.add_mode_enter_callback(NavigationMode.SPINNING, self._on_enter_spinning)
        c.add_mode_exit_callback(NavigationMode.SPINNING, self._on_exit_spinning)
        c.add_mode_exit_callback(NavigationMode.SEEK, self._on_exit_seek)

    # =====================================================
    # Introspection
    # =====================================================

    @property
    def current_mode(self) -> NavigationMode:
        return self.controller.current_mode

    @property
    def is_seek_mode(self) -> bool:
        return self.current_mode in SEEK_MODES

    @property
    def is_animating(self) -> bool:
        """True while the camera moves on its own (spin, seek or recenter animation)."""
        return self.current_mode is NavigationMode.SPINNING or self._animation is not None

    @property
    def is_viewing(self) -> bool:
        return self.viewer.is_viewing()

    @property
    def spin_velocity(self) -> SpinVelocity | None:
        return self._spin

    @property
    def cursor_feedback(self) -> tuple[tuple[int, int] | None, tuple[int, int] | None]:
        """(position where the drag started, current position) in viewport pixels."""
        return self.state.saved_cursor, self.state.cursor_position

    @abstractmethod
    def mouse_buttons(self, mode: NavigationMode) -> str:
        """Short hint telling the user how to reach `mode`."""

    @abstractmethod
    def user_friendly_name(self) -> str:
        """Name shown to the user when choosing a style."""

    # =====================================================
    # Entry points
    # =====================================================

    def handle(self, event: NavigationEvent) -> bool:
        """
        Process one viewer event.

        :return: True if the event was consumed
        """
        try:
            return self.process_event(event)
        except Exception:
            logger.exception(f"Error while processing {type(event).__name__} "
                             f"in {self.current_mode.name}")
            if self.config.raise_errors:
                raise
            return False

    @abstractmethod
    def process_event(self, event: NavigationEvent) -> bool:
        ...

    def tick(self, now: float | None = None) -> bool:
        """
        Advance the time driven camera motion.

        Called once per frame by the host.

        :param now: Current time in seconds on the event clock
        :return: True if the camera changed
        """
        try:
            return self._advance(time.monotonic() if now is None else now)
        except Exception:
            logger.exception("Error while advancing camera animation")
            if self.config.raise_errors:
                raise
            return False

    def _advance(self, now: float) -> bool:
        changed = False
        if self._animation is not None:
            finished = self._animation.step(self.camera, now)
            changed = True
            if finished:
                self._animation = None
                if self.current_mode is NavigationMode.SEEK:
                    logger.info("Seek finished")
                    self.controller.set_mode(NavigationMode.IDLE)

        if self.current_mode is NavigationMode.SPINNING and self._spin is not None:
            elapsed = now - self._last_tick if self._last_tick is not None else 0.0
            self._last_tick = now
            if manipulators.apply_spin(self.camera, self._spin, elapsed, self._pivot()):
                changed = True
        return changed

    # =====================================================
    # Event pipeline helpers
    # =====================================================

    def classify(self, event: NavigationEvent) -> EventKind:
        return getattr(event, "kind", EventKind.OTHER)

    def forward(self, event: NavigationEvent) -> bool:
        """Hand the event to the fallback handler."""
        if self.fallback is None:
            return False
        return self.fallback.forward(event)

    def handle_event_in_foreground(self, event: NavigationEvent) -> bool:
        if self.foreground is None:
            return False
        return self.foreground.try_handle(event)

    def update_pointer(self, event: NavigationEvent) -> None:
        """Refresh the viewport size and take the event's pointer position."""
        self.camera.viewport_size = self.viewer.viewport_size()
        if event.position is None:
            return
        pixel = (int(event.position[0]), int(event.position[1]))
        normalized = self.camera.normalize_pixel_pos(pixel)
        self.state.advance(PointerSample(normalized, event.timestamp, pixel))

    def sync_modifier_keys(self, event: NavigationEvent) -> None:
        if self.state.modifiers.sync(event):
            logger.debug(f"Modifier state resynced: ctrl={event.ctrl_down} shift={event.shift_down}")

    def commit(self, dispatch: Dispatch) -> None:
        if dispatch.next_mode is not NavigationMode.SPINNING:
            self._spin = None
        self.controller.set_mode(dispatch.next_mode)

    # =====================================================
    # Seek and recenter
    # =====================================================

    def set_seek_mode(self, on: bool) -> None:
        """Wait for a seek target click, or abandon seeking."""
        if on:
            logger.info("Waiting for seek target")
            self.controller.set_mode(NavigationMode.SEEK_WAIT)
        elif self.is_seek_mode:
            logger.info("Seek cancelled")
            self.controller.set_mode(NavigationMode.IDLE)

    @log_io()
    def seek_to_point(self, screen_pos: Sequence[int]) -> bool:
        """
        Start the seek animation towards the scene point under `screen_pos`.

        :return: False if nothing was hit
        """
        hit = self._pick(screen_pos)
        if hit is None:
            logger.info("Seek target missed")
            return False
        start = self.camera.get_pose()
        end = manipulators.seek_pose(start, hit, self.config.seek_distance_percent)
        self._animation = CameraAnimation(start, end, self.state.current.timestamp,
                                          self.config.seek_duration)
        self.state.camera_moved = True
        logger.info(f"Seeking to ({hit[0]:.2f}, {hit[1]:.2f}, {hit[2]:.2f})")
        return True

    @log_io()
    def look_at_point(self, screen_pos: Sequence[int]) -> bool:
        """
        Recenter the view on the scene point under `screen_pos`.

        :return: False if nothing was hit
        """
        hit = self._pick(screen_pos)
        if hit is None:
            return False
        start = self.camera.get_pose()
        end = manipulators.look_at_pose(start, hit)
        if self.config.animation_enabled:
            self._animation = CameraAnimation(start, end, self.state.current.timestamp,
                                              self.config.animation_duration)
        else:
            self.camera.set_pose(end)
        self.state.camera_moved = True
        logger.info(f"Recentered on ({hit[0]:.2f}, {hit[1]:.2f}, {hit[2]:.2f})")
        return True

    def _pick(self, screen_pos: Sequence[int]):
        if self.picker is None:
            return None
        return self.picker.pick(tuple(screen_pos))

    # =====================================================
    # Manipulators bound to the current state
    # =====================================================

    def pan_camera(self) -> bool:
        moved = manipulators.pan_camera(self.camera, self.camera.aspect_ratio,
                                        self.state.panning_plane,
                                        self.state.current.position,
                                        self.state.previous.position)
        self.state.camera_moved |= moved
        return moved

    def zoom_by_cursor(self) -> bool:
        anchor = self.state.zoom_anchor if self.config.zoom_at_cursor else None
        moved = manipulators.zoom_by_cursor(self.camera, self.state.current.position,
                                            self.state.previous.position, anchor,
                                            self.config.zoom_step_drag, self.config.invert_zoom)
        self.state.camera_moved |= moved
        return moved

    def zoom_at_cursor(self, logfactor: float) -> bool:
        position = self.state.current.position if self.config.zoom_at_cursor \
            else manipulators.SCREEN_CENTER
        moved = manipulators.zoom_at_cursor(self.camera, logfactor, position)
        self.state.camera_moved |= moved
        return moved

    def spin(self) -> bool:
        """Orbit from the previous logged position to the newest one."""
        previous = self.motion_log[1].position if len(self.motion_log) > 1 \
            else self.state.previous.position
        moved = manipulators.orbit(self.camera, self.projector, previous,
                                   self.state.current.position, self._pivot(),
                                   self.config.sensitivity)
        self.state.camera_moved |= moved
        return moved

    def do_spin(self, release_time: float) -> bool:
        """
        Decide whether a drag released at `release_time` starts a spin.

        Keeps the estimated velocity for tick().
        """
        self._spin = manipulators.estimate_spin(self.camera, self.projector, self.motion_log,
                                                release_time, self.config)
        if self._spin is not None:
            logger.debug(f"Spin at {self._spin.angular_velocity:.3f} rad/s")
        return self._spin is not None

    def add_to_log(self, position: tuple[float, float], timestamp: float) -> None:
        self.motion_log.append(position, timestamp)

    def save_cursor_position(self) -> None:
        self.state.saved_cursor = self.state.current.pixel
        self.state.cursor_position = self.state.current.pixel
        self.state.rotation_center = manipulators.rotation_center(
            self.camera, self.config.rotation_center_mode,
            self.state.current.position, self.state.current.pixel, self.picker)

    def move_cursor_position(self) -> None:
        self.state.cursor_position = self.state.current.pixel

    def _pivot(self) -> tuple[float, float, float]:
        return self.state.rotation_center or self.camera.focal_point

    # =====================================================
    # Shared handlers
    # =====================================================

    def process_keyboard_event(self, event: KeyboardEvent, dispatch: Dispatch) -> None:
        key = event.key
        if key == Key.CONTROL:
            self.state.modifiers.ctrl_down = event.pressed
        elif key == Key.SHIFT:
            self.state.modifiers.shift_down = event.pressed

        if not event.pressed:
            return

        if dispatch.previous_mode is NavigationMode.SPINNING:
            dispatch.next_mode = NavigationMode.IDLE

        if key in VIEWING_KEYS:
            self.viewer.set_viewing(True)
        elif key == Key.PAGE_UP:
            self.zoom_at_cursor(-self.config.zoom_step)
            dispatch.consumed = True
        elif key == Key.PAGE_DOWN:
            self.zoom_at_cursor(self.config.zoom_step)
            dispatch.consumed = True
        elif key == Key.ESCAPE and dispatch.previous_mode in SEEK_MODES:
            dispatch.next_mode = NavigationMode.IDLE
            dispatch.directed = True
            dispatch.consumed = True

    def process_motion_event(self, event: Motion3Event, dispatch: Dispatch) -> None:
        moved = manipulators.apply_motion3(self.camera, event.translation,
                                           event.rotation_axis, event.rotation_angle)
        self.state.camera_moved |= moved
        dispatch.consumed = True

    def process_click_event(self, event: ButtonEvent) -> bool:
        return self.click_handler(event)

    def open_popup_menu(self, screen_pos: Sequence[int]) -> None:
        if self.popup_menu is None or not self.config.popup_menu_enabled:
            return
        self.popup_menu.open_menu(tuple(screen_pos))

    # =====================================================
    # Mode entry/exit actions
    # =====================================================

    def _on_enter_dragging(self) -> None:
        self.motion_log.clear()
        self.add_to_log(self.state.current.position, self.state.current.timestamp)
        self.save_cursor_position()

    def _on_enter_panning(self) -> None:
        self.state.panning_plane = manipulators.setup_panning_plane(self.camera)

    def _on_enter_zooming(self) -> None:
        self.state.zoom_anchor = self.state.current.position

    def _on_exit_zooming(self) -> None:
        self.state.zoom_anchor = None

    def _on_enter_spinning(self) -> None:
        self._last_tick = self.state.current.timestamp

    def _on_exit_spinning(self) -> None:
        self._spin = None
        self._last_tick = None

    def _on_exit_seek(self) -> None:
        self._animation = None
