"""Open Inventor / Coin style navigation."""
from __future__ import annotations

import logging

from qnav.core.events import ButtonEvent, EventKind, Key, KeyboardEvent, MouseButton, NavigationEvent
from qnav.navigation.base_style import Dispatch, NavigationStyle
from qnav.navigation.mode_resolver import ButtonCombo, resolve_mode
from qnav.viewers.camera import manipulators
from qnav.viewers.controllers.interaction_controller import NavigationMode

logger = logging.getLogger(__name__)


class InventorNavigationStyle(NavigationStyle):
    """
    Navigation as in the Open Inventor examiner viewer.

    Left drag orbits, middle drag pans, left+middle or ctrl+middle drag
    zooms. Ctrl or shift with the left button selects. A shift+left or
    middle click recenters the view on the point under the cursor, a fast
    orbit keeps spinning after release.
    """

    _HINTS = {
        NavigationMode.SELECTION: "Press CTRL and left mouse button",
        NavigationMode.PANNING: "Press middle mouse button",
        NavigationMode.DRAGGING: "Press left mouse button",
        NavigationMode.ZOOMING: "Scroll middle mouse button",
    }

    def user_friendly_name(self) -> str:
        return "OpenInventor"

    def mouse_buttons(self, mode: NavigationMode) -> str:
        return self._HINTS.get(mode, "No description")

    def process_event(self, event: NavigationEvent) -> bool:
        mode = self.current_mode

        if self.is_seek_mode and not self._drives_seek(event):
            if isinstance(event, ButtonEvent):
                self.state.buttons.set(event.button, event.pressed)
            return self.forward(event)

        if not self.is_seek_mode and not self.is_animating and self.viewer.is_viewing():
            self.viewer.set_viewing(False)

        self.update_pointer(event)
        self.sync_modifier_keys(event)

        editing = self.viewer.is_editing()
        if not editing and self.handle_event_in_foreground(event):
            return True

        dispatch = Dispatch(previous_mode=mode, next_mode=mode)
        kind = self.classify(event)
        if kind is EventKind.KEYBOARD:
            self.process_keyboard_event(event, dispatch)
        elif kind is EventKind.BUTTON:
            self._process_button_event(event, dispatch)
        elif kind is EventKind.POINTER_MOVE:
            self._process_pointer_move(dispatch)
        elif kind is EventKind.MOTION3:
            self.process_motion_event(event, dispatch)
        elif kind is not EventKind.WHEEL:
            logger.debug(f"Unhandled event kind {kind}")
            return self._forward_if_unused(event, dispatch, editing)

        combo = ButtonCombo.from_state(self.state)
        if not dispatch.directed:
            dispatch.next_mode = resolve_mode(
                mode, combo, dispatch.next_mode,
                should_spin=lambda: self.do_spin(event.timestamp))

        if combo.button1 and (combo.button2 or combo.button3):
            dispatch.consumed = True
        # An edit in progress keeps its selection until everything is released.
        if editing and mode is NavigationMode.SELECTION and dispatch.next_mode is not NavigationMode.IDLE:
            dispatch.next_mode = NavigationMode.SELECTION
            dispatch.consumed = False

        self.commit(dispatch)

        if kind is EventKind.WHEEL:
            return self.forward(event)
        return self._forward_if_unused(event, dispatch, editing)

    def _forward_if_unused(self, event: NavigationEvent, dispatch: Dispatch, editing: bool) -> bool:
        selecting = NavigationMode.SELECTION in (dispatch.previous_mode, dispatch.next_mode)
        if (selecting or editing) and not dispatch.consumed:
            return self.forward(event)
        return True

    def _drives_seek(self, event: NavigationEvent) -> bool:
        if isinstance(event, ButtonEvent):
            return (event.button is MouseButton.LEFT and event.pressed
                    and self.current_mode is NavigationMode.SEEK_WAIT)
        if isinstance(event, KeyboardEvent):
            return event.key == Key.ESCAPE and event.pressed
        return False

    # =====================================================
    # Buttons
    # =====================================================

    def _process_button_event(self, event: ButtonEvent, dispatch: Dispatch) -> None:
        state = self.state
        mode = dispatch.previous_mode
        pressed = event.pressed

        if pressed and mode is NavigationMode.SPINNING:
            dispatch.next_mode = NavigationMode.IDLE
        if pressed and self._animation is not None:
            logger.debug("Recenter animation interrupted")
            self._animation = None

        if event.button is MouseButton.LEFT:
            self._process_primary_button(event, dispatch)
        elif event.button is MouseButton.RIGHT:
            state.lock_recenter = True
            if pressed:
                state.camera_moved = False
            elif state.camera_moved:
                dispatch.consumed = True
            elif not self.viewer.is_editing() and mode not in (
                    NavigationMode.ZOOMING, NavigationMode.PANNING, NavigationMode.DRAGGING):
                self.open_popup_menu(state.current.pixel)
        elif event.button is MouseButton.MIDDLE:
            if pressed:
                self._start_centering(MouseButton.MIDDLE, event)
            elif state.centering_button is MouseButton.MIDDLE:
                state.centering_button = None
                if self._is_click(MouseButton.MIDDLE, event):
                    self.look_at_point(state.current.pixel)
                    dispatch.consumed = True

        state.buttons.set(event.button, pressed)

    def _process_primary_button(self, event: ButtonEvent, dispatch: Dispatch) -> None:
        state = self.state
        mode = dispatch.previous_mode
        pressed = event.pressed
        shift = state.modifiers.shift_down

        if pressed and shift and mode is not NavigationMode.SELECTION:
            self._start_centering(MouseButton.LEFT, event)
        elif not pressed and shift and state.centering_button is MouseButton.LEFT:
            state.centering_button = None
            if self._is_click(MouseButton.LEFT, event):
                self.look_at_point(state.current.pixel)
                dispatch.consumed = True
        elif pressed and mode is NavigationMode.SEEK_WAIT:
            dispatch.directed = True
            dispatch.consumed = True
            state.lock_recenter = True
            if self.seek_to_point(state.current.pixel):
                dispatch.next_mode = NavigationMode.SEEK
            else:
                dispatch.next_mode = NavigationMode.IDLE
        elif pressed and mode is NavigationMode.IDLE and not state.modifiers.ctrl_down:
            self.viewer.set_viewing(True)
            dispatch.consumed = True
            state.lock_recenter = True
        elif not pressed and mode is NavigationMode.DRAGGING:
            self.viewer.set_viewing(False)
            dispatch.consumed = True
            state.lock_recenter = True
        elif self.viewer.is_editing() and mode is NavigationMode.SPINNING:
            dispatch.consumed = True
            state.lock_recenter = True
        else:
            dispatch.consumed = self.process_click_event(event)

    def _start_centering(self, button: MouseButton, event: ButtonEvent) -> None:
        self.gesture_clock.press(button, event.timestamp)
        self.state.panning_plane = manipulators.setup_panning_plane(self.camera)
        self.state.centering_button = button
        self.state.lock_recenter = False

    def _is_click(self, button: MouseButton, event: ButtonEvent) -> bool:
        return self.gesture_clock.is_click(button, event.timestamp) and not self.state.lock_recenter

    # =====================================================
    # Pointer motion
    # =====================================================

    def _process_pointer_move(self, dispatch: Dispatch) -> None:
        self.state.lock_recenter = True
        mode = dispatch.previous_mode
        if mode is NavigationMode.ZOOMING:
            self.zoom_by_cursor()
            dispatch.consumed = True
        elif mode is NavigationMode.PANNING:
            self.pan_camera()
            dispatch.consumed = True
        elif mode is NavigationMode.DRAGGING:
            self.add_to_log(self.state.current.position, self.state.current.timestamp)
            self.spin()
            self.move_cursor_position()
            dispatch.consumed = True
