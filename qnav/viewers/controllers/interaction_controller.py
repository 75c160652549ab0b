"""Interaction controller - holds the current navigation mode."""
from __future__ import annotations

import logging
from enum import Enum, auto
from typing import Callable


logger = logging.getLogger(__name__)


class NavigationMode(Enum):
    """Mutually exclusive navigation modes."""
    IDLE = auto()
    SELECTION = auto()   # rubber band / pick selection in progress
    DRAGGING = auto()    # trackball orbit
    PANNING = auto()
    ZOOMING = auto()
    SPINNING = auto()    # inertial orbit after a fast drag
    SEEK_WAIT = auto()   # waiting for the seek target click
    SEEK = auto()        # seek animation running


class InteractionController:
    """
    Central holder of the navigation mode.

    Exactly one mode is current. Changing it runs, in order, the exit
    callbacks of the old mode, the enter callbacks of the new mode and
    then the mode changed callbacks. Callback errors are logged and never
    interrupt the change.

    Usage:
        controller = InteractionController()
        controller.add_mode_changed_callback(on_mode_changed)
        controller.set_mode(NavigationMode.PANNING)
    """

    def __init__(self, initial_mode: NavigationMode = NavigationMode.IDLE):
        self._current_mode: NavigationMode = initial_mode

        self._on_mode_changed_callbacks: list[Callable[[NavigationMode, NavigationMode], None]] = []
        self._on_mode_enter_callbacks: dict[NavigationMode, list[Callable[[], None]]] = {}
        self._on_mode_exit_callbacks: dict[NavigationMode, list[Callable[[], None]]] = {}

    @property
    def current_mode(self) -> NavigationMode:
        """Get current navigation mode."""
        return self._current_mode

    def set_mode(self, mode: NavigationMode) -> bool:
        """
        Change the navigation mode.

        :param mode: New navigation mode
        :return: True if the mode changed
        """
        if mode == self._current_mode:
            return False

        old_mode = self._current_mode

        self._trigger_mode_exit(old_mode)
        self._current_mode = mode

        logger.info(f"Navigation mode changed from {old_mode.name} -> {mode.name}")

        self._trigger_mode_enter(mode)
        self._notify_mode_changed(old_mode, mode)
        return True

    def add_mode_changed_callback(
            self,
            callback: Callable[[NavigationMode, NavigationMode], None]
    ) -> None:
        """
        Add a callback for any navigation mode change.

        Callback signature: callback(old_mode: NavigationMode, new_mode: NavigationMode) -> None
        :param callback: Callback function
        """
        self._on_mode_changed_callbacks.append(callback)

    def add_mode_enter_callback(
            self, mode: NavigationMode,
            callback: Callable[[], None]
    ) -> None:
        """
        Add a callback for entering a specific navigation mode.
        :param mode: Mode to watch
        :param callback: Callback function
        """
        self._on_mode_enter_callbacks.setdefault(mode, []).append(callback)

    def add_mode_exit_callback(
            self,
            mode: NavigationMode,
            callback: Callable[[], None]
    ) -> None:
        """
        Add a callback for exiting a specific navigation mode.
        :param mode: Mode to watch
        :param callback: Callback function
        """
        self._on_mode_exit_callbacks.setdefault(mode, []).append(callback)

    def reset(self) -> None:
        """Return to idle."""
        self.set_mode(NavigationMode.IDLE)
        logger.debug("Interaction controller reset")

    def _notify_mode_changed(self,
                             old_mode: NavigationMode,
                             new_mode: NavigationMode) -> None:
        """Notify callbacks of mode changes."""
        for callback in self._on_mode_changed_callbacks:
            try:
                callback(old_mode, new_mode)
            except Exception as e:
                logging.exception(f"Error in mode changed callback: {e}")

    def _trigger_mode_enter(self, mode: NavigationMode) -> None:
        """Trigger callbacks for entering a specific mode."""
        for callback in self._on_mode_enter_callbacks.get(mode, []):
            try:
                callback()
            except Exception as e:
                logging.exception(f"Error in mode enter callback: {e}")

    def _trigger_mode_exit(self, mode: NavigationMode) -> None:
        """Trigger callbacks for exiting a specific mode."""
        for callback in self._on_mode_exit_callbacks.get(mode, []):
            try:
                callback()
            except Exception as e:
                logging.exception(f"Error in mode exit callback: {e}")
