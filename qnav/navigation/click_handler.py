"""Default single-click handling for presses navigation does not use."""
from __future__ import annotations

import logging
from typing import Callable

from qnav.core.events import ButtonEvent, NavigationEvent
from qnav.core.gesture_clock import GestureClock

logger = logging.getLogger(__name__)


class ClickHandler:
    """
    Consumes double presses and hands them back on release.

    A press following the previous press of the same button within the
    double-click interval is consumed and held. When that button is
    released, the held press is forwarded before the release, so a dialog
    opened by the double click further down cannot swallow the release.
    """

    def __init__(self, clock: GestureClock, forward: Callable[[NavigationEvent], bool]) -> None:
        self.clock = clock
        self.forward = forward
        self._pending: ButtonEvent | None = None
        self._last_press: ButtonEvent | None = None

    @property
    def pending(self) -> ButtonEvent | None:
        return self._pending

    def __call__(self, event: ButtonEvent) -> bool:
        """
        Process a button event.

        :return: True if the event was consumed
        """
        if event.pressed:
            last = self._last_press
            self._last_press = event
            if (last is not None and last.button is event.button
                    and event.timestamp - last.timestamp < self.clock.interval):
                logger.debug(f"Double click of {event.button.name} held back.")
                self._pending = event
                self._last_press = None
                return True
            return False

        pending = self._pending
        if pending is not None and pending.button is event.button:
            self._pending = None
            self.forward(pending)
        return False

    def reset(self) -> None:
        self._pending = None
        self._last_press = None
