"""Press timestamps used to tell a click from a drag."""
from __future__ import annotations

import logging

from qnav.core.events import MouseButton

logger = logging.getLogger(__name__)

DEFAULT_DOUBLE_CLICK_INTERVAL = 0.4


class GestureClock:
    """
    Tracks per-button press times against the double-actuation interval.

    A press/release pair whose elapsed time is below the interval is a click;
    anything slower is a drag. The interval is normally the platform
    double-click interval.
    """

    def __init__(self, double_click_interval: float = DEFAULT_DOUBLE_CLICK_INTERVAL) -> None:
        self._interval = DEFAULT_DOUBLE_CLICK_INTERVAL
        self.interval = double_click_interval
        self._pressed_at: dict[MouseButton, float] = {}

    @property
    def interval(self) -> float:
        """Double-actuation interval in seconds."""
        return self._interval

    @interval.setter
    def interval(self, value: float) -> None:
        value = float(value)
        if value <= 0.0:
            raise ValueError(f"Double click interval must be positive, got {value}.")
        self._interval = value

    def press(self, button: MouseButton, timestamp: float) -> None:
        """Record the press time of a button."""
        self._pressed_at[button] = timestamp

    def elapsed(self, button: MouseButton, timestamp: float) -> float | None:
        """Seconds since the recorded press of `button`, None if there was none."""
        pressed_at = self._pressed_at.get(button)
        if pressed_at is None:
            return None
        return timestamp - pressed_at

    def is_click(self, button: MouseButton, timestamp: float) -> bool:
        """True if a release at `timestamp` completes a click of `button`."""
        elapsed = self.elapsed(button, timestamp)
        if elapsed is None:
            return False
        logger.debug("%s released after %.3f s (interval %.3f s)",
                     button.name, elapsed, self._interval)
        return elapsed < self._interval

    def reset(self, button: MouseButton | None = None) -> None:
        """Forget the press time of one button, or of all of them."""
        if button is None:
            self._pressed_at.clear()
        else:
            self._pressed_at.pop(button, None)
