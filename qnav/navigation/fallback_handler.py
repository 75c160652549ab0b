"""Default handler for events the navigation style passes on."""
from __future__ import annotations

import logging
from typing import Callable

from qnav.core.events import NavigationEvent, WheelEvent
from qnav.core.navigation_config import NavigationConfig
from qnav.viewers.camera import manipulators
from qnav.viewers.camera.camera_adapter import CameraAdapter

logger = logging.getLogger(__name__)


class DefaultEventHandler:
    """
    Handles the wheel and passes everything else to an optional callback.

    The wheel zooms at the cursor, one `zoom_step` per notch. A forward
    step zooms in unless the zoom direction is inverted.
    """

    def __init__(self, camera: CameraAdapter, config: NavigationConfig | None = None,
                 on_unhandled: Callable[[NavigationEvent], bool] | None = None) -> None:
        self.camera = camera
        self.config = config if config is not None else NavigationConfig()
        self.on_unhandled = on_unhandled

    def forward(self, event: NavigationEvent) -> bool:
        if isinstance(event, WheelEvent):
            return self._zoom(event)
        if self.on_unhandled is not None:
            return bool(self.on_unhandled(event))
        return False

    def _zoom(self, event: WheelEvent) -> bool:
        if event.delta == 0.0:
            return False
        logfactor = -event.delta * self.config.zoom_step
        if self.config.invert_zoom:
            logfactor = -logfactor
        position = manipulators.SCREEN_CENTER
        if self.config.zoom_at_cursor and event.position is not None:
            position = self.camera.normalize_pixel_pos(event.position)
        manipulators.zoom_at_cursor(self.camera, logfactor, position)
        return True
