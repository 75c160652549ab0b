from __future__ import annotations

import logging
from typing import Sequence

import vtk

logger = logging.getLogger(__name__)


class VtkScenePicker:
    """Scene picker backed by a vtkCellPicker on one renderer."""

    def __init__(self, renderer: vtk.vtkRenderer, tolerance: float = 0.005) -> None:
        self.renderer = renderer
        self.picker = vtk.vtkCellPicker()
        self.picker.SetTolerance(tolerance)

    def pick(self, screen_pos: Sequence[int]) -> tuple[float, float, float] | None:
        """
        Pick the nearest cell under a display position.

        :param screen_pos: Display coordinates (origin lower-left)
        :return: World position of the hit, None when nothing was hit
        """
        x, y = int(screen_pos[0]), int(screen_pos[1])
        if not self.picker.Pick(x, y, 0, self.renderer) or self.picker.GetCellId() < 0:
            logger.debug("Nothing picked at (%d, %d)", x, y)
            return None
        world_pt = tuple(self.picker.GetPickPosition())
        logger.debug("Picked screen (%d, %d) -> world %s", x, y, world_pt)
        return world_pt


def render_window_size(render_window: vtk.vtkRenderWindow | None) -> tuple[int, int]:
    """Size of the render window in pixels, (0, 0) before it is mapped."""
    if render_window is None:
        return 0, 0
    width, height = render_window.GetSize()
    return int(width), int(height)
