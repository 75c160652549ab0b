from __future__ import annotations

import logging
from typing import Sequence

import numpy as np
import vtk

from qnav.core import geometry_utils
from qnav.viewers.camera.camera_state import CameraPose, PanningPlane

logger = logging.getLogger(__name__)


class CameraAdapter:
    """
    Reads and writes the navigation-relevant parts of a vtkCamera.

    The camera belongs to the viewer; the adapter never creates or destroys
    it. The viewport size is pushed in by the viewer and is used to
    normalize pixel positions and to build view rays.
    """

    def __init__(self, camera: vtk.vtkCamera, renderer: vtk.vtkRenderer | None = None,
                 viewport_size: tuple[int, int] = (0, 0)) -> None:
        self.camera = camera
        self.renderer = renderer
        self._viewport_size: tuple[int, int] = (0, 0)
        self.viewport_size = viewport_size

    # =====================================================
    # Viewport
    # =====================================================

    @property
    def viewport_size(self) -> tuple[int, int]:
        """Viewport size in pixels (width, height)."""
        return self._viewport_size

    @viewport_size.setter
    def viewport_size(self, size: tuple[int, int]) -> None:
        width, height = int(size[0]), int(size[1])
        self._viewport_size = (max(width, 0), max(height, 0))

    @property
    def aspect_ratio(self) -> float:
        """Width over height, 0.0 for an empty viewport."""
        width, height = self._viewport_size
        if width <= 0 or height <= 0:
            return 0.0
        return width / height

    @property
    def is_degenerate(self) -> bool:
        """True when the viewport has no area; manipulators do nothing then."""
        return self.aspect_ratio <= 0.0

    def normalize_pixel_pos(self, pixel: Sequence[float]) -> tuple[float, float]:
        """Map a pixel position to the unit square of the viewport."""
        width, height = self._viewport_size
        return (
            float(pixel[0]) / max(width - 1, 1),
            float(pixel[1]) / max(height - 1, 1),
        )

    # =====================================================
    # Camera reads
    # =====================================================

    @property
    def position(self) -> tuple[float, float, float]:
        return tuple(self.camera.GetPosition())

    @property
    def focal_point(self) -> tuple[float, float, float]:
        return tuple(self.camera.GetFocalPoint())

    @property
    def view_up(self) -> tuple[float, float, float]:
        return tuple(self.camera.GetViewUp())

    @property
    def distance(self) -> float:
        """Distance between the camera position and the focal point."""
        return geometry_utils.calculate_distance(self.position, self.focal_point)

    @property
    def is_parallel(self) -> bool:
        return bool(self.camera.GetParallelProjection())

    @property
    def parallel_scale(self) -> float:
        return float(self.camera.GetParallelScale())

    def get_pose(self) -> CameraPose:
        return CameraPose(self.position, self.focal_point, self.view_up)

    def axes(self) -> tuple[np.ndarray, np.ndarray, np.ndarray] | None:
        """
        Orthonormal camera frame (right, up, direction of projection).

        :return: None if the camera position and focal point coincide
        """
        direction = geometry_utils.normalize_vector(
            geometry_utils.direction_vector(self.position, self.focal_point))
        if direction is None:
            logger.warning("Camera direction vector has zero length.")
            return None
        dop = np.asarray(direction)
        up = geometry_utils.orthogonalize(self.view_up, dop)
        if up is None:
            logger.warning("Camera view up is parallel to the view direction.")
            return None
        right = np.cross(dop, up)
        return right, up, dop

    def camera_to_world(self, vector: Sequence[float]) -> np.ndarray | None:
        """Express a camera-frame vector (x right, y up, z back) in world coordinates."""
        frame = self.axes()
        if frame is None:
            return None
        right, up, dop = frame
        return right * vector[0] + up * vector[1] - dop * vector[2]

    def view_ray(self, position: Sequence[float],
                 aspect_ratio: float | None = None) -> tuple[np.ndarray, np.ndarray] | None:
        """
        Ray through a normalized viewport position.

        :param position: Normalized position, (0, 0) lower-left, (1, 1) upper-right
        :param aspect_ratio: Viewport aspect ratio, defaults to the adapter's one
        :return: (origin, direction) or None for a degenerate viewport or camera
        """
        aspect = self.aspect_ratio if aspect_ratio is None else aspect_ratio
        if aspect <= 0.0:
            return None
        frame = self.axes()
        if frame is None:
            return None
        right, up, dop = frame
        sx = 2.0 * position[0] - 1.0
        sy = 2.0 * position[1] - 1.0
        origin = np.asarray(self.position, dtype=float)
        if self.is_parallel:
            half_height = self.parallel_scale
            origin = origin + right * (sx * half_height * aspect) + up * (sy * half_height)
            return origin, dop
        half_height = np.tan(np.radians(self.camera.GetViewAngle()) / 2.0)
        direction = dop + right * (sx * half_height * aspect) + up * (sy * half_height)
        return origin, direction

    def focal_plane(self) -> PanningPlane | None:
        """Plane through the focal point facing the camera."""
        frame = self.axes()
        if frame is None:
            return None
        return PanningPlane(point=self.focal_point, normal=tuple(-frame[2]))

    def point_on_focal_plane(self, position: Sequence[float]) -> tuple[float, float, float] | None:
        """World point on the focal plane under a normalized viewport position."""
        plane = self.focal_plane()
        ray = self.view_ray(position)
        if plane is None or ray is None:
            return None
        point = plane.intersect(*ray)
        return None if point is None else tuple(float(v) for v in point)

    # =====================================================
    # Camera writes
    # =====================================================

    def set_pose(self, pose: CameraPose) -> None:
        self._apply(pose.position, pose.focal_point, pose.view_up)

    def set_position(self, position: Sequence[float]) -> None:
        """Move the camera keeping the focal point."""
        self.camera.SetPosition(*(float(v) for v in position))
        self.camera.OrthogonalizeViewUp()
        self._changed()

    def set_parallel_scale(self, scale: float) -> None:
        if scale <= 0.0:
            logger.warning(f"Ignoring non-positive parallel scale {scale}.")
            return
        self.camera.SetParallelScale(scale)
        self._changed()

    def translate(self, delta: Sequence[float]) -> None:
        """Move position and focal point together."""
        d = np.asarray(delta, dtype=float)
        self._apply(np.asarray(self.position) + d, np.asarray(self.focal_point) + d, self.view_up)

    def rotate_about(self, center: Sequence[float], axis: Sequence[float], angle: float) -> None:
        """Rigidly rotate the camera about the line through `center` along `axis`."""
        rotation = geometry_utils.rotation_matrix(axis, angle)
        c = np.asarray(center, dtype=float)
        position = c + rotation @ (np.asarray(self.position) - c)
        focal_point = c + rotation @ (np.asarray(self.focal_point) - c)
        view_up = rotation @ np.asarray(self.view_up)
        self._apply(position, focal_point, view_up)

    def _apply(self, position, focal_point, view_up) -> None:
        position = tuple(float(v) for v in position)
        focal_point = tuple(float(v) for v in focal_point)
        # vtkCamera recomputes the distance on every setter; never let the
        # position and focal point coincide in between.
        if np.allclose(position, self.focal_point):
            self.camera.SetFocalPoint(*focal_point)
            self.camera.SetPosition(*position)
        else:
            self.camera.SetPosition(*position)
            self.camera.SetFocalPoint(*focal_point)
        self.camera.SetViewUp(*(float(v) for v in view_up))
        self.camera.OrthogonalizeViewUp()
        self._changed()

    def _changed(self) -> None:
        if self.renderer is not None:
            self.renderer.ResetCameraClippingRange()
