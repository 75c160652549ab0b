"""Camera value types separated from the VTK camera."""
from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from qnav.core import geometry_utils

Vec3 = tuple[float, float, float]


@dataclass(frozen=True)
class CameraPose:
    """Immutable snapshot of the camera placement."""
    position: Vec3
    focal_point: Vec3
    view_up: Vec3

    @property
    def distance(self) -> float:
        return geometry_utils.calculate_distance(self.position, self.focal_point)

    def interpolate(self, other: CameraPose, t: float) -> CameraPose:
        """
        Blend towards `other`; t = 0 gives self, t = 1 gives other.

        Position and focal point are blended linearly, the view up vector is
        blended and renormalized.
        """
        t = min(max(t, 0.0), 1.0)
        position = (1.0 - t) * np.asarray(self.position) + t * np.asarray(other.position)
        focal_point = (1.0 - t) * np.asarray(self.focal_point) + t * np.asarray(other.focal_point)
        up = (1.0 - t) * np.asarray(self.view_up) + t * np.asarray(other.view_up)
        view_up = geometry_utils.normalize_vector(up) or other.view_up
        return CameraPose(
            position=tuple(float(v) for v in position),
            focal_point=tuple(float(v) for v in focal_point),
            view_up=tuple(float(v) for v in view_up),
        )

    def __str__(self) -> str:
        p, f = self.position, self.focal_point
        return (f"Position: ({p[0]:.2f}, {p[1]:.2f}, {p[2]:.2f}), "
                f"Focal point: ({f[0]:.2f}, {f[1]:.2f}, {f[2]:.2f})")


@dataclass(frozen=True)
class PanningPlane:
    """
    Plane the pointer is projected onto while panning.

    Anchored at the focal point, facing the camera. Recomputed each time a
    pan or centering interaction starts.
    """
    point: Vec3
    normal: Vec3

    def intersect(self, origin, direction) -> np.ndarray | None:
        """Intersection with the ray, None when the ray runs parallel to the plane."""
        return geometry_utils.ray_plane_intersection(origin, direction, self.point, self.normal)
