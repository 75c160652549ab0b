"""
Camera manipulators.

Plain functions over a CameraAdapter. Positions are normalized viewport
positions ((0, 0) lower-left, (1, 1) upper-right). Every function returns
True when it changed the camera and does nothing on a degenerate viewport.
"""
from __future__ import annotations

import logging
import math
import sys
from dataclasses import dataclass
from typing import Sequence, TYPE_CHECKING

import numpy as np

from qnav.core import geometry_utils
from qnav.core.navigation_config import NavigationConfig, RotationCenterMode
from qnav.viewers.camera.camera_adapter import CameraAdapter
from qnav.viewers.camera.camera_state import CameraPose, PanningPlane

if TYPE_CHECKING:
    from qnav.core.motion_log import MotionLog
    from qnav.navigation.interfaces import ScenePicker

logger = logging.getLogger(__name__)

SCREEN_CENTER = (0.5, 0.5)

# Zoom steps larger than this are treated as noise from the input device.
MAX_ZOOM_LOGFACTOR = 4.0

# The camera may not travel further than this from the world origin.
MAX_DISTANCE_FROM_ORIGIN = math.sqrt(sys.float_info.max)

# Parallel scale change per unit of 3D-motion z translation.
ORTHO_MOTION_ZOOM = 0.03


# =====================================================
# Pan
# =====================================================

def setup_panning_plane(adapter: CameraAdapter) -> PanningPlane | None:
    """Plane through the focal point facing the camera, used while panning."""
    return adapter.focal_plane()


def pan_camera(adapter: CameraAdapter, aspect_ratio: float, plane: PanningPlane | None,
               current: Sequence[float], previous: Sequence[float]) -> bool:
    """
    Move the camera so the plane point under `previous` ends up under `current`.

    :param aspect_ratio: Viewport aspect ratio
    :param plane: Panning plane set up when the interaction began
    """
    if aspect_ratio <= 0.0 or plane is None:
        logger.debug("Pan skipped: degenerate viewport or no panning plane.")
        return False
    if tuple(current) == tuple(previous):
        return False

    ray_current = adapter.view_ray(current, aspect_ratio)
    ray_previous = adapter.view_ray(previous, aspect_ratio)
    if ray_current is None or ray_previous is None:
        return False

    new_point = plane.intersect(*ray_current)
    old_point = plane.intersect(*ray_previous)
    if new_point is None or old_point is None:
        return False

    adapter.translate(old_point - new_point)
    return True


# =====================================================
# Zoom
# =====================================================

def zoom(adapter: CameraAdapter, logfactor: float) -> bool:
    """
    Zoom by exp(logfactor), keeping the focal point.

    A positive logfactor moves away from the focal point. Parallel cameras
    scale their parallel scale instead of moving.
    """
    if logfactor == 0.0:
        return False
    try:
        factor = math.exp(logfactor)
    except OverflowError:
        logger.warning(f"Zoom refused: factor exp({logfactor}) overflows.")
        return False

    if adapter.is_parallel:
        adapter.set_parallel_scale(adapter.parallel_scale * factor)
        return True

    frame = adapter.axes()
    if frame is None:
        return False
    dop = frame[2]
    new_distance = adapter.distance * factor
    new_position = np.asarray(adapter.focal_point) - dop * new_distance

    if float(np.linalg.norm(new_position)) > MAX_DISTANCE_FROM_ORIGIN:
        logger.warning("Zoom refused: camera would leave the representable range.")
        return False

    adapter.set_position(new_position)
    return True


def zoom_at_cursor(adapter: CameraAdapter, logfactor: float,
                   position: Sequence[float] = SCREEN_CENTER) -> bool:
    """
    Zoom so the focal-plane point under `position` stays under it.

    :param logfactor: Natural log of the zoom factor
    :param position: Normalized anchor position
    """
    if abs(logfactor) > MAX_ZOOM_LOGFACTOR:
        logger.debug(f"Ignoring zoom step {logfactor:.3f}.")
        return False
    if adapter.is_degenerate:
        logger.debug("Zoom skipped: degenerate viewport.")
        return False

    plane = adapter.focal_plane()
    anchored = plane is not None and tuple(position) != SCREEN_CENTER
    before = None
    if anchored:
        ray = adapter.view_ray(position)
        before = plane.intersect(*ray) if ray is not None else None

    if not zoom(adapter, logfactor):
        return False

    if before is not None:
        ray = adapter.view_ray(position)
        after = plane.intersect(*ray) if ray is not None else None
        if after is not None:
            adapter.translate(before - after)
    return True


def zoom_by_cursor(adapter: CameraAdapter, current: Sequence[float], previous: Sequence[float],
                   anchor: Sequence[float] | None, zoom_step: float, invert: bool = False) -> bool:
    """
    Zoom from a vertical pointer drag.

    :param anchor: Position the zoom is centered on, None for the viewport center
    :param zoom_step: Log zoom per viewport height of motion
    :param invert: Reverse the zoom direction
    """
    logfactor = (current[1] - previous[1]) * zoom_step
    if invert:
        logfactor = -logfactor
    return zoom_at_cursor(adapter, logfactor, SCREEN_CENTER if anchor is None else anchor)


# =====================================================
# Orbit
# =====================================================

class TrackballProjector:
    """
    Sphere-sheet trackball.

    Maps a normalized viewport position onto a sphere of `radius` centered
    in the viewport, continued by a hyperbolic sheet outside of it, in
    camera coordinates (x right, y up, z towards the viewer).
    """

    def __init__(self, radius: float = 0.8) -> None:
        if radius <= 0.0:
            raise ValueError(f"Trackball radius must be positive, got {radius}.")
        self.radius = radius

    def project(self, position: Sequence[float]) -> np.ndarray:
        x = 2.0 * position[0] - 1.0
        y = 2.0 * position[1] - 1.0
        r2 = self.radius * self.radius
        d2 = x * x + y * y
        if d2 <= r2 / 2.0:
            z = math.sqrt(r2 - d2)
        else:
            z = r2 / (2.0 * math.sqrt(d2))
        return np.array([x, y, z])

    def rotation(self, start: Sequence[float], end: Sequence[float]) -> tuple[np.ndarray, float]:
        """
        Rotation carrying the projection of `start` onto that of `end`.

        :return: (axis in camera coordinates, angle in radians); the angle is
            0.0 when the positions coincide
        """
        p0 = self.project(start)
        p1 = self.project(end)
        axis = np.cross(p0, p1)
        if np.linalg.norm(axis) < geometry_utils.EPSILON:
            return np.array([0.0, 0.0, 1.0]), 0.0
        cos_angle = float(np.dot(p0, p1) / (np.linalg.norm(p0) * np.linalg.norm(p1)))
        angle = math.acos(min(max(cos_angle, -1.0), 1.0))
        return axis / np.linalg.norm(axis), angle


def orbit(adapter: CameraAdapter, projector: TrackballProjector, previous: Sequence[float],
          current: Sequence[float], center: Sequence[float], sensitivity: float = 1.0) -> bool:
    """
    Turn the camera around `center` so the scene follows the pointer.

    :param sensitivity: Angle multiplier, only values above 1 take effect
    """
    if adapter.is_degenerate:
        return False
    axis, angle = projector.rotation(previous, current)
    if angle == 0.0:
        return False
    if sensitivity > 1.0:
        angle *= sensitivity
    world_axis = adapter.camera_to_world(axis)
    if world_axis is None:
        return False
    # Rotating the scene one way is rotating the camera the other way.
    adapter.rotate_about(center, world_axis, -angle)
    return True


@dataclass(frozen=True)
class SpinVelocity:
    """World rotation axis and angular speed of an inertial spin."""
    axis: tuple[float, float, float]
    angular_velocity: float  # rad/s


def estimate_spin(adapter: CameraAdapter, projector: TrackballProjector, log: MotionLog,
                  release_time: float, config: NavigationConfig) -> SpinVelocity | None:
    """
    Spin velocity implied by the end of a drag.

    :return: None unless the pointer was still moving at release and fast
        enough to pass the velocity threshold
    """
    if not config.spin_enabled or adapter.is_degenerate:
        return None
    span = config.spin_sample_span
    if len(log) < max(3, span):
        logger.debug(f"No spin: {len(log)} motion samples.")
        return None

    newest = log[0]
    if release_time - newest.timestamp >= config.spin_stop_time:
        logger.debug("No spin: pointer was at rest before release.")
        return None

    oldest = log[span - 1]
    dt = newest.timestamp - oldest.timestamp
    if dt <= 0.0 or dt >= config.spin_max_sample_time:
        logger.debug(f"No spin: sample time delta {dt:.3f} s out of range.")
        return None

    axis, angle = projector.rotation(oldest.position, newest.position)
    velocity = angle / dt
    if velocity <= config.spin_velocity_threshold:
        logger.debug(f"No spin: {velocity:.3f} rad/s below threshold.")
        return None

    world_axis = adapter.camera_to_world(axis)
    if world_axis is None:
        return None
    return SpinVelocity(tuple(float(v) for v in world_axis), velocity)


def apply_spin(adapter: CameraAdapter, spin: SpinVelocity, elapsed: float,
               center: Sequence[float]) -> bool:
    """Advance an inertial spin by `elapsed` seconds."""
    if elapsed <= 0.0 or adapter.is_degenerate:
        return False
    adapter.rotate_about(center, spin.axis, -spin.angular_velocity * elapsed)
    return True


def rotation_center(adapter: CameraAdapter, mode: RotationCenterMode,
                    position: Sequence[float], pixel: Sequence[int],
                    picker: ScenePicker | None = None) -> tuple[float, float, float]:
    """
    Pivot for an orbit started at `position`.

    Falls back to the focal point whenever the preferred pivot is unavailable.
    """
    focal_point = adapter.focal_point
    if mode is RotationCenterMode.WINDOW_CENTER:
        return focal_point
    if mode is RotationCenterMode.SCENE_POINT_AT_CURSOR and picker is not None:
        hit = picker.pick(tuple(pixel))
        if hit is not None:
            return tuple(float(v) for v in hit)
    return adapter.point_on_focal_plane(position) or focal_point


# =====================================================
# Recenter and seek
# =====================================================

def look_at_pose(pose: CameraPose, target: Sequence[float]) -> CameraPose:
    """Pose translated so its focal point is `target`; orientation and distance kept."""
    delta = np.asarray(target, dtype=float) - np.asarray(pose.focal_point)
    return CameraPose(
        position=tuple(float(v) for v in np.asarray(pose.position) + delta),
        focal_point=tuple(float(v) for v in target),
        view_up=pose.view_up,
    )


def seek_pose(pose: CameraPose, target: Sequence[float], distance_percent: float) -> CameraPose:
    """
    Pose looking at `target` from `distance_percent` of the current distance to it.

    The camera approaches along the line from the target to its current position.
    """
    target = np.asarray(target, dtype=float)
    offset = np.asarray(pose.position) - target
    distance = float(np.linalg.norm(offset))
    if distance < geometry_utils.EPSILON:
        return pose
    position = target + offset * (distance_percent / 100.0)
    view_up = geometry_utils.orthogonalize(pose.view_up, offset)
    return CameraPose(
        position=tuple(float(v) for v in position),
        focal_point=tuple(float(v) for v in target),
        view_up=pose.view_up if view_up is None else tuple(float(v) for v in view_up),
    )


class CameraAnimation:
    """Time-based blend between two camera poses."""

    def __init__(self, start: CameraPose, end: CameraPose, start_time: float, duration: float) -> None:
        self.start = start
        self.end = end
        self.start_time = start_time
        self.duration = duration

    def step(self, adapter: CameraAdapter, now: float) -> bool:
        """
        Move the camera to the pose for `now`.

        :return: True once the end pose is reached
        """
        t = 1.0 if self.duration <= 0.0 else (now - self.start_time) / self.duration
        adapter.set_pose(self.start.interpolate(self.end, t))
        return t >= 1.0


# =====================================================
# 3D motion controller
# =====================================================

def apply_motion3(adapter: CameraAdapter, translation: Sequence[float],
                  rotation_axis: Sequence[float], rotation_angle: float) -> bool:
    """
    Apply one 3D-mouse sample given in the camera frame.

    Translation moves position and focal point together; for parallel
    cameras the z component zooms. Rotation turns the view about the
    camera position.
    """
    if adapter.is_degenerate:
        return False
    frame = adapter.axes()
    if frame is None:
        return False
    right, up, dop = frame
    changed = False

    tx, ty, tz = (float(v) for v in translation)
    if adapter.is_parallel:
        if tz != 0.0:
            adapter.set_parallel_scale(adapter.parallel_scale * (1.0 + ORTHO_MOTION_ZOOM * tz))
            changed = True
        tz = 0.0
    delta = right * tx + up * ty - dop * tz
    if np.linalg.norm(delta) > 0.0:
        adapter.translate(delta)
        changed = True

    if rotation_angle != 0.0:
        world_axis = right * rotation_axis[0] + up * rotation_axis[1] - dop * rotation_axis[2]
        if np.linalg.norm(world_axis) > geometry_utils.EPSILON:
            adapter.rotate_about(adapter.position, world_axis, rotation_angle)
            changed = True
    return changed
