"""Geometry utility functions for vector operations."""
from __future__ import annotations

import math
from typing import Sequence, Tuple

import numpy as np

Vec3 = Tuple[float, float, float]

EPSILON = 1e-12


def direction_vector(start_point: Sequence[float], end_point: Sequence[float]) -> Vec3:
    """Calculate the direction vector between two points."""
    return (
        end_point[0] - start_point[0],
        end_point[1] - start_point[1],
        end_point[2] - start_point[2],
    )


def calculate_distance(start_point: Sequence[float], end_point: Sequence[float]) -> float:
    """
    Calculate the distance between two points.

    :param start_point: Starting point (x, y, z)
    :param end_point: Ending point (x, y, z)
    :return: Distance between the two points
    """
    dx = end_point[0] - start_point[0]
    dy = end_point[1] - start_point[1]
    dz = end_point[2] - start_point[2]
    return math.sqrt(dx*dx + dy*dy + dz*dz)


def calculate_norm(vector: Sequence[float]) -> float:
    """
    Calculate the norm of a vector.

    :param vector: Vector (x, y, z)
    :return: Magnitude of the vector
    """
    return math.sqrt(vector[0] ** 2 + vector[1] ** 2 + vector[2] ** 2)


def normalize_vector(vector: Sequence[float]) -> Vec3 | None:
    """
    Normalize a 3D vector.

    :param vector: Vector (x, y, z)
    :return: Normalized vector (x, y, z), None for a zero-length vector
    """
    norm = calculate_norm(vector)
    if norm < EPSILON:
        return None
    return tuple(v / norm for v in vector)


def rotation_matrix(axis: Sequence[float], angle: float) -> np.ndarray:
    """
    Rotation matrix for a right-handed rotation about `axis`.

    :param axis: Rotation axis, need not be normalized
    :param angle: Angle in radians
    :return: 3x3 matrix, identity for a zero-length axis
    """
    a = np.asarray(axis, dtype=float)
    norm = np.linalg.norm(a)
    if norm < EPSILON:
        return np.eye(3)
    x, y, z = a / norm
    c = math.cos(angle)
    s = math.sin(angle)
    t = 1.0 - c
    return np.array([
        [t*x*x + c,   t*x*y - s*z, t*x*z + s*y],
        [t*x*y + s*z, t*y*y + c,   t*y*z - s*x],
        [t*x*z - s*y, t*y*z + s*x, t*z*z + c],
    ])


def orthogonalize(vector: Sequence[float], reference: Sequence[float]) -> np.ndarray | None:
    """
    Component of `vector` perpendicular to `reference`, normalized.

    :return: Unit vector, or None when `vector` is parallel to `reference`
    """
    v = np.asarray(vector, dtype=float)
    r = np.asarray(reference, dtype=float)
    r_norm = np.linalg.norm(r)
    if r_norm < EPSILON:
        return None
    r = r / r_norm
    perpendicular = v - np.dot(v, r) * r
    norm = np.linalg.norm(perpendicular)
    if norm < EPSILON:
        return None
    return perpendicular / norm


def ray_plane_intersection(origin: Sequence[float], direction: Sequence[float],
                           plane_point: Sequence[float],
                           plane_normal: Sequence[float]) -> np.ndarray | None:
    """
    Intersect the line `origin + t * direction` with a plane.

    :return: Intersection point, or None when the line is parallel to the plane
    """
    d = np.asarray(direction, dtype=float)
    n = np.asarray(plane_normal, dtype=float)
    denom = float(np.dot(n, d))
    if abs(denom) < EPSILON:
        return None
    o = np.asarray(origin, dtype=float)
    t = float(np.dot(n, np.asarray(plane_point, dtype=float) - o)) / denom
    return o + t * d
