"""Leaf-node geometry helpers — points, distances, the drawing wedge. No engine imports.

The drawing surface is a 1000×1000 logical square. The wedge is the sector of
radius 400 around its center spanning [0°, 30°], where 0° points straight up
and angles increase clockwise (screen coordinates, y grows downward).
"""

from __future__ import annotations

import logging
import math
from typing import NamedTuple, Sequence

import numpy as np
from numpy.typing import NDArray

logger = logging.getLogger(__name__)

CANVAS_SIZE = 1000.0
CENTER_X = CANVAS_SIZE / 2
CENTER_Y = CANVAS_SIZE / 2
WEDGE_RADIUS = 400.0
WEDGE_SPAN_DEG = 30.0

# Boundary tolerance: points computed on a wedge edge by clipping must still
# test as inside despite float round-off.
_BOUNDARY_EPS = 1e-9

# Below this determinant the segment is treated as parallel to the span ray.
_PARALLEL_EPS = 1e-4


class Point(NamedTuple):
    x: float
    y: float


CENTER = Point(CENTER_X, CENTER_Y)

PointLike = Sequence[float]


def distance(a: PointLike, b: PointLike) -> float:
    """Euclidean distance between two points."""
    return math.hypot(b[0] - a[0], b[1] - a[1])


def wedge_angle(p: PointLike, center: PointLike = CENTER) -> float:
    """Angle of p around center in degrees: 0 = up, clockwise, in [0, 360)."""
    dx = p[0] - center[0]
    dy = p[1] - center[1]
    angle = math.degrees(math.atan2(dx, -dy))
    if angle < 0:
        angle += 360.0
    return angle


def contains_point(
    p: PointLike,
    center: PointLike = CENTER,
    radius: float = WEDGE_RADIUS,
    span_deg: float = WEDGE_SPAN_DEG,
) -> bool:
    """Boundary-inclusive wedge test: within radius and angle in [0, span]."""
    r = distance(p, center)
    if r > radius + _BOUNDARY_EPS:
        return False
    # The apex has no angle; it belongs to every sector.
    if r < _BOUNDARY_EPS:
        return True
    angle = wedge_angle(p, center)
    if angle > 360.0 - _BOUNDARY_EPS:
        angle -= 360.0
    return -_BOUNDARY_EPS <= angle <= span_deg + _BOUNDARY_EPS


def clip_segment(
    start: PointLike,
    end: PointLike,
    center: PointLike = CENTER,
    radius: float = WEDGE_RADIUS,
    span_deg: float = WEDGE_SPAN_DEG,
) -> Point:
    """Clip the segment start→end to the wedge boundary.

    start must lie inside the wedge. If end is inside it is returned unchanged,
    otherwise the crossing with the rim, the 0° ray or the span ray that is
    closest to start (smallest t in (0, 1)) is returned. When no crossing is
    found the unclipped end point is returned.
    """
    end_pt = Point(float(end[0]), float(end[1]))
    if contains_point(end_pt, center, radius, span_deg):
        return end_pt

    sx, sy = float(start[0]), float(start[1])
    cx, cy = float(center[0]), float(center[1])
    dx = end_pt.x - sx
    dy = end_pt.y - sy

    best_t = math.inf
    best: Point | None = None

    # Rim: exit root of |start + t*d - center|² = r²
    a = dx * dx + dy * dy
    b = 2 * ((sx - cx) * dx + (sy - cy) * dy)
    c = (sx - cx) ** 2 + (sy - cy) ** 2 - radius * radius
    if a > 0:
        discriminant = b * b - 4 * a * c
        if discriminant >= 0:
            t = (-b + math.sqrt(discriminant)) / (2 * a)
            if 0 < t < 1 and t < best_t:
                best_t = t
                best = Point(sx + t * dx, sy + t * dy)

    # 0° ray: the vertical half-line x = cx above the center
    if dx != 0:
        t = (cx - sx) / dx
        if 0 < t < 1 and t < best_t:
            y = sy + t * dy
            if y <= cy:
                best_t = t
                best = Point(cx, y)

    # Span ray: center + s*u, u = (sin θ, -cos θ), s > 0
    theta = math.radians(span_deg)
    ux, uy = math.sin(theta), -math.cos(theta)
    det = dx * uy - dy * ux
    if abs(det) > _PARALLEL_EPS:
        t = ((cx - sx) * uy - (cy - sy) * ux) / det
        s = ((cx - sx) * dy - (cy - sy) * dx) / det
        if 0 < t < 1 and s > 0 and t < best_t:
            best_t = t
            best = Point(sx + t * dx, sy + t * dy)

    if best is None:
        logger.debug("Wedge clip found no crossing for (%.2f, %.2f)->(%.2f, %.2f); keeping end", sx, sy, end_pt.x, end_pt.y)
        return end_pt
    return best


def perpendicular_distance(p: PointLike, a: PointLike, b: PointLike) -> float:
    """Distance from p to the line through a and b (point distance when a == b)."""
    dx = b[0] - a[0]
    dy = b[1] - a[1]
    if dx == 0 and dy == 0:
        return distance(p, a)
    numerator = abs(dy * p[0] - dx * p[1] + b[0] * a[1] - b[1] * a[0])
    return numerator / math.hypot(dx, dy)


def perpendicular_distances(
    points: NDArray[np.float64],
    a: PointLike,
    b: PointLike,
) -> NDArray[np.float64]:
    """Vectorized perpendicular_distance for an Nx2 array."""
    pts = np.asarray(points, dtype=np.float64).reshape(-1, 2)
    dx = b[0] - a[0]
    dy = b[1] - a[1]
    if dx == 0 and dy == 0:
        return np.hypot(pts[:, 0] - a[0], pts[:, 1] - a[1])
    numerator = np.abs(dy * pts[:, 0] - dx * pts[:, 1] + b[0] * a[1] - b[1] * a[0])
    return numerator / math.hypot(dx, dy)


def as_array(points: Sequence[PointLike]) -> NDArray[np.float64]:
    """Nx2 float array from a point sequence (empty input → shape (0, 2))."""
    if len(points) == 0:
        return np.empty((0, 2))
    return np.asarray([(p[0], p[1]) for p in points], dtype=np.float64)
