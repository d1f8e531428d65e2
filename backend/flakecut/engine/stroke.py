"""Stroke synthesis — raw pointer samples to curves.

Freehand strokes are simplified with Ramer–Douglas–Peucker and rendered as a
Catmull-Rom spline converted to cubic Béziers, so the curve passes through
every sample and is C¹ at interior points. Line strokes are a single segment.
"""

from __future__ import annotations

from typing import Sequence

import numpy as np
from numpy.typing import NDArray
from svgpathtools import CubicBezier, Line, Path, QuadraticBezier

from flakecut.engine.context import PathCommand, PathGeometry
from flakecut.utils.geometry import Point, PointLike, as_array, perpendicular_distances

# Catmull-Rom (uniform, tension 0.5) → Bézier: control point offset is 1/6 of
# the chord between the neighbours.
_CATMULL_ROM_DIVISOR = 6.0

# Curve flattening density for fill rasterization.
_SAMPLES_PER_SEGMENT = 12


def _to_points(points: Sequence[PointLike]) -> list[Point]:
    return [Point(float(p[0]), float(p[1])) for p in points]


def simplify_path(points: Sequence[PointLike], epsilon: float = 2.0) -> list[Point]:
    """Ramer–Douglas–Peucker simplification.

    Keeps both end points. Every dropped point lies within epsilon of the line
    through the two kept points that bracket it. One- and two-point inputs are
    returned unchanged.
    """
    pts = _to_points(points)
    if len(pts) <= 2:
        return pts

    arr = as_array(pts)
    keep = np.zeros(len(pts), dtype=bool)
    keep[0] = keep[-1] = True

    # Explicit stack instead of recursion: long drags can nest deeply.
    stack = [(0, len(pts) - 1)]
    while stack:
        first, last = stack.pop()
        if last - first < 2:
            continue
        dists = perpendicular_distances(arr[first + 1 : last], arr[first], arr[last])
        idx = int(np.argmax(dists))
        if dists[idx] > epsilon:
            split = first + 1 + idx
            keep[split] = True
            stack.append((first, split))
            stack.append((split, last))

    return [p for p, k in zip(pts, keep) if k]


def points_to_geometry(points: Sequence[PointLike]) -> PathGeometry:
    """Smooth curve through all points.

    0 points → empty; 1 point → zero-length mark; 2 points → straight segment;
    more → one cubic per consecutive pair, end tangents clamped.
    """
    pts = _to_points(points)
    if not pts:
        return ()
    first = pts[0]
    if len(pts) == 1:
        return (PathCommand("M", (first,)), PathCommand("L", (first,)))
    if len(pts) == 2:
        return line_geometry(first, pts[1])

    arr = as_array(pts)
    padded = np.vstack([arr[:1], arr, arr[-1:]])
    p0, p1, p2, p3 = padded[:-3], padded[1:-2], padded[2:-1], padded[3:]
    cp1 = p1 + (p2 - p0) / _CATMULL_ROM_DIVISOR
    cp2 = p2 - (p3 - p1) / _CATMULL_ROM_DIVISOR

    commands = [PathCommand("M", (first,))]
    for i, end in enumerate(pts[1:]):
        commands.append(
            PathCommand(
                "C",
                (
                    Point(float(cp1[i, 0]), float(cp1[i, 1])),
                    Point(float(cp2[i, 0]), float(cp2[i, 1])),
                    end,
                ),
            )
        )
    return tuple(commands)


def line_geometry(start: PointLike, end: PointLike) -> PathGeometry:
    """Straight two-point path."""
    a = Point(float(start[0]), float(start[1]))
    b = Point(float(end[0]), float(end[1]))
    return (PathCommand("M", (a,)), PathCommand("L", (b,)))


def to_svgpathtools(geometry: PathGeometry) -> list[Path]:
    """Convert geometry to svgpathtools paths, one per M-started subpath."""
    paths: list[Path] = []
    segments: list = []
    current: complex | None = None
    subpath_start: complex | None = None

    for cmd in geometry:
        pts = [complex(p.x, p.y) for p in cmd.points]
        if cmd.command == "M":
            if segments:
                paths.append(Path(*segments))
                segments = []
            current = subpath_start = pts[0]
            # Extra pairs after a moveto are implicit linetos
            for p in pts[1:]:
                segments.append(Line(current, p))
                current = p
        elif current is None:
            continue
        elif cmd.command == "L":
            for p in pts:
                segments.append(Line(current, p))
                current = p
        elif cmd.command == "Q":
            for i in range(0, len(pts) - 1, 2):
                segments.append(QuadraticBezier(current, pts[i], pts[i + 1]))
                current = pts[i + 1]
        elif cmd.command == "C":
            for i in range(0, len(pts) - 2, 3):
                segments.append(CubicBezier(current, pts[i], pts[i + 1], pts[i + 2]))
                current = pts[i + 2]
        elif cmd.command == "Z" and subpath_start is not None:
            segments.append(Line(current, subpath_start))
            current = subpath_start

    if segments:
        paths.append(Path(*segments))
    return paths


def sample_geometry(
    geometry: PathGeometry,
    samples_per_segment: int = _SAMPLES_PER_SEGMENT,
) -> list[NDArray[np.float64]]:
    """Flatten geometry into polylines (Nx2 arrays), one per subpath."""
    polylines: list[NDArray[np.float64]] = []
    ts = np.linspace(0.0, 1.0, samples_per_segment + 1)

    for path in to_svgpathtools(geometry):
        points: list[tuple[float, float]] = []
        for seg in path:
            # Skip t=0 after the first segment: it repeats the previous end
            seg_ts = ts if not points else ts[1:]
            for t in seg_ts:
                pt = seg.point(t)
                points.append((pt.real, pt.imag))
        if points:
            polylines.append(np.asarray(points, dtype=np.float64))

    return polylines
