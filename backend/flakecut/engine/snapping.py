"""Endpoint snapping: pull a point onto a nearby replica end point.

Keeps cut lines continuous: a stroke that starts or ends within the snap
radius of any visible end point (including those of the rotated and mirrored
copies) is joined to it exactly.
"""

from __future__ import annotations

from typing import Sequence

import numpy as np

from flakecut.utils.geometry import Point, PointLike, as_array

SNAP_THRESHOLD = 20.0


def find_nearest_endpoint(
    point: PointLike,
    endpoints: Sequence[PointLike],
    threshold: float = SNAP_THRESHOLD,
) -> tuple[Point, float] | None:
    """Closest end point strictly within threshold, with its distance.

    Ties resolve to the first end point in iteration order.
    """
    if len(endpoints) == 0:
        return None
    arr = as_array(endpoints)
    dists = np.hypot(arr[:, 0] - point[0], arr[:, 1] - point[1])
    idx = int(np.argmin(dists))
    nearest = float(dists[idx])
    if nearest >= threshold:
        return None
    ep = endpoints[idx]
    return Point(float(ep[0]), float(ep[1])), nearest


def snap_to_nearest_endpoint(
    point: PointLike,
    endpoints: Sequence[PointLike],
    threshold: float = SNAP_THRESHOLD,
) -> Point:
    """The nearest end point if within threshold, else point unchanged."""
    found = find_nearest_endpoint(point, endpoints, threshold)
    if found is None:
        return Point(float(point[0]), float(point[1]))
    return found[0]


def is_near_endpoint(
    point: PointLike,
    endpoints: Sequence[PointLike],
    threshold: float = SNAP_THRESHOLD,
) -> bool:
    return find_nearest_endpoint(point, endpoints, threshold) is not None
