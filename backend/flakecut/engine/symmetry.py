"""Twelve-fold symmetry replication.

Each source stroke drawn in the 30° wedge is mirrored across the wedge's 0°
edge (x = 500) to form a 60° unit, and both copies are rotated by the six
multiples of 60° around the center. The twelve replicas of a stroke are always
rebuilt together; there is never a partially updated set.
"""

from __future__ import annotations

import logging

from flakecut.engine.config import SnowflakeConfig
from flakecut.engine.context import BakedPath, Replica, SourceStroke
from flakecut.engine.transform import Transform, bake_geometry, mirror_vertical, rotation, round_point
from flakecut.utils.geometry import Point

logger = logging.getLogger(__name__)


class SymmetryReplicator:
    """Owns the source-stroke → replicas mapping."""

    def __init__(self, config: SnowflakeConfig | None = None) -> None:
        self.config = config or SnowflakeConfig()
        # Insertion-ordered: replica iteration follows stroke creation order.
        self._replicas: dict[str, list[Replica]] = {}

    def __len__(self) -> int:
        return sum(len(r) for r in self._replicas.values())

    def __contains__(self, stroke_id: object) -> bool:
        return stroke_id in self._replicas

    @property
    def stroke_ids(self) -> list[str]:
        return list(self._replicas)

    def transforms(self) -> list[tuple[float, bool, Transform]]:
        """The twelve (rotation, mirrored, transform) triples, rotate outermost."""
        cx, cy = self.config.center
        mirror = mirror_vertical(self.config.mirror_axis_x)
        result: list[tuple[float, bool, Transform]] = []
        for angle in self.config.rotation_angles:
            rotate = rotation(angle, cx, cy)
            result.append((angle, False, rotate))
            result.append((angle, True, rotate.compose(mirror)))
        return result

    def add_stroke(self, stroke: SourceStroke) -> list[Replica]:
        """Build and register the replicas of stroke, replacing any existing set."""
        replicas = [
            Replica(
                source_stroke_id=stroke.id,
                rotation=angle,
                mirrored=mirrored,
                transform=transform,
                geometry=stroke.geometry,
                stroke_width=stroke.stroke_width,
            )
            for angle, mirrored, transform in self.transforms()
        ]
        if stroke.id in self._replicas:
            logger.debug("Replacing replicas for stroke %s", stroke.id)
        self._replicas[stroke.id] = replicas
        return replicas

    def update_stroke(self, stroke: SourceStroke) -> list[Replica]:
        """Drop the stroke's replicas and rebuild them from its current geometry."""
        self._replicas.pop(stroke.id, None)
        return self.add_stroke(stroke)

    def remove_stroke(self, stroke: SourceStroke | str) -> bool:
        stroke_id = stroke if isinstance(stroke, str) else stroke.id
        removed = self._replicas.pop(stroke_id, None)
        return removed is not None

    def clear_all(self) -> None:
        self._replicas.clear()

    def replicas(self, stroke_id: str | None = None) -> list[Replica]:
        if stroke_id is not None:
            return list(self._replicas.get(stroke_id, []))
        return [r for group in self._replicas.values() for r in group]

    def get_all_baked_paths(self) -> list[BakedPath]:
        """Every replica with its transform baked in, recomputed on each call."""
        return [
            BakedPath(
                source_stroke_id=r.source_stroke_id,
                geometry=bake_geometry(r.geometry, r.transform),
                stroke_width=r.stroke_width,
                origin=(r.rotation, r.mirrored),
            )
            for r in self.replicas()
        ]

    def get_all_baked_endpoints(self, exclude_stroke_id: str | None = None) -> list[Point]:
        """First and last baked coordinate of every replica, rounded like the export.

        exclude_stroke_id skips all replicas of that stroke so a stroke being
        finished is never snapped onto its own copies.
        """
        precision = self.config.precision
        endpoints: list[Point] = []
        for baked in self.get_all_baked_paths():
            if baked.source_stroke_id == exclude_stroke_id:
                continue
            ends = baked.endpoints
            if ends is None:
                continue
            endpoints.append(round_point(ends[0], precision))
            endpoints.append(round_point(ends[1], precision))
        return endpoints
