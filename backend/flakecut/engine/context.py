"""Authoring data model: strokes, path geometry, replicas and baked paths.

Source strokes are immutable records; a stroke that grows during a drag is
replaced by a new record with the same id. Replicas and baked paths are always
derived from the current source strokes, never edited in place.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, NamedTuple

from flakecut.utils.geometry import Point

if TYPE_CHECKING:
    from flakecut.engine.transform import Transform


# Coordinate pairs consumed per repetition of each absolute path command.
COMMAND_ARITY: dict[str, int] = {"M": 1, "L": 1, "Q": 2, "C": 3, "Z": 0}


class PathCommand(NamedTuple):
    command: str
    points: tuple[Point, ...] = ()


# The one curve representation shared by source strokes, replicas and baked paths.
PathGeometry = tuple[PathCommand, ...]


class DrawMode(str, enum.Enum):
    FREEHAND = "freehand"
    LINE = "line"


@dataclass(frozen=True)
class StrokeHandle:
    """Token for the single live stroke, returned by begin_stroke."""

    stroke_id: str


@dataclass(frozen=True)
class SourceStroke:
    """A stroke drawn inside the wedge; the origin of twelve replicas."""

    id: str
    # Sampled points (simplified and snapped once finalized)
    points: tuple[Point, ...] = ()
    # Curve synthesized from points
    geometry: PathGeometry = ()
    stroke_width: float = 2.0
    mode: DrawMode = DrawMode.FREEHAND
    finalized: bool = False

    @property
    def start(self) -> Point | None:
        return self.points[0] if self.points else None

    @property
    def end(self) -> Point | None:
        return self.points[-1] if self.points else None


@dataclass(frozen=True)
class Replica:
    """One of the twelve symmetric copies of a source stroke."""

    source_stroke_id: str
    rotation: float
    mirrored: bool
    transform: Transform
    geometry: PathGeometry = ()
    stroke_width: float = 2.0

    @property
    def is_identity(self) -> bool:
        return self.rotation == 0 and not self.mirrored


@dataclass(frozen=True)
class BakedPath:
    """Replica geometry with its transform applied to every coordinate."""

    source_stroke_id: str
    geometry: PathGeometry = ()
    stroke_width: float = 2.0
    # (rotation, mirrored) of the replica this was baked from
    origin: tuple[float, bool] = field(default=(0.0, False))

    @property
    def coordinates(self) -> list[Point]:
        return [p for cmd in self.geometry for p in cmd.points]

    @property
    def endpoints(self) -> tuple[Point, Point] | None:
        coords = self.coordinates
        if not coords:
            return None
        return (coords[0], coords[-1])
