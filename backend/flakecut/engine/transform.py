"""Declarative transforms and transform baking.

A Transform is an ordered list of primitive operations written outermost
first, exactly like an SVG ``transform`` attribute: ``rotate(60 500 500)
scale(-1 1) translate(-1000 0)``. Coordinates are transformed right-to-left,
so the operation nearest the path data is applied first. Baking applies the
list to every coordinate pair of a path and drops the transform, producing
geometry that renders identically with no transform attached.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Union

import numpy as np
from numpy.typing import NDArray

from flakecut.engine.context import COMMAND_ARITY, PathCommand, PathGeometry
from flakecut.utils.geometry import Point, PointLike, as_array

logger = logging.getLogger(__name__)


def _fmt(value: float) -> str:
    return f"{value:g}"


@dataclass(frozen=True)
class Rotate:
    """Clockwise-on-screen rotation by angle degrees around (cx, cy)."""

    angle: float
    cx: float = 0.0
    cy: float = 0.0

    def apply(self, coords: NDArray[np.float64]) -> NDArray[np.float64]:
        # Whole turns are exact no-ops rather than cos/sin round-off.
        if self.angle % 360.0 == 0:
            return coords.copy()
        theta = math.radians(self.angle)
        cos_t, sin_t = math.cos(theta), math.sin(theta)
        dx = coords[:, 0] - self.cx
        dy = coords[:, 1] - self.cy
        return np.column_stack(
            [self.cx + dx * cos_t - dy * sin_t, self.cy + dx * sin_t + dy * cos_t]
        )

    def to_svg(self) -> str:
        return f"rotate({_fmt(self.angle)} {_fmt(self.cx)} {_fmt(self.cy)})"


@dataclass(frozen=True)
class Scale:
    sx: float
    sy: float = 1.0

    def apply(self, coords: NDArray[np.float64]) -> NDArray[np.float64]:
        return coords * np.array([self.sx, self.sy])

    def to_svg(self) -> str:
        return f"scale({_fmt(self.sx)} {_fmt(self.sy)})"


@dataclass(frozen=True)
class Translate:
    dx: float
    dy: float = 0.0

    def apply(self, coords: NDArray[np.float64]) -> NDArray[np.float64]:
        return coords + np.array([self.dx, self.dy])

    def to_svg(self) -> str:
        return f"translate({_fmt(self.dx)} {_fmt(self.dy)})"


TransformOp = Union[Rotate, Scale, Translate]


@dataclass(frozen=True)
class Transform:
    """Ordered primitive operations, outermost first."""

    ops: tuple[TransformOp, ...] = ()

    @property
    def is_identity(self) -> bool:
        return not self.ops

    def compose(self, inner: Transform) -> Transform:
        """self ∘ inner: inner is applied to coordinates first."""
        return Transform(self.ops + inner.ops)

    def apply(self, coords: NDArray[np.float64]) -> NDArray[np.float64]:
        """Transform an Nx2 array, innermost operation first."""
        out = np.asarray(coords, dtype=np.float64).reshape(-1, 2)
        for op in reversed(self.ops):
            out = op.apply(out)
        return out

    def apply_point(self, p: PointLike) -> Point:
        x, y = self.apply(np.array([[p[0], p[1]]], dtype=np.float64))[0]
        return Point(float(x), float(y))

    def to_svg(self) -> str:
        return " ".join(op.to_svg() for op in self.ops)


def rotation(angle: float, cx: float, cy: float) -> Transform:
    return Transform((Rotate(angle, cx, cy),))


def mirror_vertical(axis_x: float) -> Transform:
    """Reflection across the vertical line x = axis_x: x' = 2·axis_x − x."""
    return Transform((Scale(-1.0, 1.0), Translate(-2.0 * axis_x, 0.0)))


def bake_geometry(geometry: PathGeometry, transform: Transform) -> PathGeometry:
    """Apply transform to every coordinate pair, keeping command structure.

    Commands the baker cannot interpret (unknown letter, or a coordinate count
    that is not a whole multiple of the command's arity) are skipped; the
    commands before them are kept.
    """
    baked: list[PathCommand] = []
    for cmd in geometry:
        arity = COMMAND_ARITY.get(cmd.command)
        if arity is None:
            logger.warning("Skipping unsupported path command %r", cmd.command)
            continue
        n = len(cmd.points)
        if (arity == 0 and n) or (arity and (n == 0 or n % arity)):
            logger.warning("Skipping malformed %s command with %d coordinate pairs", cmd.command, n)
            continue
        if n == 0 or transform.is_identity:
            baked.append(cmd)
            continue
        coords = transform.apply(as_array(cmd.points))
        baked.append(
            PathCommand(cmd.command, tuple(Point(float(x), float(y)) for x, y in coords))
        )
    return tuple(baked)


def round_point(p: PointLike, precision: int = 2) -> Point:
    """Round to precision digits; normalizes -0.0 to 0.0."""
    return Point(round(float(p[0]), precision) + 0.0, round(float(p[1]), precision) + 0.0)
