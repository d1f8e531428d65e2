"""Authoring session — the stroke lifecycle and query API.

One session owns the stroke history, the single live stroke and the symmetry
replicator. All calls are synchronous; the only deferred work is the snap
indicator's hide timer.

Lifecycle of a stroke:
    begin_stroke → extend_stroke* → finish_stroke   (replicas live throughout)
    undo_last / clear_all                           (replicas removed)
"""

from __future__ import annotations

import itertools
import logging
import threading
from dataclasses import replace
from typing import Callable, Protocol

from flakecut.engine.config import SnowflakeConfig
from flakecut.engine.context import BakedPath, DrawMode, PathGeometry, SourceStroke, StrokeHandle
from flakecut.engine.errors import EmptyExportError, StrokeStateError
from flakecut.engine.fill import FillReport, fill_report
from flakecut.engine.snapping import snap_to_nearest_endpoint
from flakecut.engine.stroke import line_geometry, points_to_geometry, simplify_path
from flakecut.engine.symmetry import SymmetryReplicator
from flakecut.svg.serializer import serialize_snowflake
from flakecut.utils.geometry import CANVAS_SIZE, Point, PointLike, clip_segment, contains_point

logger = logging.getLogger(__name__)

# How long the snap indicator stays up after a start / end snap.
START_SNAP_MS = 200
END_SNAP_MS = 300


class Cancellable(Protocol):
    def cancel(self) -> None: ...


Scheduler = Callable[[float, Callable[[], None]], Cancellable]


def thread_scheduler(delay_s: float, callback: Callable[[], None]) -> Cancellable:
    timer = threading.Timer(delay_s, callback)
    timer.daemon = True
    timer.start()
    return timer


class SnapIndicator:
    """Transient marker shown where a snap happened.

    Each flash cancels the previous hide and tags its own timer with a
    generation number; a stale timer that fires anyway is ignored.
    """

    def __init__(self, scheduler: Scheduler | None = None) -> None:
        self._scheduler = scheduler or thread_scheduler
        self._pending: Cancellable | None = None
        self._generation = 0
        self.position: Point | None = None
        self.visible = False

    def flash(self, point: Point, duration_ms: float) -> None:
        if self._pending is not None:
            self._pending.cancel()
        self._generation += 1
        generation = self._generation
        self.position = point
        self.visible = True
        self._pending = self._scheduler(duration_ms / 1000.0, lambda: self._expire(generation))

    def hide(self) -> None:
        if self._pending is not None:
            self._pending.cancel()
            self._pending = None
        self.visible = False

    def _expire(self, generation: int) -> None:
        if generation != self._generation:
            return
        self._pending = None
        self.visible = False


class DrawingSession:
    """Stroke lifecycle, history and replica queries for one drawing."""

    def __init__(
        self,
        config: SnowflakeConfig | None = None,
        indicator: SnapIndicator | None = None,
        start_snap_ms: float = START_SNAP_MS,
        end_snap_ms: float = END_SNAP_MS,
    ) -> None:
        self.config = config or SnowflakeConfig()
        self.replicator = SymmetryReplicator(self.config)
        self.indicator = indicator or SnapIndicator()
        self.start_snap_ms = start_snap_ms
        self.end_snap_ms = end_snap_ms
        self.mode = DrawMode.FREEHAND
        self.stroke_width = self.config.stroke_width
        self._history: list[SourceStroke] = []
        self._live: SourceStroke | None = None
        self._ids = itertools.count(1)

    # ── State ──

    @property
    def strokes(self) -> tuple[SourceStroke, ...]:
        """Finalized strokes, oldest first."""
        return tuple(self._history)

    @property
    def live_stroke(self) -> SourceStroke | None:
        return self._live

    def set_mode(self, mode: DrawMode | str) -> None:
        """Applies to strokes begun after the call."""
        self.mode = DrawMode(mode)

    def set_stroke_width(self, width: float) -> None:
        if width <= 0:
            raise ValueError(f"Stroke width must be positive, got {width}")
        self.stroke_width = float(width)

    # ── Lifecycle ──

    def begin_stroke(self, point: PointLike) -> StrokeHandle | None:
        """Start a stroke at point; None when point is outside the wedge."""
        if self._live is not None:
            raise StrokeStateError(f"Stroke {self._live.id} is still being drawn")

        p = Point(float(point[0]), float(point[1]))
        if not self._in_wedge(p):
            logger.debug("Stroke start (%.1f, %.1f) outside wedge, ignored", p.x, p.y)
            return None

        start = self._snap(p, self.start_snap_ms)
        stroke = SourceStroke(
            id=f"S{next(self._ids)}",
            points=(start,),
            geometry=points_to_geometry([start]),
            stroke_width=self.stroke_width,
            mode=self.mode,
        )
        self._live = stroke
        self.replicator.add_stroke(stroke)
        logger.debug("Began %s stroke %s at (%.1f, %.1f)", stroke.mode.value, stroke.id, start.x, start.y)
        return StrokeHandle(stroke.id)

    def extend_stroke(self, handle: StrokeHandle, point: PointLike) -> PathGeometry:
        """Add a pointer sample to the live stroke and refresh its replicas.

        Line strokes keep only the start and the wedge-clipped latest sample.
        Freehand samples outside the wedge are ignored.
        """
        live = self._require_live(handle)
        p = Point(float(point[0]), float(point[1]))

        if live.mode is DrawMode.LINE:
            start = live.points[0]
            end = self._clip(start, p)
            points: tuple[Point, ...] = (start, end)
            geometry = line_geometry(start, end)
        else:
            if not self._in_wedge(p):
                return live.geometry
            points = live.points + (p,)
            geometry = points_to_geometry(points)

        updated = replace(live, points=points, geometry=geometry)
        self._live = updated
        self.replicator.update_stroke(updated)
        return geometry

    def finish_stroke(self, handle: StrokeHandle) -> SourceStroke:
        """Finalize the live stroke: simplify (freehand), snap its end, record it."""
        live = self._require_live(handle)
        points = list(live.points)

        if live.mode is DrawMode.FREEHAND:
            points = simplify_path(points, self.config.rdp_epsilon)
        if len(points) >= 2:
            points[-1] = self._snap(points[-1], self.end_snap_ms, exclude_stroke_id=live.id)

        if live.mode is DrawMode.LINE and len(points) == 2:
            geometry = line_geometry(points[0], points[1])
        else:
            geometry = points_to_geometry(points)

        final = replace(live, points=tuple(points), geometry=geometry, finalized=True)
        self.replicator.update_stroke(final)
        self._history.append(final)
        self._live = None
        logger.info("Finished stroke %s (%d points, %d strokes total)", final.id, len(final.points), len(self._history))
        return final

    def undo_last(self) -> SourceStroke | None:
        """Remove the most recent finalized stroke and its replicas."""
        if not self._history:
            return None
        stroke = self._history.pop()
        self.replicator.remove_stroke(stroke)
        logger.info("Undid stroke %s", stroke.id)
        return stroke

    def clear_all(self) -> None:
        self._history.clear()
        self._live = None
        self.replicator.clear_all()
        self.indicator.hide()
        logger.info("Cleared all strokes")

    # ── Queries ──

    def get_all_baked_paths(self) -> list[BakedPath]:
        return self.replicator.get_all_baked_paths()

    def get_all_baked_endpoints(self) -> list[Point]:
        return self.replicator.get_all_baked_endpoints()

    def export_svg(self, size_mm: float = 100.0) -> str:
        """Laser-cutter SVG of every baked replica."""
        paths = self.get_all_baked_paths()
        if not paths:
            raise EmptyExportError("Nothing to export: draw at least one stroke")
        return serialize_snowflake(paths, size_mm=size_mm, canvas_size=CANVAS_SIZE, precision=self.config.precision)

    def fill_report(self, resolution: int = 200) -> FillReport:
        return fill_report(self.get_all_baked_paths(), canvas_size=CANVAS_SIZE, resolution=resolution)

    # ── Internals ──

    def _require_live(self, handle: StrokeHandle) -> SourceStroke:
        if self._live is None or self._live.id != handle.stroke_id:
            raise StrokeStateError(f"Stroke {handle.stroke_id} is not the live stroke")
        return self._live

    def _in_wedge(self, p: Point) -> bool:
        cfg = self.config
        return contains_point(p, cfg.center, cfg.wedge_radius, cfg.wedge_span_deg)

    def _clip(self, start: Point, end: Point) -> Point:
        cfg = self.config
        return clip_segment(start, end, cfg.center, cfg.wedge_radius, cfg.wedge_span_deg)

    def _snap(self, point: Point, duration_ms: float, exclude_stroke_id: str | None = None) -> Point:
        endpoints = self.replicator.get_all_baked_endpoints(exclude_stroke_id=exclude_stroke_id)
        snapped = snap_to_nearest_endpoint(point, endpoints, self.config.snap_threshold)
        if snapped != point:
            logger.debug("Snapped (%.1f, %.1f) to (%.2f, %.2f)", point.x, point.y, snapped.x, snapped.y)
            self.indicator.flash(snapped, duration_ms)
        return snapped
