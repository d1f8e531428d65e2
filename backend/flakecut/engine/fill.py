"""Paper/cut fill classification for display.

The baked cut lines are rasterized and the blank area is flood-filled from
the grid border: whatever the border can reach is cut away, everything
enclosed by strokes is paper. Closed regions are also reported as vector
polygons by noding the flattened strokes and polygonizing them.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Sequence

import numpy as np
from numpy.typing import NDArray
from scipy import ndimage
from shapely.geometry import LineString, Polygon
from shapely.ops import polygonize, unary_union

from flakecut.engine.context import BakedPath
from flakecut.engine.stroke import sample_geometry
from flakecut.utils.geometry import CANVAS_SIZE
from flakecut.utils.rasterizer import grid_fill_percentage, rasterize_polylines

logger = logging.getLogger(__name__)

_DEFAULT_RESOLUTION = 200


@dataclass
class FillReport:
    # 1 = paper, 0 = cut; rows are y, columns are x
    grid: NDArray[np.int8]
    resolution: int
    paper_pct: float = 0.0
    regions: list[Polygon] = field(default_factory=list)

    @property
    def region_count(self) -> int:
        return len(self.regions)

    @property
    def enclosed_area(self) -> float:
        return float(sum(p.area for p in self.regions))


def _polylines(paths: Sequence[BakedPath]) -> list[NDArray[np.float64]]:
    return [pl for path in paths for pl in sample_geometry(path.geometry)]


def classify_fill(
    paths: Sequence[BakedPath],
    canvas_size: float = CANVAS_SIZE,
    resolution: int = _DEFAULT_RESOLUTION,
) -> NDArray[np.int8]:
    """Binary paper (1) / cut (0) grid from the baked path set."""
    strokes = rasterize_polylines(_polylines(paths), canvas_size, canvas_size, resolution)
    labels, _ = ndimage.label(strokes == 0)
    border = np.concatenate([labels[0, :], labels[-1, :], labels[:, 0], labels[:, -1]])
    outside_labels = np.setdiff1d(np.unique(border), [0])
    outside = np.isin(labels, outside_labels)
    return (~outside).astype(np.int8)


def enclosed_regions(paths: Sequence[BakedPath]) -> list[Polygon]:
    """Faces closed off by the strokes, from the noded line arrangement."""
    lines = [
        LineString(pl)
        for pl in _polylines(paths)
        if len(pl) >= 2 and float(np.max(np.ptp(pl, axis=0))) > 0
    ]
    if not lines:
        return []
    return [poly for poly in polygonize(unary_union(lines)) if poly.area > 0]


def fill_report(
    paths: Sequence[BakedPath],
    canvas_size: float = CANVAS_SIZE,
    resolution: int = _DEFAULT_RESOLUTION,
) -> FillReport:
    grid = classify_fill(paths, canvas_size, resolution)
    regions = enclosed_regions(paths)
    report = FillReport(
        grid=grid,
        resolution=resolution,
        paper_pct=round(grid_fill_percentage(grid), 1),
        regions=regions,
    )
    logger.debug(
        "Fill: %.1f%% paper, %d closed regions from %d paths",
        report.paper_pct,
        report.region_count,
        len(paths),
    )
    return report
