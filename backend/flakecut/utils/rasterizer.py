"""Rasterization utilities — polylines to pixel grid, grid to text and PNG."""

from __future__ import annotations

import io

import numpy as np
from numpy.typing import NDArray
from PIL import Image
from skimage.draw import line as draw_line

# Display colors for the paper/cut preview: paper mid-grey, cut white.
_PAPER_GREY = 102
_CUT_WHITE = 255


def _to_pixels(points: NDArray[np.float64], canvas_w: float, canvas_h: float, resolution: int) -> NDArray[np.int64]:
    cols = np.clip((points[:, 0] / canvas_w * resolution).astype(int), 0, resolution - 1)
    rows = np.clip((points[:, 1] / canvas_h * resolution).astype(int), 0, resolution - 1)
    return np.column_stack([rows, cols])


def rasterize_polylines(
    polylines: list[NDArray[np.float64]],
    canvas_w: float,
    canvas_h: float,
    resolution: int = 200,
) -> NDArray[np.int8]:
    """Draw polylines onto a resolution×resolution grid (1 = ink).

    Consecutive vertices are joined with 8-connected pixel lines, so a
    4-connected flood fill cannot leak across a drawn stroke.
    """
    grid = np.zeros((resolution, resolution), dtype=np.int8)
    for polyline in polylines:
        pts = np.asarray(polyline, dtype=np.float64).reshape(-1, 2)
        if len(pts) == 0:
            continue
        pixels = _to_pixels(pts, canvas_w, canvas_h, resolution)
        grid[pixels[0, 0], pixels[0, 1]] = 1
        for (r0, c0), (r1, c1) in zip(pixels[:-1], pixels[1:]):
            rr, cc = draw_line(int(r0), int(c0), int(r1), int(c1))
            grid[rr, cc] = 1
    return grid


def grid_to_text(grid: NDArray[np.int8], paper: str = "#", cut: str = ".") -> str:
    """One line per grid row, one character per cell (paper or cut)."""
    return "\n".join("".join(paper if cell else cut for cell in row) for row in grid)


def grid_fill_percentage(grid: NDArray[np.int8]) -> float:
    """Percentage of filled cells."""
    total = grid.size
    if total == 0:
        return 0.0
    return float(np.sum(grid) / total * 100)


def grid_to_png(grid: NDArray[np.int8]) -> bytes:
    """Encode a paper/cut grid as a greyscale PNG (paper grey, cut white)."""
    pixels = np.where(grid > 0, _PAPER_GREY, _CUT_WHITE).astype(np.uint8)
    buffer = io.BytesIO()
    Image.fromarray(pixels).save(buffer, format="PNG")
    return buffer.getvalue()
