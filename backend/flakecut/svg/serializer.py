"""Write path data and the laser-cutter export document."""

from __future__ import annotations

from typing import Sequence

from flakecut.engine.context import BakedPath, PathGeometry
from flakecut.utils.geometry import CANVAS_SIZE

# Laser cutters treat hairline red strokes as cut lines.
CUT_STROKE = "#FF0000"
CUT_LINE_MM = 0.1


def _num(value: float, precision: int | None) -> str:
    if precision is None:
        return f"{value:.10g}"
    return f"{round(value, precision) + 0.0:.{precision}f}"


def format_path_data(geometry: PathGeometry, precision: int | None = 2) -> str:
    """Render geometry as path data, e.g. ``M 550.00 450.00 L 600.00 480.00``.

    precision=None keeps full float precision (for live display).
    """
    parts: list[str] = []
    for cmd in geometry:
        coords = ", ".join(f"{_num(p.x, precision)} {_num(p.y, precision)}" for p in cmd.points)
        parts.append(f"{cmd.command} {coords}" if coords else cmd.command)
    return " ".join(parts)


def cut_stroke_width(size_mm: float, canvas_size: float = CANVAS_SIZE) -> float:
    """0.1 mm expressed in viewBox units for a document size_mm wide."""
    return CUT_LINE_MM * canvas_size / size_mm


def serialize_snowflake(
    baked_paths: Sequence[BakedPath],
    size_mm: float = 100.0,
    canvas_size: float = CANVAS_SIZE,
    precision: int = 2,
) -> str:
    """Export document: one transform-free red hairline path per baked replica."""
    width = f"{cut_stroke_width(size_mm, canvas_size):g}"
    size = f"{size_mm:g}"
    canvas = f"{canvas_size:g}"
    lines = [
        '<?xml version="1.0" encoding="UTF-8"?>',
        f'<svg xmlns="http://www.w3.org/2000/svg" width="{size}mm" height="{size}mm"'
        f' viewBox="0 0 {canvas} {canvas}">',
    ]

    for path in baked_paths:
        d = format_path_data(path.geometry, precision)
        if not d:
            continue
        lines.append(f'  <path d="{d}" fill="none" stroke="{CUT_STROKE}" stroke-width="{width}" />')

    lines.append("</svg>")
    return "\n".join(lines)
