"""SVG path-data and transform parsing — facade over svgpathtools.

Parses once into PathGeometry / Transform so nothing downstream has to
pattern-match strings again. Relative, shorthand and arc commands are
resolved to absolute M/L/Q/C/Z. Malformed pieces are skipped and logged,
never fatal.
"""

from __future__ import annotations

import logging
import re

import numpy as np
from svgpathtools import Arc, CubicBezier, Line, Path, QuadraticBezier, parse_path

from flakecut.engine.context import BakedPath, PathCommand, PathGeometry
from flakecut.engine.transform import Rotate, Scale, Transform, TransformOp, Translate, bake_geometry
from flakecut.utils.geometry import Point

logger = logging.getLogger(__name__)

# One path command letter with its arguments; exponent markers (e/E) are not commands.
_COMMAND_CHUNK_RE = re.compile(r"[MmZzLlHhVvCcSsQqTtAa][^MmZzLlHhVvCcSsQqTtAa]*")
_NUMBER_RE = re.compile(r"[-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?")
_TRANSFORM_RE = re.compile(r"([A-Za-z]+)\s*\(([^)]*)\)")
_PATH_TAG_RE = re.compile(r"<path\b[^>]*?/?>", re.IGNORECASE)
_ATTR_RE = re.compile(r'(\w[\w-]*)\s*=\s*"([^"]*)"')

# Stroke width assumed for paths that do not declare one.
_DEFAULT_STROKE_WIDTH = 1.0

# Line segments per elliptical arc when flattening.
_ARC_SAMPLES = 16

# Segment ends closer than this are the same point.
_JOIN_EPS = 1e-9


def _pt(z: complex) -> Point:
    return Point(float(z.real), float(z.imag))


def _parse_segments(d: str) -> Path:
    """parse_path, retried command by command when the whole string fails.

    A command that cannot be parsed after the commands kept so far is
    dropped; relative commands after it still resolve against the last good
    position.
    """
    try:
        return parse_path(d)
    except (ValueError, IndexError) as e:
        logger.warning("Path data failed to parse (%s); retrying per command", e)

    accepted = ""
    for chunk in _COMMAND_CHUNK_RE.findall(d):
        candidate = f"{accepted} {chunk}"
        try:
            parse_path(candidate)
        except (ValueError, IndexError):
            logger.warning("Skipping malformed path command %r", chunk.strip())
            continue
        accepted = candidate
    return parse_path(accepted) if accepted.strip() else Path()


def _split_subpaths(path: Path) -> list[list]:
    """Group segments into continuous runs; a jump starts a new subpath."""
    subpaths: list[list] = []
    for seg in path:
        if not subpaths or abs(seg.start - subpaths[-1][-1].end) > _JOIN_EPS:
            subpaths.append([])
        subpaths[-1].append(seg)
    return subpaths


def _subpath_commands(segments: list) -> list[PathCommand]:
    start = segments[0].start
    closed = (
        len(segments) > 1
        and isinstance(segments[-1], Line)
        and abs(segments[-1].end - start) <= _JOIN_EPS
    )
    # A closing line back to the start is written as Z
    body = segments[:-1] if closed else segments

    commands = [PathCommand("M", (_pt(start),))]
    for seg in body:
        if isinstance(seg, Line):
            commands.append(PathCommand("L", (_pt(seg.end),)))
        elif isinstance(seg, QuadraticBezier):
            commands.append(PathCommand("Q", (_pt(seg.control), _pt(seg.end))))
        elif isinstance(seg, CubicBezier):
            commands.append(PathCommand("C", (_pt(seg.control1), _pt(seg.control2), _pt(seg.end))))
        elif isinstance(seg, Arc):
            ts = np.linspace(0.0, 1.0, _ARC_SAMPLES + 1)[1:]
            commands.append(PathCommand("L", tuple(_pt(seg.point(t)) for t in ts)))
        else:
            logger.warning("Unknown segment type %s, replacing with a line", type(seg).__name__)
            commands.append(PathCommand("L", (_pt(seg.end),)))
    if closed:
        commands.append(PathCommand("Z"))
    return commands


def parse_path_data(d: str) -> PathGeometry:
    """Parse SVG path data into absolute PathGeometry.

    Each continuous run of segments becomes an M-started subpath; a run that
    ends with a line back to its start is closed with Z. Arcs are flattened
    to line segments.
    """
    commands: list[PathCommand] = []
    for segments in _split_subpaths(_parse_segments(d)):
        commands.extend(_subpath_commands(segments))
    return tuple(commands)


def parse_transform(attr: str) -> Transform:
    """Parse an SVG transform attribute (rotate / scale / translate)."""
    ops: list[TransformOp] = []
    for match in _TRANSFORM_RE.finditer(attr or ""):
        name = match.group(1).lower()
        args = [float(n) for n in _NUMBER_RE.findall(match.group(2))]

        if name == "rotate" and len(args) in (1, 3):
            ops.append(Rotate(*args) if len(args) == 3 else Rotate(args[0]))
        elif name == "scale" and len(args) in (1, 2):
            ops.append(Scale(args[0], args[1] if len(args) == 2 else args[0]))
        elif name == "translate" and len(args) in (1, 2):
            ops.append(Translate(args[0], args[1] if len(args) == 2 else 0.0))
        else:
            logger.warning("Ignoring unsupported transform %s(%s)", name, match.group(2).strip())
    return Transform(tuple(ops))


def _extract_attrs(tag_text: str) -> dict[str, str]:
    return {m.group(1): m.group(2) for m in _ATTR_RE.finditer(tag_text)}


def parse_svg_paths(svg_text: str) -> list[BakedPath]:
    """Read every <path> of an SVG document with its transform baked in."""
    paths: list[BakedPath] = []
    for i, match in enumerate(_PATH_TAG_RE.finditer(svg_text)):
        attrs = _extract_attrs(match.group(0))
        d = attrs.get("d")
        if not d:
            continue
        geometry = bake_geometry(parse_path_data(d), parse_transform(attrs.get("transform", "")))
        try:
            width = float(attrs.get("stroke-width", _DEFAULT_STROKE_WIDTH))
        except ValueError:
            width = _DEFAULT_STROKE_WIDTH
        paths.append(BakedPath(source_stroke_id=attrs.get("id", f"P{i + 1}"), geometry=geometry, stroke_width=width))

    logger.info("Parsed %d paths from SVG", len(paths))
    return paths
