"""Tests for declarative transforms and baking."""

import math

import pytest

from flakecut.engine.context import PathCommand
from flakecut.engine.stroke import line_geometry
from flakecut.engine.transform import (
    Rotate,
    Transform,
    bake_geometry,
    mirror_vertical,
    rotation,
    round_point,
)
from flakecut.utils.geometry import Point


def test_identity_bake_is_unchanged():
    geom = line_geometry((550, 450), (600, 480))
    assert bake_geometry(geom, Transform()) == geom


def test_rotation_is_clockwise_on_screen():
    p = rotation(90, 500, 500).apply_point((500, 100))
    assert p.x == pytest.approx(900)
    assert p.y == pytest.approx(500)


def test_whole_turn_is_exact():
    p = Point(123.456, 789.012)
    assert Transform((Rotate(360, 500, 500),)).apply_point(p) == p
    assert Transform((Rotate(0, 500, 500),)).apply_point(p) == p


def test_six_sixty_degree_rotations_return_home():
    t = Transform()
    for _ in range(6):
        t = rotation(60, 500, 500).compose(t)
    p = t.apply_point((550, 450))
    assert p.x == pytest.approx(550)
    assert p.y == pytest.approx(450)


def test_mirror_reflects_across_axis():
    assert mirror_vertical(500).apply_point((550, 450)) == (450, 450)


def test_mirror_twice_is_identity():
    m = mirror_vertical(500)
    assert m.compose(m).apply_point((550, 450)) == (550, 450)


def test_compose_applies_inner_first():
    t = rotation(60, 500, 500).compose(mirror_vertical(500))
    p = t.apply_point((550, 450))
    # Mirror to (450, 450) then rotate 60° clockwise
    theta = math.radians(60)
    assert p.x == pytest.approx(500 + (-50) * math.cos(theta) - (-50) * math.sin(theta))
    assert p.y == pytest.approx(500 + (-50) * math.sin(theta) + (-50) * math.cos(theta))


def test_transform_svg_text():
    t = rotation(60, 500, 500).compose(mirror_vertical(500))
    assert t.to_svg() == "rotate(60 500 500) scale(-1 1) translate(-1000 0)"


def test_bake_preserves_command_structure():
    geom = (
        PathCommand("M", (Point(0, 0),)),
        PathCommand("C", (Point(1, 0), Point(2, 1), Point(3, 3))),
        PathCommand("Z"),
    )
    baked = bake_geometry(geom, mirror_vertical(500))
    assert [c.command for c in baked] == ["M", "C", "Z"]
    assert baked[1].points == ((999, 0), (998, 1), (997, 3))


def test_bake_skips_unsupported_and_malformed():
    geom = (
        PathCommand("M", (Point(10, 10),)),
        PathCommand("X", (Point(1, 1),)),
        PathCommand("C", (Point(1, 1), Point(2, 2))),
        PathCommand("L", (Point(20, 20),)),
    )
    baked = bake_geometry(geom, mirror_vertical(500))
    assert [c.command for c in baked] == ["M", "L"]
    assert baked[1].points == ((980, 20),)


def test_round_point_normalizes_negative_zero():
    p = round_point((-0.001, 2.3456))
    assert p == (0.0, 2.35)
    assert math.copysign(1.0, p.x) == 1.0
