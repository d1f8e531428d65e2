"""Tests for the pointer event adapter."""

import pytest

from flakecut.engine.context import DrawMode
from flakecut.engine.errors import StrokeStateError
from flakecut.engine.pointer import PointerAdapter
from tests.conftest import OUTSIDE_WEDGE, WEDGE_MID, WEDGE_TOP


def test_press_move_release(session):
    pointer = PointerAdapter(session)
    handle = pointer.pointer_down(WEDGE_TOP)
    assert handle is not None
    pointer.pointer_move((530, 250))
    pointer.pointer_move(WEDGE_MID)
    stroke = pointer.pointer_up()
    assert stroke.finalized
    assert stroke.points[0] == WEDGE_TOP
    assert stroke.points[-1] == WEDGE_MID
    assert session.live_stroke is None


def test_drag_started_outside_begins_on_entry(session):
    pointer = PointerAdapter(session)
    assert pointer.pointer_down(OUTSIDE_WEDGE) is None
    pointer.pointer_move((400, 300))
    assert session.live_stroke is None

    pointer.pointer_move(WEDGE_TOP)
    assert session.live_stroke is not None
    assert session.live_stroke.points == (WEDGE_TOP,)

    pointer.pointer_move(WEDGE_MID)
    stroke = pointer.pointer_up()
    assert stroke.points == (WEDGE_TOP, WEDGE_MID)


def test_middle_button_is_ignored(session):
    pointer = PointerAdapter(session)
    assert pointer.pointer_down(WEDGE_TOP, button=1) is None
    pointer.pointer_move(WEDGE_MID)
    assert pointer.pointer_up() is None
    assert session.live_stroke is None
    assert session.strokes == ()


def test_line_release_point_is_final_end(session):
    session.set_mode(DrawMode.LINE)
    pointer = PointerAdapter(session)
    pointer.pointer_down((520, 300))
    pointer.pointer_move((530, 280))
    stroke = pointer.pointer_up((540, 250))
    assert stroke.points == ((520, 300), (540, 250))


def test_leave_ends_the_drag(session):
    pointer = PointerAdapter(session)
    pointer.pointer_down(WEDGE_TOP)
    pointer.pointer_move(WEDGE_MID)
    stroke = pointer.pointer_leave()
    assert stroke is not None
    assert len(session.strokes) == 1
    assert pointer.pointer_move((550, 320)) is None
    assert session.live_stroke is None


def test_release_without_stroke(session):
    pointer = PointerAdapter(session)
    assert pointer.pointer_up() is None
    pointer.pointer_down(OUTSIDE_WEDGE)
    assert pointer.pointer_up() is None
    assert session.strokes == ()


def test_press_while_another_stroke_is_live(session):
    other = session.begin_stroke(WEDGE_MID)
    pointer = PointerAdapter(session)

    with pytest.raises(StrokeStateError):
        pointer.pointer_down(WEDGE_TOP)
    assert not pointer.pressed
    pointer.pointer_move((530, 250))
    assert pointer.pointer_up() is None

    session.finish_stroke(other)
    assert pointer.pointer_down(WEDGE_TOP) is not None
    assert pointer.pointer_up().finalized


def test_entry_while_another_stroke_is_live(session):
    pointer = PointerAdapter(session)
    pointer.pointer_down(OUTSIDE_WEDGE)
    session.begin_stroke(WEDGE_MID)

    with pytest.raises(StrokeStateError):
        pointer.pointer_move(WEDGE_TOP)
    assert not pointer.pressed
    pointer.pointer_move((530, 250))
