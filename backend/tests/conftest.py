"""Shared test fixtures."""

from __future__ import annotations

import pytest

from flakecut.engine.session import DrawingSession, SnapIndicator


# Points inside the drawing wedge (center 500,500, radius 400, 0°..30° clockwise from up)
WEDGE_TOP = (520.0, 200.0)
WEDGE_MID = (540.0, 300.0)
WEDGE_RIGHT = (600.0, 200.0)
OUTSIDE_WEDGE = (300.0, 300.0)

# One stroke with its mirrored 60° replica transform, as a viewer would save it
REPLICA_SVG = '''<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 1000 1000">
  <path id="S1" d="M 550 450 L 600 480" fill="none" stroke="#FF0000" stroke-width="2"
        transform="rotate(60 500 500) scale(-1 1) translate(-1000 0)"/>
</svg>'''

TRIANGLE_SVG = '''<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 1000 1000">
  <path d="M 200 200 L 800 200 L 500 700 Z" fill="none" stroke="#FF0000"/>
</svg>'''

MIXED_SVG = '''<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 1000 1000">
  <path d="M 10 10 L 20 20"/>
  <path d="m 10 10 l 5 5"/>
  <path d="M 100 100 C 110 100, 120 110, 130 130" stroke-width="3"/>
  <rect x="0" y="0" width="10" height="10"/>
</svg>'''


class FakeTimer:
    """Stand-in for threading.Timer; fire() runs the callback even if cancelled."""

    def __init__(self, delay: float, callback) -> None:
        self.delay = delay
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True

    def fire(self) -> None:
        self.callback()


class FakeScheduler:
    def __init__(self) -> None:
        self.timers: list[FakeTimer] = []

    def __call__(self, delay: float, callback) -> FakeTimer:
        timer = FakeTimer(delay, callback)
        self.timers.append(timer)
        return timer


@pytest.fixture
def scheduler() -> FakeScheduler:
    return FakeScheduler()


@pytest.fixture
def indicator(scheduler) -> SnapIndicator:
    return SnapIndicator(scheduler)


@pytest.fixture
def session(indicator) -> DrawingSession:
    return DrawingSession(indicator=indicator)


def draw(session: DrawingSession, *points):
    """Draw one complete stroke through points and return the finalized stroke."""
    handle = session.begin_stroke(points[0])
    assert handle is not None
    for p in points[1:]:
        session.extend_stroke(handle, p)
    return session.finish_stroke(handle)
