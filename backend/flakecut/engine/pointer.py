"""Pointer adapter: raw down/move/up events to stroke lifecycle calls.

Supports starting a drag outside the wedge: the press arms drawing and the
stroke begins at the first sample that lands inside the wedge.
"""

from __future__ import annotations

import logging

from flakecut.engine.context import DrawMode, SourceStroke, StrokeHandle
from flakecut.engine.errors import StrokeStateError
from flakecut.engine.session import DrawingSession
from flakecut.utils.geometry import PointLike

logger = logging.getLogger(__name__)

# Middle button is reserved for panning.
MIDDLE_BUTTON = 1


class PointerAdapter:
    def __init__(self, session: DrawingSession) -> None:
        self.session = session
        self.pressed = False
        self.handle: StrokeHandle | None = None

    def pointer_down(self, point: PointLike, button: int = 0) -> StrokeHandle | None:
        if button == MIDDLE_BUTTON or self.pressed:
            return None
        # Raises while another stroke is live; the adapter then stays released.
        self.handle = self.session.begin_stroke(point)
        self.pressed = True
        return self.handle

    def pointer_move(self, point: PointLike) -> None:
        if not self.pressed:
            return
        if self.handle is None:
            # Armed outside the wedge; begin_stroke rejects until we enter it.
            try:
                self.handle = self.session.begin_stroke(point)
            except StrokeStateError:
                self.pressed = False
                raise
            return
        self.session.extend_stroke(self.handle, point)

    def pointer_up(self, point: PointLike | None = None) -> SourceStroke | None:
        """Release (or leave). Returns the finalized stroke, if one was drawn."""
        if not self.pressed:
            return None
        self.pressed = False
        handle, self.handle = self.handle, None
        if handle is None:
            return None

        live = self.session.live_stroke
        if point is not None and live is not None and live.mode is DrawMode.LINE:
            # The release position is the line's final sample.
            self.session.extend_stroke(handle, point)
        return self.session.finish_stroke(handle)

    # Leaving the surface ends the drag exactly like a release.
    pointer_leave = pointer_up
