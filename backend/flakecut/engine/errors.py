"""Engine exceptions.

Only caller mistakes surface as exceptions. Recoverable geometry conditions
(input outside the wedge, clip fallback, malformed path commands) are logged
and absorbed where they occur.
"""

from __future__ import annotations


class FlakecutError(Exception):
    """Base class for all engine errors."""


class StrokeStateError(FlakecutError):
    """A lifecycle call does not match the session's live-stroke state."""


class EmptyExportError(FlakecutError):
    """Export requested while no strokes exist."""
