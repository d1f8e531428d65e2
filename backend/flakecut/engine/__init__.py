"""flakecut snowflake symmetry engine."""

from flakecut.engine.config import SnowflakeConfig
from flakecut.engine.context import BakedPath, DrawMode, PathCommand, Replica, SourceStroke, StrokeHandle
from flakecut.engine.errors import EmptyExportError, FlakecutError, StrokeStateError
from flakecut.engine.transform import Transform

__all__ = [
    "SnowflakeConfig",
    "BakedPath",
    "DrawMode",
    "PathCommand",
    "Replica",
    "SourceStroke",
    "StrokeHandle",
    "EmptyExportError",
    "FlakecutError",
    "StrokeStateError",
    "Transform",
]
