"""API request models."""

from __future__ import annotations

from pydantic import BaseModel, Field

from flakecut.engine.context import DrawMode


class PointRequest(BaseModel):
    x: float = Field(..., description="x in drawing-surface units (canvas is 1000×1000)")
    y: float = Field(..., description="y in drawing-surface units, growing downward")


class ModeRequest(BaseModel):
    mode: DrawMode = Field(..., description="freehand or line")
    stroke_width: float | None = Field(default=None, gt=0, description="Width for new strokes")
