"""API response models."""

from __future__ import annotations

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str = "0.1.0"
    sessions: int = 0


class PointModel(BaseModel):
    x: float
    y: float


class SessionResponse(BaseModel):
    session_id: str
    mode: str
    stroke_width: float
    stroke_count: int = 0
    replica_count: int = 0
    live_stroke_id: str | None = None


class StrokeResponse(BaseModel):
    stroke_id: str
    mode: str
    finalized: bool = False
    stroke_width: float
    points: list[PointModel] = Field(default_factory=list)
    d: str = ""


class BeginStrokeResponse(BaseModel):
    accepted: bool
    stroke: StrokeResponse | None = None
    snapped: bool = False


class GeometryResponse(BaseModel):
    stroke_id: str
    d: str
    replica_count: int = 0


class UndoResponse(BaseModel):
    removed: StrokeResponse | None = None
    stroke_count: int = 0


class BakedPathModel(BaseModel):
    source_stroke_id: str
    rotation: float
    mirrored: bool
    stroke_width: float
    d: str


class BakedPathsResponse(BaseModel):
    paths: list[BakedPathModel] = Field(default_factory=list)


class EndpointsResponse(BaseModel):
    endpoints: list[PointModel] = Field(default_factory=list)


class ExportResponse(BaseModel):
    svg: str | None = None
    path_count: int = 0
    notice: str = ""


class FillResponse(BaseModel):
    resolution: int
    paper_pct: float = 0.0
    region_count: int = 0
    enclosed_area: float = 0.0
