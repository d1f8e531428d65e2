"""Read-only views of a session: baked paths, endpoints, SVG export, fill preview."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from fastapi.responses import PlainTextResponse, Response

from flakecut.config import Settings
from flakecut.dependencies import get_session, get_settings
from flakecut.engine.errors import EmptyExportError
from flakecut.engine.session import DrawingSession
from flakecut.models.responses import (
    BakedPathModel,
    BakedPathsResponse,
    EndpointsResponse,
    ExportResponse,
    FillResponse,
    PointModel,
)
from flakecut.svg.serializer import format_path_data
from flakecut.utils.rasterizer import grid_to_png, grid_to_text

router = APIRouter(prefix="/sessions/{session_id}")


@router.get("/paths", response_model=BakedPathsResponse)
async def baked_paths(session: DrawingSession = Depends(get_session)) -> BakedPathsResponse:
    precision = session.config.precision
    return BakedPathsResponse(
        paths=[
            BakedPathModel(
                source_stroke_id=p.source_stroke_id,
                rotation=p.origin[0],
                mirrored=p.origin[1],
                stroke_width=p.stroke_width,
                d=format_path_data(p.geometry, precision),
            )
            for p in session.get_all_baked_paths()
        ]
    )


@router.get("/endpoints", response_model=EndpointsResponse)
async def baked_endpoints(session: DrawingSession = Depends(get_session)) -> EndpointsResponse:
    return EndpointsResponse(endpoints=[PointModel(x=p.x, y=p.y) for p in session.get_all_baked_endpoints()])


@router.get("/export", response_model=ExportResponse)
async def export(
    size_mm: float | None = Query(default=None, gt=0),
    session: DrawingSession = Depends(get_session),
    settings: Settings = Depends(get_settings),
) -> ExportResponse:
    try:
        svg = session.export_svg(size_mm=size_mm or settings.export_size_mm)
    except EmptyExportError as e:
        return ExportResponse(svg=None, path_count=0, notice=str(e))
    return ExportResponse(svg=svg, path_count=len(session.replicator))


@router.get("/export.svg")
async def export_file(
    size_mm: float | None = Query(default=None, gt=0),
    session: DrawingSession = Depends(get_session),
    settings: Settings = Depends(get_settings),
) -> Response:
    try:
        svg = session.export_svg(size_mm=size_mm or settings.export_size_mm)
    except EmptyExportError:
        return Response(status_code=204)
    return Response(
        content=svg,
        media_type="image/svg+xml",
        headers={"Content-Disposition": 'attachment; filename="snowflake.svg"'},
    )


@router.get("/fill", response_model=FillResponse)
async def fill(
    resolution: int | None = Query(default=None, ge=10, le=1000),
    session: DrawingSession = Depends(get_session),
    settings: Settings = Depends(get_settings),
) -> FillResponse:
    report = session.fill_report(resolution=resolution or settings.fill_resolution)
    return FillResponse(
        resolution=report.resolution,
        paper_pct=report.paper_pct,
        region_count=report.region_count,
        enclosed_area=round(report.enclosed_area, 2),
    )


@router.get("/fill.png")
async def fill_png(
    resolution: int | None = Query(default=None, ge=10, le=1000),
    session: DrawingSession = Depends(get_session),
    settings: Settings = Depends(get_settings),
) -> Response:
    report = session.fill_report(resolution=resolution or settings.fill_resolution)
    return Response(content=grid_to_png(report.grid), media_type="image/png")


@router.get("/fill.txt", response_class=PlainTextResponse)
async def fill_text(
    resolution: int = Query(default=50, ge=10, le=200),
    session: DrawingSession = Depends(get_session),
) -> str:
    """Paper (#) / cut (.) preview as plain text, for terminals and logs."""
    report = session.fill_report(resolution=resolution)
    return grid_to_text(report.grid)
