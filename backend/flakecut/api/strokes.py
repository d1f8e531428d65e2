"""Stroke lifecycle endpoints: begin, extend, finish."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException

from flakecut.api.sessions import stroke_response
from flakecut.dependencies import get_session
from flakecut.engine.context import StrokeHandle
from flakecut.engine.errors import StrokeStateError
from flakecut.engine.session import DrawingSession
from flakecut.models.requests import PointRequest
from flakecut.models.responses import BeginStrokeResponse, GeometryResponse, StrokeResponse
from flakecut.svg.serializer import format_path_data

router = APIRouter(prefix="/sessions/{session_id}/strokes")
logger = logging.getLogger(__name__)


@router.post("", response_model=BeginStrokeResponse)
async def begin_stroke(req: PointRequest, session: DrawingSession = Depends(get_session)) -> BeginStrokeResponse:
    try:
        handle = session.begin_stroke((req.x, req.y))
    except StrokeStateError as e:
        logger.info("Rejected stroke start: %s", e)
        raise HTTPException(status_code=409, detail=str(e))

    if handle is None:
        return BeginStrokeResponse(accepted=False)

    live = session.live_stroke
    start = live.points[0]
    return BeginStrokeResponse(
        accepted=True,
        stroke=stroke_response(live, session.config.precision),
        snapped=(start.x, start.y) != (req.x, req.y),
    )


@router.post("/{stroke_id}/points", response_model=GeometryResponse)
async def extend_stroke(
    stroke_id: str,
    req: PointRequest,
    session: DrawingSession = Depends(get_session),
) -> GeometryResponse:
    try:
        geometry = session.extend_stroke(StrokeHandle(stroke_id), (req.x, req.y))
    except StrokeStateError as e:
        raise HTTPException(status_code=409, detail=str(e))

    return GeometryResponse(
        stroke_id=stroke_id,
        d=format_path_data(geometry, session.config.precision),
        replica_count=len(session.replicator.replicas(stroke_id)),
    )


@router.post("/{stroke_id}/finish", response_model=StrokeResponse)
async def finish_stroke(stroke_id: str, session: DrawingSession = Depends(get_session)) -> StrokeResponse:
    try:
        stroke = session.finish_stroke(StrokeHandle(stroke_id))
    except StrokeStateError as e:
        raise HTTPException(status_code=409, detail=str(e))
    return stroke_response(stroke, session.config.precision)
