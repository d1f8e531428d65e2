"""Drawing session endpoints: create, inspect, mode, undo, clear, delete."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException

from flakecut.dependencies import SessionStore, get_session, get_store
from flakecut.engine.context import SourceStroke
from flakecut.engine.session import DrawingSession
from flakecut.models.requests import ModeRequest
from flakecut.models.responses import PointModel, SessionResponse, StrokeResponse, UndoResponse
from flakecut.svg.serializer import format_path_data

router = APIRouter(prefix="/sessions")
logger = logging.getLogger(__name__)


def session_response(session_id: str, session: DrawingSession) -> SessionResponse:
    live = session.live_stroke
    return SessionResponse(
        session_id=session_id,
        mode=session.mode.value,
        stroke_width=session.stroke_width,
        stroke_count=len(session.strokes),
        replica_count=len(session.replicator),
        live_stroke_id=live.id if live is not None else None,
    )


def stroke_response(stroke: SourceStroke, precision: int = 2) -> StrokeResponse:
    return StrokeResponse(
        stroke_id=stroke.id,
        mode=stroke.mode.value,
        finalized=stroke.finalized,
        stroke_width=stroke.stroke_width,
        points=[PointModel(x=p.x, y=p.y) for p in stroke.points],
        d=format_path_data(stroke.geometry, precision),
    )


@router.post("", response_model=SessionResponse, status_code=201)
async def create_session(store: SessionStore = Depends(get_store)) -> SessionResponse:
    session_id, session = store.create()
    return session_response(session_id, session)


@router.get("/{session_id}", response_model=SessionResponse)
async def read_session(session_id: str, session: DrawingSession = Depends(get_session)) -> SessionResponse:
    return session_response(session_id, session)


@router.delete("/{session_id}", status_code=204)
async def delete_session(session_id: str, store: SessionStore = Depends(get_store)) -> None:
    if not store.delete(session_id):
        raise HTTPException(status_code=404, detail=f"Unknown session {session_id}")
    logger.info("Deleted session %s", session_id)


@router.put("/{session_id}/mode", response_model=SessionResponse)
async def set_mode(
    session_id: str,
    req: ModeRequest,
    session: DrawingSession = Depends(get_session),
) -> SessionResponse:
    session.set_mode(req.mode)
    if req.stroke_width is not None:
        session.set_stroke_width(req.stroke_width)
    return session_response(session_id, session)


@router.post("/{session_id}/undo", response_model=UndoResponse)
async def undo(session: DrawingSession = Depends(get_session)) -> UndoResponse:
    removed = session.undo_last()
    return UndoResponse(
        removed=stroke_response(removed, session.config.precision) if removed is not None else None,
        stroke_count=len(session.strokes),
    )


@router.post("/{session_id}/clear", response_model=SessionResponse)
async def clear(session_id: str, session: DrawingSession = Depends(get_session)) -> SessionResponse:
    session.clear_all()
    return session_response(session_id, session)
