"""Health check endpoint."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from flakecut.dependencies import SessionStore, get_store
from flakecut.models.responses import HealthResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health(store: SessionStore = Depends(get_store)) -> HealthResponse:
    return HealthResponse(status="ok", version="0.1.0", sessions=len(store))
