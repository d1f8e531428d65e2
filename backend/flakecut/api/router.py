"""Master API router — mounts all endpoint routers."""

from __future__ import annotations

from fastapi import APIRouter

from flakecut.api import export, health, sessions, strokes

api_router = APIRouter(prefix="/api")

api_router.include_router(health.router)
api_router.include_router(sessions.router)
api_router.include_router(strokes.router)
api_router.include_router(export.router)
