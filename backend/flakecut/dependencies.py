"""FastAPI dependency injection."""

from __future__ import annotations

import logging
import time
import uuid
from collections import OrderedDict
from typing import Callable

from fastapi import HTTPException

from flakecut.config import Settings, settings
from flakecut.engine.session import DrawingSession

logger = logging.getLogger(__name__)


class SessionStore:
    """In-memory drawing sessions keyed by id.

    Sessions idle for longer than ttl_s are dropped, and creating a session
    past max_sessions evicts the least recently used one. Dropped sessions
    are cleared so no snap-indicator timer outlives them.
    """

    def __init__(
        self,
        ttl_s: float = 3600.0,
        max_sessions: int = 256,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.ttl_s = ttl_s
        self.max_sessions = max_sessions
        self._clock = clock
        # Least recently used first
        self._sessions: OrderedDict[str, tuple[DrawingSession, float]] = OrderedDict()

    def __len__(self) -> int:
        return len(self._sessions)

    def create(self) -> tuple[str, DrawingSession]:
        self._expire()
        while len(self._sessions) >= self.max_sessions:
            oldest = next(iter(self._sessions))
            logger.info("Session store full, evicting %s", oldest)
            self._drop(oldest)

        session_id = uuid.uuid4().hex
        session = DrawingSession(
            start_snap_ms=settings.snap_indicator_start_ms,
            end_snap_ms=settings.snap_indicator_end_ms,
        )
        self._sessions[session_id] = (session, self._clock())
        logger.info("Created session %s", session_id)
        return session_id, session

    def get(self, session_id: str) -> DrawingSession | None:
        self._expire()
        entry = self._sessions.get(session_id)
        if entry is None:
            return None
        session = entry[0]
        self._sessions[session_id] = (session, self._clock())
        self._sessions.move_to_end(session_id)
        return session

    def delete(self, session_id: str) -> bool:
        return self._drop(session_id)

    def _drop(self, session_id: str) -> bool:
        entry = self._sessions.pop(session_id, None)
        if entry is None:
            return False
        entry[0].clear_all()
        return True

    def _expire(self) -> None:
        cutoff = self._clock() - self.ttl_s
        stale = [sid for sid, (_, last_used) in self._sessions.items() if last_used < cutoff]
        for sid in stale:
            logger.info("Session %s expired", sid)
            self._drop(sid)


_store = SessionStore(ttl_s=settings.session_ttl_s, max_sessions=settings.max_sessions)


def get_settings() -> Settings:
    return settings


def get_store() -> SessionStore:
    return _store


def get_session(session_id: str) -> DrawingSession:
    session = _store.get(session_id)
    if session is None:
        raise HTTPException(status_code=404, detail=f"Unknown session {session_id}")
    return session
