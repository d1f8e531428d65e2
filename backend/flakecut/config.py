"""Application configuration from environment variables."""

from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    flakecut_env: str = "development"
    flakecut_log_level: str = "info"

    # CORS
    cors_origins: list[str] = ["http://localhost:5173"]

    # Export: physical width of the 1000-unit canvas
    export_size_mm: float = 100.0

    # Snap indicator lifetimes
    snap_indicator_start_ms: int = 200
    snap_indicator_end_ms: int = 300

    # Paper/cut preview grid
    fill_resolution: int = 200

    # In-memory session store: idle sessions expire, oldest evicted past the cap
    session_ttl_s: float = 3600.0
    max_sessions: int = 256

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
