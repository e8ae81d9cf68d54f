"""Health endpoints for API v1."""

from __future__ import annotations

from fastapi import APIRouter

from dashboard.core.config import get_config
from dashboard.database.db import verify_database_connection

router = APIRouter(tags=["health"])


@router.get("/health")
async def health() -> dict:
    cfg = get_config()
    database_ok = await verify_database_connection()
    return {
        "status": "ok" if database_ok else "degraded",
        "service": cfg.APP_NAME,
        "version": cfg.APP_VERSION,
        "database": "ok" if database_ok else "unreachable",
    }
