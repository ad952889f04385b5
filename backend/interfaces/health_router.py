"""Unauthenticated liveness endpoint with a storage ping."""
from __future__ import annotations

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from app.config import AppConfig
from domain.errors import PersistenceError
from infrastructure.repository import RevenueRepository
from interfaces import deps

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["health"])


@router.get("/health")
def health_check(
    repository: RevenueRepository = Depends(deps.get_repository),
    settings: AppConfig = Depends(deps.get_app_settings),
) -> JSONResponse:
    timestamp = datetime.now(timezone.utc).isoformat()
    try:
        repository.ping()
    except PersistenceError as exc:
        logger.warning("Health check failed: %s", exc.message)
        return JSONResponse(
            status_code=500,
            content={"status": "Error", "database": "Disconnected", "timestamp": timestamp},
        )
    return JSONResponse(
        content={
            "status": "OK",
            "database": "Connected",
            "timestamp": timestamp,
            "configVersion": settings.version,
        }
    )
