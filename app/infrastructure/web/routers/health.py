"""
Health check endpoints for monitoring.
"""

from datetime import datetime, timezone
from typing import Annotated, Any, Dict

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from supabase import AsyncClient

from app.infrastructure.db.database import check_database, get_service_client
from app.infrastructure.web.dependencies import AppSettings


router = APIRouter()


@router.get("/")
async def root(settings: AppSettings) -> Dict[str, Any]:
    """Root endpoint with API information."""
    return {
        "message": f"{settings.api_title} is running",
        "version": settings.api_version,
    }


@router.get("/health")
async def health_check() -> Dict[str, Any]:
    """Liveness check. Never touches the database."""
    return {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


@router.get("/ready")
async def readiness_check(client: Annotated[AsyncClient, Depends(get_service_client)]):
    """Readiness check: 503 while the database is unreachable."""
    checks = {"database": await check_database(client)}

    if checks["database"]["status"] != "ok":
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "not_ready", "checks": checks}
        )
    return {"status": "ready", "checks": checks}
