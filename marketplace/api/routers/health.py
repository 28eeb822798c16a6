"""
Health check endpoints for monitoring and orchestration (K8s, Docker, etc.)

- /health: liveness (siempre 200)
- /health/live: alias de /health
- /health/db: conectividad con la base de datos
- /health/ready: readiness (todas las dependencias sanas)
"""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from marketplace.api.deps import get_db_session

logger = logging.getLogger(__name__)

router = APIRouter()

SERVICE_NAME = "marketplace-bookings"


@router.get("/health")
async def health_check():
    """Liveness probe: 200 mientras el proceso responda."""
    return {"status": "ok", "service": SERVICE_NAME}


@router.get("/health/live")
async def health_check_live():
    return {"status": "ok", "service": SERVICE_NAME}


async def _database_is_up(session: AsyncSession) -> bool:
    try:
        result = await session.execute(text("SELECT 1"))
        result.scalar()
        return True
    except SQLAlchemyError as e:
        logger.error("Database health check failed", exc_info=e)
        return False


@router.get("/health/db")
async def health_check_db(session: AsyncSession = Depends(get_db_session)):
    """Devuelve 503 cuando la base de datos no acepta consultas."""
    if await _database_is_up(session):
        return {"status": "healthy", "component": "database"}
    return JSONResponse(
        status_code=503,
        content={
            "status": "unhealthy",
            "component": "database",
            "error": "Database connection failed",
        },
    )


@router.get("/health/ready")
async def health_check_ready(session: AsyncSession = Depends(get_db_session)):
    """Readiness probe: el tráfico solo se enruta cuando la base de datos responde."""
    if not await _database_is_up(session):
        return JSONResponse(
            status_code=503,
            content={"status": "not_ready", "checks": {"database": "unhealthy"}},
        )
    return {"status": "ready", "checks": {"database": "healthy"}}
