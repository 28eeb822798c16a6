import logging
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from marketplace.api.deps import engine
from marketplace.api.routers.audit_logs import router as audit_logs_router
from marketplace.api.routers.bookings import router as bookings_router
from marketplace.api.routers.health import router as health_router
from marketplace.api.routers.payments import router as payments_router
from marketplace.api.routers.profile import router as profile_router
from marketplace.api.routers.services import router as services_router
from marketplace.config import get_settings
from marketplace.domain.errors import DomainError
from marketplace.infrastructure.db.tables import metadata

logging.basicConfig(
    level=get_settings().log_level.upper(),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Crear tablas (dev/demo); en producción el esquema lo gestionan migraciones
    async with engine.begin() as conn:
        await conn.run_sync(metadata.create_all)
    yield
    await engine.dispose()

app = FastAPI(
    title="Marketplace Bookings API",
    version="0.1.0",
    lifespan=lifespan
)


@app.exception_handler(DomainError)
async def domain_error_handler(request: Request, exc: DomainError):
    if exc.http_status >= 500:
        logger.error("Domain error", exc_info=exc, extra={"code": exc.code})
    else:
        logger.info(
            "Request rejected",
            extra={"code": exc.code, "path": request.url.path, "status": exc.http_status},
        )
    return JSONResponse(
        status_code=exc.http_status,
        content={"detail": exc.message, "code": exc.code},
    )


# Global Exception Handler
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """
    Oculta los stack traces al cliente.

    El error completo queda en el log con un error_id que el cliente puede
    reportar a soporte.
    """
    error_id = str(uuid.uuid4())

    logger.error(
        "Unhandled exception occurred",
        exc_info=exc,
        extra={
            "error_id": error_id,
            "path": request.url.path,
            "method": request.method,
            "client_host": request.client.host if request.client else None,
        }
    )

    return JSONResponse(
        status_code=500,
        content={
            "detail": "Internal server error",
            "error_id": error_id,
            "message": "An unexpected error occurred. Please contact support with the error_id if the issue persists."
        }
    )


app.include_router(health_router, tags=["Health"])
app.include_router(services_router, prefix="/api/v1", tags=["Services"])
app.include_router(bookings_router, prefix="/api/v1", tags=["Bookings"])
app.include_router(payments_router, prefix="/api/v1", tags=["Payments"])
app.include_router(profile_router, prefix="/api/v1", tags=["Profile"])
app.include_router(audit_logs_router, prefix="/api/v1", tags=["Audit Logs"])
