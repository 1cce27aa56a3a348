"""Liveness and readiness probes."""

from typing import Any

from fastapi import APIRouter, Depends
from starlette.responses import JSONResponse

from src.catalog.api.http.app_data import ApplicationDependencies
from src.catalog.api.http.deps import get_app_dependencies
from src.catalog.runtime.context import get_config

router = APIRouter(prefix="/health", tags=["health"])


@router.get("")
async def health() -> dict[str, str]:
    """200 while the process is up. The database is not consulted."""
    return {"status": "healthy", "service": "catalog-api"}


@router.get("/ready", response_model=None)
def readiness(
    app_deps: ApplicationDependencies = Depends(get_app_dependencies),
) -> dict[str, Any] | JSONResponse:
    """503 until the catalog database answers."""
    database_service = app_deps.database_service
    db_healthy = database_service.health_check()
    body = {
        "status": "ready" if db_healthy else "not_ready",
        "environment": get_config().app.environment,
        "checks": {
            "database": {
                "status": "healthy" if db_healthy else "unhealthy",
                "type": database_service.engine.url.get_backend_name(),
            }
        },
    }
    return body if db_healthy else JSONResponse(status_code=503, content=body)


@router.get("/database", response_model=None)
def database_status(
    app_deps: ApplicationDependencies = Depends(get_app_dependencies),
) -> dict[str, Any] | JSONResponse:
    """Connectivity plus connection-pool counters."""
    database_service = app_deps.database_service
    try:
        return {
            "status": "healthy" if database_service.health_check() else "unhealthy",
            "type": database_service.engine.url.get_backend_name(),
            "pool": database_service.get_pool_status(),
        }
    except Exception as exc:
        return JSONResponse(
            status_code=503,
            content={
                "status": "unhealthy",
                "error": str(exc),
                "error_type": type(exc).__name__,
            },
        )
