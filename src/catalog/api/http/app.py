"""FastAPI application for the library catalog."""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger
from starlette.responses import JSONResponse

from src.catalog import __version__
from src.catalog.api.http.app_data import ApplicationDependencies
from src.catalog.api.http.middleware.request_context import RequestContextMiddleware
from src.catalog.api.http.routers.books import router as books_router
from src.catalog.api.http.routers.health import router as health_router
from src.catalog.api.utils.app_startup import configure_logging
from src.catalog.core.services import DbManageService, DbSessionService
from src.catalog.runtime.context import get_config

main_config = get_config()

configure_logging()


def build_dependencies() -> ApplicationDependencies:
    """Open the database and bring its schema up to date."""
    config = get_config()
    database_service = DbSessionService(config)
    db_manage_service = DbManageService(database_service.engine)
    if config.database.run_migrations_on_startup:
        db_manage_service.migrate()
    if config.database.create_tables_on_startup:
        db_manage_service.create_all()
    return ApplicationDependencies(database_service=database_service)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(
        "Starting {} in {} environment",
        main_config.app.name,
        get_config().app.environment,
    )
    app.state.app_dependencies = build_dependencies()
    try:
        yield
    finally:
        logger.info("Shutting down; disposing database engine")
        app.state.app_dependencies.database_service.dispose()


app = FastAPI(
    title=main_config.app.name,
    version=__version__,
    lifespan=lifespan,
    docs_url=None if main_config.app.environment == "production" else "/docs",
    redoc_url=None if main_config.app.environment == "production" else "/redoc",
)

cors = main_config.app.cors
if "*" in cors.origins and cors.allow_credentials:
    raise RuntimeError("CORS misconfigured: '*' origins cannot allow credentials")

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors.origins,
    allow_credentials=cors.allow_credentials,
    allow_methods=cors.allow_methods,
    allow_headers=cors.allow_headers,
)
app.add_middleware(RequestContextMiddleware)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Malformed input is a 400 for this API, not FastAPI's default 422."""
    logger.bind(error_count=len(exc.errors())).info(
        "Rejected invalid request to {}", request.url.path
    )
    return JSONResponse(
        status_code=400,
        content={"detail": jsonable_encoder(exc.errors())},
    )


app.include_router(health_router)
app.include_router(books_router)

__all__ = ["app", "build_dependencies"]


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        app,
        host=main_config.app.host,
        port=main_config.app.port,
        access_log=False,  # RequestContextMiddleware logs each request
    )
