"""FastAPI dependency implementations."""

from collections.abc import Iterator

from fastapi import Depends, Request
from sqlmodel import Session

from src.catalog.api.http.app_data import ApplicationDependencies
from src.catalog.core.services import CatalogService, InventoryLedger
from src.catalog.entities.book import BookRepository


def get_app_dependencies(request: Request) -> ApplicationDependencies:
    """Get the application-wide dependency container."""
    return request.app.state.app_dependencies


def get_db_session(
    app_deps: ApplicationDependencies = Depends(get_app_dependencies),
) -> Iterator[Session]:
    """Open a session for the duration of one request."""
    session = app_deps.database_service.get_session()
    try:
        yield session
    finally:
        session.close()


def get_book_repository(session: Session = Depends(get_db_session)) -> BookRepository:
    return BookRepository(session)


def get_catalog_service(
    repository: BookRepository = Depends(get_book_repository),
) -> CatalogService:
    return CatalogService(repository)


def get_inventory_ledger(
    repository: BookRepository = Depends(get_book_repository),
) -> InventoryLedger:
    return InventoryLedger(repository)
