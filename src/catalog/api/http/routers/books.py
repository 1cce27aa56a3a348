"""Book API router: catalog CRUD, search, and lend/return."""

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status
from sqlmodel import Session

from src.catalog.api.http.deps import (
    get_catalog_service,
    get_db_session,
    get_inventory_ledger,
)
from src.catalog.core.services import CatalogService, InventoryLedger, SearchField
from src.catalog.core.services.inventory import (
    AllCopiesReturnedError,
    BookIdMismatchError,
    BookNotFoundError,
    BookUnavailableError,
)
from src.catalog.entities.book import Book, BookCreate, BookReplace

router = APIRouter(prefix="/api/books", tags=["books"])


@router.get("", response_model=list[Book])
def list_books(catalog: CatalogService = Depends(get_catalog_service)) -> list[Book]:
    """List all books."""
    return catalog.list_books()


@router.get("/{book_id}", response_model=Book)
def get_book(
    book_id: int,
    catalog: CatalogService = Depends(get_catalog_service),
) -> Book:
    """Get a book by ID."""
    try:
        return catalog.get_book(book_id)
    except BookNotFoundError as e:
        raise HTTPException(status_code=404, detail=e.detail) from e


@router.post("", response_model=Book, status_code=status.HTTP_201_CREATED)
def create_book(
    payload: BookCreate,
    request: Request,
    response: Response,
    session: Session = Depends(get_db_session),
    catalog: CatalogService = Depends(get_catalog_service),
) -> Book:
    """Add a book to the catalog."""
    book = catalog.create_book(payload)
    session.commit()
    response.headers["Location"] = str(request.url_for("get_book", book_id=book.id))
    return book


@router.put("/{book_id}", status_code=status.HTTP_204_NO_CONTENT)
def replace_book(
    book_id: int,
    payload: BookReplace,
    session: Session = Depends(get_db_session),
    catalog: CatalogService = Depends(get_catalog_service),
) -> Response:
    """Replace every field of a book."""
    try:
        catalog.replace_book(book_id, payload)
    except BookIdMismatchError as e:
        raise HTTPException(status_code=400, detail=e.detail) from e
    except BookNotFoundError as e:
        raise HTTPException(status_code=404, detail=e.detail) from e
    session.commit()
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{book_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_book(
    book_id: int,
    session: Session = Depends(get_db_session),
    catalog: CatalogService = Depends(get_catalog_service),
) -> Response:
    """Remove a book from the catalog."""
    try:
        catalog.delete_book(book_id)
    except BookNotFoundError as e:
        raise HTTPException(status_code=404, detail=e.detail) from e
    session.commit()
    return Response(status_code=status.HTTP_204_NO_CONTENT)


def _search(catalog: CatalogService, field: SearchField, value: str) -> list[Book]:
    try:
        return catalog.search(field, value)
    except BookNotFoundError as e:
        raise HTTPException(status_code=404, detail=e.detail) from e


@router.get("/title/{title}", response_model=list[Book])
def search_by_title(
    title: str,
    catalog: CatalogService = Depends(get_catalog_service),
) -> list[Book]:
    """Books whose title contains ``title`` (case-insensitive)."""
    return _search(catalog, SearchField.TITLE, title)


@router.get("/author/{author}", response_model=list[Book])
def search_by_author(
    author: str,
    catalog: CatalogService = Depends(get_catalog_service),
) -> list[Book]:
    """Books whose author contains ``author`` (case-insensitive)."""
    return _search(catalog, SearchField.AUTHOR, author)


@router.get("/genre/{genre}", response_model=list[Book])
def search_by_genre(
    genre: str,
    catalog: CatalogService = Depends(get_catalog_service),
) -> list[Book]:
    """Books whose genre equals ``genre`` (case-insensitive)."""
    return _search(catalog, SearchField.GENRE, genre)


@router.post("/{book_id}/lend", response_model=Book)
def lend_book(
    book_id: int,
    session: Session = Depends(get_db_session),
    ledger: InventoryLedger = Depends(get_inventory_ledger),
) -> Book:
    """Lend one copy."""
    try:
        book = ledger.lend(book_id)
    except (BookNotFoundError, BookUnavailableError) as e:
        # Unknown ids read as "Not available" here, unlike /return
        raise HTTPException(
            status_code=400, detail=BookUnavailableError.message
        ) from e
    session.commit()
    return book


@router.post("/{book_id}/return", response_model=Book)
def return_book(
    book_id: int,
    session: Session = Depends(get_db_session),
    ledger: InventoryLedger = Depends(get_inventory_ledger),
) -> Book:
    """Return one copy."""
    try:
        book = ledger.return_copy(book_id)
    except BookNotFoundError as e:
        raise HTTPException(status_code=404, detail=e.detail) from e
    except AllCopiesReturnedError as e:
        raise HTTPException(status_code=400, detail=e.detail) from e
    session.commit()
    return book
