"""Domain errors raised by the catalog and inventory ledger."""


class CatalogError(Exception):
    """Base class for catalog domain errors."""

    message = "Catalog error"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.message)

    @property
    def detail(self) -> str:
        return str(self)


class BookNotFoundError(CatalogError):
    message = "Book not found"

    def __init__(self, book_id: int | None = None, message: str | None = None) -> None:
        self.book_id = book_id
        super().__init__(message)


class NoBooksFoundError(BookNotFoundError):
    """A search matched nothing; treated as not-found by this API."""

    message = "No books found"


class BookUnavailableError(CatalogError):
    """No copy is on the shelf to lend."""

    message = "Not available"

    def __init__(self, book_id: int, message: str | None = None) -> None:
        self.book_id = book_id
        super().__init__(message)


class AllCopiesReturnedError(CatalogError):
    """A return would push available copies past the total owned."""

    message = "All copies have already been returned."

    def __init__(self, book_id: int, message: str | None = None) -> None:
        self.book_id = book_id
        super().__init__(message)


class BookIdMismatchError(CatalogError):
    message = "Book id in the path does not match the id in the body"

    def __init__(self, path_id: int, body_id: int) -> None:
        self.path_id = path_id
        self.body_id = body_id
        super().__init__()
