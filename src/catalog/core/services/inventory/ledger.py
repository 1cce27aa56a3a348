"""Lend/return bookkeeping for catalog copies."""

from loguru import logger

from src.catalog.core.services.inventory.errors import (
    AllCopiesReturnedError,
    BookNotFoundError,
    BookUnavailableError,
)
from src.catalog.entities.book import Book, BookRepository


class InventoryLedger:
    """Keeps ``0 <= quantity <= total_quantity`` for every book.

    ``lend`` and ``return_copy`` are the only operations that move
    ``quantity``. Both are a single guarded UPDATE, so the bound holds even
    when requests for the same book interleave.
    """

    def __init__(self, repository: BookRepository) -> None:
        self._repository = repository

    def _require(self, book_id: int) -> Book:
        book = self._repository.get(book_id)
        if book is None:
            raise BookNotFoundError(book_id)
        return book

    def lend(self, book_id: int) -> Book:
        """Take one copy off the shelf."""
        book = self._require(book_id)
        if book.quantity <= 0:
            logger.info("Lend refused for book {}: no copies available", book_id)
            raise BookUnavailableError(book_id)

        updated = self._repository.adjust_quantity(book_id, -1)
        if updated is None:
            # Lost a race: the row was deleted or the last copy was taken.
            self._require(book_id)
            raise BookUnavailableError(book_id)

        logger.info(
            "Lent book {} ({}/{} available)",
            book_id,
            updated.quantity,
            updated.total_quantity,
        )
        return updated

    def return_copy(self, book_id: int) -> Book:
        """Put one copy back on the shelf."""
        book = self._require(book_id)
        if book.quantity >= book.total_quantity:
            logger.info("Return refused for book {}: all copies on shelf", book_id)
            raise AllCopiesReturnedError(book_id)

        updated = self._repository.adjust_quantity(book_id, 1)
        if updated is None:
            self._require(book_id)
            raise AllCopiesReturnedError(book_id)

        logger.info(
            "Returned book {} ({}/{} available)",
            book_id,
            updated.quantity,
            updated.total_quantity,
        )
        return updated
