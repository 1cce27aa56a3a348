"""Catalog maintenance and search."""

from enum import Enum

from loguru import logger

from src.catalog.core.services.inventory.errors import (
    BookIdMismatchError,
    BookNotFoundError,
    NoBooksFoundError,
)
from src.catalog.entities.book import Book, BookCreate, BookReplace, BookRepository


class SearchField(str, Enum):
    TITLE = "title"
    AUTHOR = "author"
    GENRE = "genre"


class CatalogService:
    """CRUD and search over the catalog."""

    def __init__(self, repository: BookRepository) -> None:
        self._repository = repository

    def list_books(self) -> list[Book]:
        return self._repository.list_all()

    def get_book(self, book_id: int) -> Book:
        book = self._repository.get(book_id)
        if book is None:
            raise BookNotFoundError(book_id)
        return book

    def create_book(self, payload: BookCreate) -> Book:
        book = self._repository.create(payload)
        logger.info("Added book {} '{}' by {}", book.id, book.title, book.author)
        return book

    def replace_book(self, book_id: int, payload: BookReplace) -> Book:
        if payload.id != book_id:
            raise BookIdMismatchError(book_id, payload.id)

        book = self._repository.update(book_id, payload.model_dump(exclude={"id"}))
        if book is None:
            raise BookNotFoundError(book_id)
        logger.info("Replaced book {}", book_id)
        return book

    def delete_book(self, book_id: int) -> None:
        if not self._repository.delete(book_id):
            raise BookNotFoundError(book_id)
        logger.info("Deleted book {}", book_id)

    def search(self, field: SearchField, fragment: str) -> list[Book]:
        """Title and author match substrings; genre must match exactly.

        All comparisons ignore case. An empty result raises
        ``NoBooksFoundError`` rather than returning ``[]``.
        """
        field = SearchField(field)
        if field is SearchField.TITLE:
            books = self._repository.search_title(fragment)
        elif field is SearchField.AUTHOR:
            books = self._repository.search_author(fragment)
        else:
            books = self._repository.search_genre(fragment)

        if not books:
            logger.debug("Search on {} for {!r} matched nothing", field.value, fragment)
            raise NoBooksFoundError(
                message=f"No books found for {field.value} '{fragment}'."
            )
        return books
