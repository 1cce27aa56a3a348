"""Book repository for data access operations."""

from typing import Any

from sqlalchemy import String, func, update
from sqlmodel import Session, select

from .entity import Book, BookCreate
from .table import BookTable

_MUTABLE_FIELDS = frozenset({"title", "author", "genre", "quantity", "total_quantity"})


class BookRepository:
    """Data-access layer for the catalog.

    The repository flushes but never commits; the caller owns the
    transaction.
    """

    def __init__(self, session: Session) -> None:
        self._session = session

    @staticmethod
    def _to_entity(row: BookTable) -> Book:
        return Book.model_validate(row, from_attributes=True)

    def _to_entities(self, rows: list[BookTable]) -> list[Book]:
        return [self._to_entity(row) for row in rows]

    def create(self, book: BookCreate) -> Book:
        row = BookTable(**book.model_dump())
        self._session.add(row)
        self._session.flush()
        self._session.refresh(row)
        return self._to_entity(row)

    def get(self, book_id: int) -> Book | None:
        row = self._session.get(BookTable, book_id, populate_existing=True)
        if row is None:
            return None
        return self._to_entity(row)

    def list_all(self) -> list[Book]:
        statement = select(BookTable).order_by(BookTable.id)
        return self._to_entities(self._session.exec(statement).all())

    def update(self, book_id: int, fields: dict[str, Any]) -> Book | None:
        """Overwrite ``fields`` on the book; ``None`` if it does not exist."""
        unknown = set(fields) - _MUTABLE_FIELDS
        if unknown:
            raise ValueError(f"Cannot update fields: {sorted(unknown)}")

        row = self._session.get(BookTable, book_id)
        if row is None:
            return None
        for name, value in fields.items():
            setattr(row, name, value)
        self._session.add(row)
        self._session.flush()
        self._session.refresh(row)
        return self._to_entity(row)

    def delete(self, book_id: int) -> bool:
        row = self._session.get(BookTable, book_id)
        if row is None:
            return False
        self._session.delete(row)
        self._session.flush()
        return True

    def search_title(self, fragment: str) -> list[Book]:
        """Case-insensitive substring match on title."""
        statement = select(BookTable).where(
            func.lower(BookTable.title, type_=String).contains(
                fragment.lower(), autoescape=True
            )
        )
        return self._to_entities(self._session.exec(statement).all())

    def search_author(self, fragment: str) -> list[Book]:
        """Case-insensitive substring match on author."""
        statement = select(BookTable).where(
            func.lower(BookTable.author, type_=String).contains(
                fragment.lower(), autoescape=True
            )
        )
        return self._to_entities(self._session.exec(statement).all())

    def search_genre(self, genre: str) -> list[Book]:
        """Case-insensitive exact match on genre."""
        statement = select(BookTable).where(
            func.lower(BookTable.genre, type_=String) == genre.lower()
        )
        return self._to_entities(self._session.exec(statement).all())

    def adjust_quantity(self, book_id: int, delta: int) -> Book | None:
        """Move ``quantity`` by ``delta`` only if it stays within bounds.

        The bound check runs inside the UPDATE, so two concurrent requests
        cannot both take the last copy. Returns the refreshed book, or
        ``None`` when no row matched (missing id or bound reached).
        """
        statement = update(BookTable).where(BookTable.id == book_id)
        if delta < 0:
            statement = statement.where(BookTable.quantity + delta >= 0)
        else:
            statement = statement.where(
                BookTable.quantity + delta <= BookTable.total_quantity
            )
        statement = statement.values(quantity=BookTable.quantity + delta)

        result = self._session.connection().execute(statement)
        if result.rowcount == 0:
            return None
        return self.get(book_id)
