"""Book database table model."""

from sqlalchemy import CheckConstraint
from sqlmodel import Field, SQLModel


class BookTable(SQLModel, table=True):
    """Database persistence model for books.

    This represents how the Book entity is stored in the database.
    It's separate from the domain entity to maintain clean architecture
    while keeping related code together.
    """

    __tablename__ = "books"
    __table_args__ = (
        CheckConstraint("quantity >= 0", name="ck_books_quantity_non_negative"),
        CheckConstraint(
            "quantity <= total_quantity", name="ck_books_quantity_within_total"
        ),
    )

    id: int | None = Field(default=None, primary_key=True)
    title: str = Field(index=True)
    author: str = Field(index=True)
    genre: str = Field(index=True)
    quantity: int = Field(default=0)
    total_quantity: int = Field(default=0)
