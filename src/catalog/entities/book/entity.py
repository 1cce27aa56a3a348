"""Entity: Book."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel


class _BookFields(BaseModel):
    """Catalog fields shared by the read and write models.

    JSON uses camelCase (``totalQuantity``); Python code uses snake_case.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )

    title: str = Field(description="Catalog title")
    author: str = Field(description="Catalog author")
    genre: str = Field(description="Classification tag")
    quantity: int = Field(ge=0, description="Copies currently available for lending")
    total_quantity: int = Field(ge=0, description="Copies owned in total")


class _CheckedCopies(_BookFields):
    @field_validator("title", "author", "genre")
    @classmethod
    def check_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be blank")
        return value

    @model_validator(mode="after")
    def check_copy_bounds(self) -> "_CheckedCopies":
        if self.quantity > self.total_quantity:
            raise ValueError(
                "quantity cannot exceed totalQuantity "
                f"({self.quantity} > {self.total_quantity})"
            )
        return self


class BookCreate(_CheckedCopies):
    """Payload for adding a book to the catalog.

    ``totalQuantity`` may be omitted, in which case every copy is considered
    on the shelf and it defaults to ``quantity``. Any ``id`` sent by the
    client is ignored.
    """

    @model_validator(mode="before")
    @classmethod
    def default_total_to_quantity(cls, data: Any) -> Any:
        if isinstance(data, dict):
            has_total = data.get("totalQuantity", data.get("total_quantity")) is not None
            if not has_total and "quantity" in data:
                data = {k: v for k, v in data.items() if k != "totalQuantity"}
                data["total_quantity"] = data["quantity"]
        return data


class BookReplace(_CheckedCopies):
    """Full replacement of a catalog entry; the body must carry its own id."""

    id: int = Field(description="Identifier; must match the path id")


class Book(_BookFields):
    """Book entity as stored in the catalog."""

    id: int = Field(description="Server-assigned identifier")

    @property
    def is_available(self) -> bool:
        return self.quantity > 0

    @property
    def on_loan(self) -> int:
        """Number of copies currently lent out."""
        return self.total_quantity - self.quantity
