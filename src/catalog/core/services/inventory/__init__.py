"""Catalog and inventory ledger services."""

from .catalog import CatalogService, SearchField
from .errors import (
    AllCopiesReturnedError,
    BookIdMismatchError,
    BookNotFoundError,
    BookUnavailableError,
    CatalogError,
    NoBooksFoundError,
)
from .ledger import InventoryLedger

__all__ = [
    "CatalogService",
    "SearchField",
    "InventoryLedger",
    "CatalogError",
    "BookNotFoundError",
    "NoBooksFoundError",
    "BookUnavailableError",
    "AllCopiesReturnedError",
    "BookIdMismatchError",
]
