"""Core services exports."""

# Database Services
from .database import DbManageService, DbSessionService

# Catalog / Inventory Services
from .inventory import CatalogService, InventoryLedger, SearchField

__all__ = [
    # Database Services
    "DbManageService",
    "DbSessionService",
    # Catalog / Inventory Services
    "CatalogService",
    "InventoryLedger",
    "SearchField",
]
