"""Schema creation and data-fix migrations for the catalog database."""

from loguru import logger
from sqlalchemy import inspect, text
from sqlalchemy.engine import Engine
from sqlmodel import SQLModel

from src.catalog.entities.book import BookTable


class DbManageService:
    def __init__(self, engine: Engine):
        self._engine = engine

    def create_all(self) -> None:
        """Create all database tables."""
        SQLModel.metadata.create_all(self._engine, tables=[BookTable.__table__])
        logger.info("Database initialized with tables.")

    def backfill_total_quantity(self) -> int:
        """Add ``total_quantity`` to a legacy ``books`` table and copy ``quantity`` into it.

        Rows created before copy tracking existed assume every copy is on the
        shelf. Safe to run repeatedly: returns the number of rows backfilled,
        ``0`` once the column is present.
        """
        table = BookTable.__tablename__
        inspector = inspect(self._engine)
        if not inspector.has_table(table):
            logger.info("No {} table yet; nothing to migrate", table)
            return 0

        columns = {column["name"] for column in inspector.get_columns(table)}
        if "total_quantity" in columns:
            logger.debug("{}.total_quantity already present", table)
            return 0

        with self._engine.begin() as connection:
            connection.execute(
                text(
                    f"ALTER TABLE {table} "
                    "ADD COLUMN total_quantity INTEGER NOT NULL DEFAULT 0"
                )
            )
            result = connection.execute(
                text(f"UPDATE {table} SET total_quantity = quantity")
            )
        logger.info("Backfilled total_quantity for {} row(s)", result.rowcount)
        return result.rowcount

    def migrate(self) -> None:
        """Run every pending data-fix migration."""
        self.backfill_total_quantity()
