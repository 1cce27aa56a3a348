"""Engine and session factory for the catalog database."""

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from loguru import logger
from sqlalchemy import StaticPool, text
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, create_engine

from src.catalog.core.services.database.db_utils import install_sqlite_functions
from src.catalog.runtime.config.config_data import ConfigData
from src.catalog.runtime.context import get_config


class DbSessionService:
    """Owns the engine for one process; hands out short-lived sessions."""

    def __init__(self, config: ConfigData | None = None):
        self._config = config or get_config()
        db_config = self._config.database

        self._engine = create_engine(
            db_config.connection_string,
            echo=db_config.echo,
            connect_args=self._connect_args(),
            **self._pool_kwargs(),
        )
        install_sqlite_functions(self._engine)
        logger.info(
            "Database engine ready ({} {}) for {} environment",
            self._engine.url.get_backend_name(),
            self._engine.url.database or "in-memory",
            self._config.app.environment,
        )

    @property
    def engine(self) -> Engine:
        return self._engine

    def _pool_kwargs(self) -> dict[str, Any]:
        db_config = self._config.database
        if db_config.is_in_memory:
            # One shared connection, otherwise every checkout sees an empty database
            return {"poolclass": StaticPool}
        return {
            "pool_size": db_config.pool_size,
            "max_overflow": db_config.max_overflow,
            "pool_timeout": db_config.pool_timeout,
            "pool_recycle": db_config.pool_recycle,
            "pool_pre_ping": True,
        }

    def _connect_args(self) -> dict[str, Any]:
        db_config = self._config.database
        environment = self._config.app.environment

        if db_config.is_sqlite:
            if environment == "production":
                logger.warning(
                    "SQLite in production serialises every write; "
                    "point DATABASE_URL at PostgreSQL instead."
                )
            # sessions cross threadpool workers; wait up to 20s on a locked file
            return {"check_same_thread": False, "timeout": 20}

        if make_url(db_config.url).get_backend_name() == "postgresql":
            return {
                "application_name": f"catalog_api_{environment}",
                "connect_timeout": 30,
            }
        return {}

    def get_session(self) -> Session:
        """New session; rows stay readable after commit."""
        return Session(self._engine, expire_on_commit=False)

    @contextmanager
    def session_scope(self) -> Iterator[Session]:
        """Commit on success, roll back and re-raise on error."""
        session = self.get_session()
        try:
            yield session
            session.commit()
        except Exception as exc:
            session.rollback()
            logger.error("Rolled back database transaction: {!r}", exc)
            raise
        finally:
            session.close()

    def health_check(self) -> bool:
        """``True`` when a trivial query round-trips."""
        try:
            with self._engine.connect() as connection:
                connection.execute(text("SELECT 1"))
        except SQLAlchemyError as exc:
            logger.error("Database health check failed: {!r}", exc)
            return False
        return True

    def get_pool_status(self) -> dict[str, Any]:
        """Pool counters for the database health endpoint."""
        pool = self._engine.pool
        status: dict[str, Any] = {"type": type(pool).__name__}
        for key, method in (
            ("size", "size"),
            ("checked_in", "checkedin"),
            ("checked_out", "checkedout"),
            ("overflow", "overflow"),
        ):
            counter = getattr(pool, method, None)
            status[key] = counter() if callable(counter) else 0
        return status

    def dispose(self) -> None:
        self._engine.dispose()
