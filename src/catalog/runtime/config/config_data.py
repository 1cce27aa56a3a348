"""Typed view of the `config:` document in config.yaml."""

from __future__ import annotations

import os
from typing import Literal

from loguru import logger
from pydantic import BaseModel, Field
from sqlalchemy.engine import make_url


class CORSConfig(BaseModel):
    """Browser origins allowed to call the catalog API."""

    origins: list[str] = Field(
        default=["http://localhost:3000", "http://localhost:5173"]
    )
    allow_credentials: bool = False
    allow_methods: list[str] = Field(
        default=["GET", "POST", "PUT", "DELETE", "OPTIONS"]
    )
    allow_headers: list[str] = Field(default=["*"])


class LoggingConfig(BaseModel):
    """Loguru sinks: console always, rotating file when ``file`` is set."""

    level: str = Field(default="INFO", description="Minimum level for every sink")
    format: Literal["json", "plain"] = Field(default="plain", description="Log format")
    file: str | None = Field(
        default=None, description="Log file path (no file sink when empty)"
    )
    max_size_mb: int = Field(
        default=10, description="Rotate the log file at this size"
    )
    backup_count: int = Field(
        default=5, description="Rotated log files to retain"
    )


class DatabaseConfig(BaseModel):
    """Catalog database connection, pool and startup schema options."""

    url: str = Field(
        default="sqlite:///./catalog.db",
        description="SQLAlchemy URL of the catalog database",
    )
    environment_mode: Literal["development", "production", "test"] = Field(
        default="development", description="Environment mode used for secret lookup"
    )
    pool_size: int = Field(default=10, description="Connection pool size")
    max_overflow: int = Field(
        default=10, description="Connections allowed beyond pool_size"
    )
    pool_timeout: int = Field(
        default=30, description="Seconds to wait for a free connection"
    )
    pool_recycle: int = Field(
        default=1800, description="Reconnect connections older than this"
    )
    echo: bool = Field(default=False, description="Echo SQL statements")
    create_tables_on_startup: bool = Field(
        default=True, description="Create missing tables when the API starts"
    )
    run_migrations_on_startup: bool = Field(
        default=True,
        description="Backfill legacy columns (total_quantity) when the API starts",
    )
    password_env_var: str | None = Field(
        default=None,
        description="Name of the env var holding the password (production)",
    )
    password_file: str | None = Field(
        default=None,
        description="Secret file holding the password (production)",
    )

    @property
    def is_sqlite(self) -> bool:
        return make_url(self.url).get_backend_name() == "sqlite"

    @property
    def is_in_memory(self) -> bool:
        """True for ``sqlite://`` and ``sqlite:///:memory:`` URLs."""
        url = make_url(self.url)
        return self.is_sqlite and url.database in (None, "", ":memory:")

    @property
    def password(self) -> str | None:
        """Resolve the database password.

        The URL password is used in development and test. In production
        ``password_file`` and then ``password_env_var`` take precedence.
        """
        if self.environment_mode in ("development", "test"):
            return make_url(self.url).password

        if self.password_file:
            try:
                with open(self.password_file) as f:
                    return f.read().strip()
            except OSError as e:
                raise ValueError("Failed to read database password from file.") from e
        if self.password_env_var:
            password = os.getenv(self.password_env_var)
            if not password:
                raise ValueError(f"Environment variable {self.password_env_var} not set")
            return password
        return make_url(self.url).password

    @property
    def connection_string(self) -> str:
        """URL handed to ``create_engine``, with the resolved password filled in."""
        base_url = make_url(self.url)
        if self.is_sqlite:
            return self.url

        if base_url.password and self.environment_mode == "production":
            logger.warning(
                "Database URL contains a password in production mode; "
                "consider using a secrets file or environment variable."
            )

        resolved_password = self.password
        if resolved_password and resolved_password != base_url.password:
            base_url = base_url.set(password=resolved_password)

        # render_as_string keeps the password; str() would mask it
        return base_url.render_as_string(hide_password=False)


class AppConfig(BaseModel):
    """HTTP service identity and bind address."""

    name: str = Field(default="Library Catalog API", description="Service title")
    environment: Literal["development", "production", "test"] = Field(
        default="development", description="Deployment environment"
    )
    host: str = Field(default="127.0.0.1", description="Application host")
    port: int = Field(default=8000, description="Port uvicorn binds")
    cors: CORSConfig = Field(
        default_factory=CORSConfig, description="Allowed browser origins"
    )


class ConfigData(BaseModel):
    """Everything under the `config:` key."""

    app: AppConfig = Field(
        default_factory=AppConfig, description="HTTP service"
    )
    database: DatabaseConfig = Field(
        default_factory=DatabaseConfig, description="Catalog database"
    )
    logging: LoggingConfig = Field(
        default_factory=LoggingConfig, description="Log sinks"
    )
