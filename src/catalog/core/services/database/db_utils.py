"""Engine helpers shared by the app, the CLI and tests."""

from typing import Any

from sqlalchemy import event
from sqlalchemy.engine import Engine


def _unicode_lower(value: Any) -> Any:
    return value.lower() if isinstance(value, str) else value


def _register_sqlite_functions(dbapi_connection, connection_record) -> None:
    # SQLite's built-in lower() only folds ASCII; match str.lower() instead
    dbapi_connection.create_function(
        "lower", 1, _unicode_lower, deterministic=True
    )


def install_sqlite_functions(engine: Engine) -> Engine:
    """Give every new SQLite connection a Unicode-aware ``lower()``.

    Case-insensitive search lowercases the column in SQL and the search
    text in Python, so both sides must fold case the same way. Other
    backends are left untouched.
    """
    if engine.url.get_backend_name() == "sqlite" and not event.contains(
        engine, "connect", _register_sqlite_functions
    ):
        event.listen(engine, "connect", _register_sqlite_functions)
    return engine
