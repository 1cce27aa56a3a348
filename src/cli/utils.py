"""Shared helpers for CLI commands."""

from collections.abc import Iterator
from contextlib import contextmanager

from rich.console import Console

from src.catalog.core.services import DbSessionService
from src.catalog.runtime.context import get_config

console = Console()


@contextmanager
def database_service() -> Iterator[DbSessionService]:
    """Engine for one CLI invocation, disposed on exit."""
    service = DbSessionService(get_config())
    try:
        yield service
    finally:
        service.dispose()
