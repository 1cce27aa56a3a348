"""Database maintenance commands."""

import typer

from src.catalog.core.services import DbManageService

from .utils import console, database_service

db_app = typer.Typer(help="🗄️  Database schema and migration commands")


@db_app.command("init")
def init() -> None:
    """Create any missing tables."""
    with database_service() as service:
        DbManageService(service.engine).create_all()
    console.print("[green]✅ Tables created[/green]")


@db_app.command("migrate")
def migrate() -> None:
    """Backfill total_quantity from quantity on legacy catalogs."""
    with database_service() as service:
        backfilled = DbManageService(service.engine).backfill_total_quantity()
    if backfilled:
        console.print(f"[green]✅ Backfilled total_quantity on {backfilled} book(s)[/green]")
    else:
        console.print("[yellow]Nothing to migrate[/yellow]")
