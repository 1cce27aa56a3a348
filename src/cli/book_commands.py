"""Catalog inspection commands."""

import typer
from rich.table import Table

from src.catalog.core.services import CatalogService
from src.catalog.entities.book import BookRepository

from .utils import console, database_service

books_app = typer.Typer(help="📖 Inspect the catalog")


@books_app.command("list")
def list_books(
    available_only: bool = typer.Option(
        False, "--available", "-a", help="Only show books with a copy on the shelf"
    ),
) -> None:
    """List every book with its copy counts."""
    with database_service() as service, service.session_scope() as session:
        books = CatalogService(BookRepository(session)).list_books()

    if available_only:
        books = [book for book in books if book.is_available]

    if not books:
        console.print("[yellow]No books in the catalog[/yellow]")
        return

    table = Table(title="Catalog")
    table.add_column("ID", style="cyan", justify="right")
    table.add_column("Title", style="green")
    table.add_column("Author", style="blue")
    table.add_column("Genre", style="magenta")
    table.add_column("Available", justify="right")
    table.add_column("On loan", justify="right")
    table.add_column("Total", justify="right")

    for book in books:
        table.add_row(
            str(book.id),
            book.title,
            book.author,
            book.genre,
            str(book.quantity),
            str(book.on_loan),
            str(book.total_quantity),
        )

    console.print(table)
    console.print(f"\n[green]Found {len(books)} book(s)[/green]")
