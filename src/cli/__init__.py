"""Main CLI application module."""

import typer

from .book_commands import books_app
from .db_commands import db_app
from .server_commands import serve

# Create the main CLI application
app = typer.Typer(
    help="📚 Library catalog API - server and maintenance commands",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

# Register commands and command groups
app.command(name="serve")(serve)
app.add_typer(db_app, name="db")
app.add_typer(books_app, name="books")


def main() -> None:
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
