"""Command that runs the HTTP API."""

import typer
from rich.panel import Panel

from src.catalog.runtime.context import get_config

from .utils import console


def serve(
    host: str | None = typer.Option(None, help="Host to bind (default: config app.host)"),
    port: int | None = typer.Option(None, help="Port to bind (default: config app.port)"),
    reload: bool = typer.Option(False, help="Enable auto-reload on code changes"),
) -> None:
    """
    🚀 Start the catalog API with uvicorn.
    """
    import uvicorn

    config = get_config()
    host = host or config.app.host
    port = port or config.app.port

    console.print(
        Panel.fit(
            f"[bold green]Serving {config.app.name} on http://{host}:{port}[/bold green]",
            border_style="green",
        )
    )
    uvicorn.run(
        "src.catalog.api.http.app:app",
        host=host,
        port=port,
        reload=reload,
        access_log=False,
    )
