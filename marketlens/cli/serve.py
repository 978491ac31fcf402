"""Command to run the MarketLens HTTP API."""

from typing import Optional

import click
from rich.console import Console

console = Console()


@click.command()
@click.option("--host", default=None, help="Bind address (default: from config)")
@click.option("--port", default=None, type=int, help="Port (default: from config)")
@click.option("--reload", is_flag=True, default=False, help="Reload on code changes")
def serve(host: Optional[str], port: Optional[int], reload: bool) -> None:
    """Start the HTTP API serving GET /markets.

    \b
    Examples:
      marketlens serve
      marketlens serve --host 0.0.0.0 --port 9000
    """
    import uvicorn

    from marketlens.config import get_settings

    settings = get_settings()
    host = host or settings.server.host
    port = port or settings.server.port

    console.print(f"[dim]Serving MarketLens API on http://{host}:{port}[/dim]")
    uvicorn.run(
        "marketlens.api.app:create_app",
        factory=True,
        host=host,
        port=port,
        reload=reload,
    )
