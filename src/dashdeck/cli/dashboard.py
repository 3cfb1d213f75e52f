"""
The `dashdeck serve` command: run the API over a workspace with uvicorn.
"""

import logging
import threading
import time
import webbrowser

import typer
from rich.console import Console

from dashdeck.cli.context import get_layout, is_debug
from dashdeck.cli.errors import ExitCode
from dashdeck.core.config import load_config
from dashdeck.core.workspace.layout import ensure_workspace_layout

console = Console()
logger = logging.getLogger(__name__)

BROWSER_DELAY_SECONDS = 1.5


def serve(
    ctx: typer.Context,
    port: int | None = typer.Option(
        None,
        "--port",
        "-p",
        help="Port to run the server on (default: server.port from config, 8080)",
    ),
    host: str | None = typer.Option(
        None,
        "--host",
        help="Interface to bind (default: server.host from config, 127.0.0.1)",
    ),
    no_browser: bool = typer.Option(
        False,
        "--no-browser",
        help="Do not open the API docs in a browser",
    ),
) -> None:
    """
    Serve the dashboard API.

    Missing workspace directories are created first. Unless --no-browser
    is given, the interactive API docs open once the server is up.

    Every request re-reads the workspace, so edits made on disk show up
    on the next refresh without restarting the server.

    Examples:
        dashdeck serve                     # Serve on 127.0.0.1:8080
        dashdeck serve --port 3001         # Serve on another port
        dashdeck serve --no-browser        # Skip the browser
        dashdeck --workspace ~/notes serve # Serve another workspace
    """
    debug = is_debug(ctx)
    config = load_config()
    bind_host = host or config.server.host
    bind_port = port or config.server.port

    try:
        layout = get_layout(ctx)
        created = ensure_workspace_layout(layout)

        if debug:
            console.print(f"[dim]Workspace: {layout.root}[/dim]")
            for path in created:
                console.print(f"[dim]Created {path}[/dim]")

        import uvicorn

        from dashdeck.core.dashboard.api.app import create_app

        fastapi_app = create_app(cors_origins=config.server.cors_origins)
        # Routes read the workspace location from app state
        fastapi_app.state.workspace_root = layout.root

        url = f"http://{bind_host}:{bind_port}"
        console.print("\n[bold cyan]Starting dashboard server...[/bold cyan]")
        console.print(f"[dim]API: {url}/api/data[/dim]")
        console.print(f"[dim]Docs: {url}/docs[/dim]")

        if not no_browser:

            def open_browser() -> None:
                time.sleep(BROWSER_DELAY_SECONDS)
                console.print(f"\n[green]Opening browser:[/green] {url}")
                webbrowser.open(f"{url}/docs")

            threading.Thread(target=open_browser, daemon=True).start()

        console.print("\n[dim]Press Ctrl+C to stop[/dim]\n")

        uvicorn.run(
            fastapi_app,
            host=bind_host,
            port=bind_port,
            log_level="info" if debug else "warning",
        )

    except KeyboardInterrupt:
        console.print("\n[yellow]Dashboard stopped[/yellow]")
        raise typer.Exit(ExitCode.SUCCESS)
    except Exception as e:
        logger.exception("Dashboard server failed")
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(ExitCode.GENERAL_ERROR)
