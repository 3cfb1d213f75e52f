"""
Dashdeck CLI - Init command.

Create the workspace directory layout.
"""

import typer
from rich.console import Console

from dashdeck.cli.context import get_layout
from dashdeck.cli.errors import ExitCode, print_error
from dashdeck.core.workspace.layout import ensure_workspace_layout

console = Console()


def main(ctx: typer.Context) -> None:
    """
    Create the workspace directories if they are missing.

    Safe to run repeatedly: existing directories and files are left alone.

    Examples:
        dashdeck init
        dashdeck --workspace ~/workspace init
    """
    layout = get_layout(ctx)
    try:
        created = ensure_workspace_layout(layout)
    except OSError as e:
        print_error(f"Could not create workspace at {layout.root}", reason=str(e))
        raise typer.Exit(ExitCode.GENERAL_ERROR)

    if not created:
        console.print(f"[green]✓[/green] Workspace already initialized: {layout.root}")
        return

    console.print(f"[green]✓[/green] Initialized workspace: {layout.root}")
    for path in created:
        console.print(f"  [dim]created[/dim] {path.relative_to(layout.root)}")
