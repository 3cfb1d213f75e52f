"""
Dashdeck CLI - Main application entry point.

This module sets up the Typer CLI application with all subcommands.
"""

import logging
from pathlib import Path

import typer
from rich.console import Console

from dashdeck import __version__
from dashdeck.cli import dashboard, init_cmd, stats, task, today
from dashdeck.core.config.env import load_layered_env

# Help panel names for command grouping
PANEL_SERVE = "Serve the Dashboard"
PANEL_WORKSPACE = "See Your Workspace"
PANEL_TASKS = "Work with Tasks"

# Create the main Typer app
app = typer.Typer(
    name="dashdeck",
    help="Personal productivity dashboard over a file-backed workspace",
    no_args_is_help=True,
    add_completion=True,
    context_settings={"help_option_names": ["--help", "-h"]},
)

console = Console()


@app.callback()
def main(
    ctx: typer.Context,
    debug: bool = typer.Option(
        False,
        "--debug",
        help="Enable debug output with detailed logging",
    ),
    workspace: Path | None = typer.Option(
        None,
        "--workspace",
        "-w",
        help="Workspace root (default: DASHDECK_WORKSPACE or ~/.openclaw/workspace)",
    ),
) -> None:
    """
    Dashdeck - tasks, projects, facts and daily notes in one dashboard.

    Quick Start:
        1. dashdeck init             # Create the workspace directories
        2. dashdeck serve            # Start the API for the dashboard UI
        3. dashdeck today            # What needs attention today

    Working with tasks:
        dashdeck task list --status todo
        dashdeck task status task-001 done
        dashdeck task assign task-001 alex
    """
    # Load layered env files early so DASHDECK_* settings reach the config.
    # Precedence: OS env > project .env > user .env
    load_layered_env()

    if debug:
        logging.basicConfig(level=logging.DEBUG)

    # Store global options in context for subcommands
    ctx.obj = {"debug": debug, "workspace": workspace}


app.command(name="serve", rich_help_panel=PANEL_SERVE)(dashboard.serve)
app.command(name="init", rich_help_panel=PANEL_WORKSPACE)(init_cmd.main)
app.command(name="today", rich_help_panel=PANEL_WORKSPACE)(today.today)
app.command(name="stats", rich_help_panel=PANEL_WORKSPACE)(stats.stats)
app.command(name="projects", rich_help_panel=PANEL_WORKSPACE)(stats.projects)
app.add_typer(task.app, name="task", rich_help_panel=PANEL_TASKS)


@app.command()
def version() -> None:
    """Show dashdeck version and exit."""
    console.print(f"dashdeck version {__version__}")
    raise typer.Exit(0)


def cli_main() -> None:
    """Main CLI entry point."""
    app()


__all__ = ["app", "cli_main"]
