"""
Shared helpers for reading the global CLI options.

The main callback stores ``--debug`` and ``--workspace`` in ``ctx.obj``;
subcommands resolve the workspace through here so that the option wins
over the configured location.
"""

from pathlib import Path

import typer

from dashdeck.core.config import load_config
from dashdeck.core.workspace.layout import WorkspaceLayout


def is_debug(ctx: typer.Context) -> bool:
    return bool(ctx.obj.get("debug", False)) if ctx.obj else False


def get_workspace_root(ctx: typer.Context) -> Path:
    """Workspace root from ``--workspace``, falling back to the config."""
    override = ctx.obj.get("workspace") if ctx.obj else None
    if override is not None:
        return Path(override).expanduser()
    return load_config().workspace


def get_layout(ctx: typer.Context) -> WorkspaceLayout:
    return WorkspaceLayout(get_workspace_root(ctx))
