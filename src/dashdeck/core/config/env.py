"""
Environment file loading.

dashdeck's workspace location and server bind come from DASHDECK_*
variables, which may be seeded from .env files:

    process environment > ./.env.local > ./.env > ~/.config/dashdeck/.env

Nothing loaded from a file ever replaces a variable the process already
had when loading started.
"""

import logging
import os
from collections.abc import Iterable
from pathlib import Path

from dotenv import dotenv_values

logger = logging.getLogger(__name__)


def default_user_env_paths() -> list[Path]:
    xdg_home = os.environ.get("XDG_CONFIG_HOME") or str(Path.home() / ".config")
    return [Path(xdg_home) / "dashdeck" / ".env"]


def default_local_env_paths(cwd: Path) -> list[Path]:
    return [cwd / ".env", cwd / ".env.local"]


def read_env_file(path: Path) -> dict[str, str]:
    """Key/value pairs of an env file; keys without a value are dropped."""
    if not path.is_file():
        return {}
    return {k: v for k, v in dotenv_values(path).items() if k and v is not None}


def load_layered_env(
    *,
    cwd: Path | None = None,
    user_env_paths: Iterable[Path] | None = None,
    local_env_paths: Iterable[Path] | None = None,
) -> dict[str, str]:
    """
    Seed ``os.environ`` from the user and working-directory env files.

    Later files win over earlier ones, and the working-directory files win
    over the user file, but only for keys that were not in the process
    environment to begin with.

    Args:
        cwd: Directory holding the local env files (defaults to the cwd)
        user_env_paths: Override the user env file locations
        local_env_paths: Override the local env file locations

    Returns:
        The variables that were set by this call
    """
    if user_env_paths is None:
        user_env_paths = default_user_env_paths()
    if local_env_paths is None:
        local_env_paths = default_local_env_paths(cwd or Path.cwd())

    preexisting = set(os.environ)
    applied: dict[str, str] = {}

    for path in [*user_env_paths, *local_env_paths]:
        values = read_env_file(Path(path))
        if values:
            logger.debug("Loaded %d variables from %s", len(values), path)
        for key, value in values.items():
            if key not in preexisting:
                applied[key] = value

    os.environ.update(applied)
    return applied
