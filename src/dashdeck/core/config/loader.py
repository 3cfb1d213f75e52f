"""
Configuration loading.

Three layers are merged, later ones winning:

    built-in defaults < $XDG_CONFIG_HOME/dashdeck/config.json < environment

The result is validated as a DashdeckConfig and cached for the life of
the process; call clear_cache() after changing files or variables.
"""

import json
import logging
import os
from collections.abc import Callable
from pathlib import Path
from typing import Any

from .models import DashdeckConfig

logger = logging.getLogger(__name__)

_config_cache: DashdeckConfig | None = None

# Checked in order; the first one set wins.
WORKSPACE_ENV_VARS = ("DASHDECK_WORKSPACE", "WORKSPACE_PATH")

# env var -> (server key, converter)
SERVER_ENV_VARS: dict[str, tuple[str, Callable[[str], Any]]] = {
    "DASHDECK_HOST": ("host", str),
    "DASHDECK_PORT": ("port", int),
}


def get_xdg_config_home() -> Path:
    """$XDG_CONFIG_HOME, or ~/.config when it is unset or empty."""
    if xdg_home := os.environ.get("XDG_CONFIG_HOME"):
        return Path(xdg_home)
    return Path.home() / ".config"


def get_user_config_path() -> Path:
    return get_xdg_config_home() / "dashdeck" / "config.json"


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """
    Merge ``override`` into a copy of ``base``.

    Nested dicts are merged key by key; any other value in ``override``
    replaces the one in ``base``.

    Example:
        >>> deep_merge({"server": {"port": 8080, "host": "x"}}, {"server": {"port": 9000}})
        {'server': {'port': 9000, 'host': 'x'}}
    """
    merged = dict(base)
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            merged[key] = deep_merge(current, value)
        else:
            merged[key] = value
    return merged


def load_json_file(path: Path) -> dict[str, Any] | None:
    """
    Read a JSON config file.

    Returns:
        The parsed object, or None when the file is missing, unreadable,
        not valid JSON or not a JSON object
    """
    if not path.is_file():
        return None

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, OSError, UnicodeDecodeError) as e:
        logger.warning("Ignoring unreadable config file %s: %s", path, e)
        return None

    if not isinstance(data, dict):
        logger.warning("Ignoring config file %s: expected a JSON object", path)
        return None
    return data


def apply_env_overrides(config_dict: dict[str, Any]) -> dict[str, Any]:
    """
    Overlay DASHDECK_* environment variables on a config dict.

    DASHDECK_WORKSPACE (or the older WORKSPACE_PATH) sets ``workspace``;
    DASHDECK_HOST and DASHDECK_PORT set ``server.host`` and ``server.port``.
    A value that cannot be converted is logged and skipped.
    """
    overrides: dict[str, Any] = {}

    workspace = next((os.environ[v] for v in WORKSPACE_ENV_VARS if os.environ.get(v)), None)
    if workspace:
        overrides["workspace"] = workspace

    server: dict[str, Any] = {}
    for var, (key, convert) in SERVER_ENV_VARS.items():
        raw = os.environ.get(var)
        if not raw:
            continue
        try:
            server[key] = convert(raw)
        except ValueError:
            logger.warning("Invalid %s value '%s', ignoring", var, raw)
    if server:
        overrides["server"] = server

    return deep_merge(config_dict, overrides)


def get_default_config() -> dict[str, Any]:
    return {"server": {"host": "127.0.0.1", "port": 8080}}


def load_config(use_cache: bool = True) -> DashdeckConfig:
    """
    Build the effective configuration.

    Args:
        use_cache: Reuse the config from an earlier call if there is one

    Raises:
        ValidationError: If the merged values do not form a valid config
    """
    global _config_cache

    if use_cache and _config_cache is not None:
        return _config_cache

    merged = get_default_config()
    if user_config := load_json_file(get_user_config_path()):
        merged = deep_merge(merged, user_config)
    merged = apply_env_overrides(merged)

    _config_cache = DashdeckConfig.model_validate(merged)
    logger.debug("Loaded config: workspace=%s", _config_cache.workspace)
    return _config_cache


def clear_cache() -> None:
    """Forget the cached config so the next load_config() re-reads it."""
    global _config_cache
    _config_cache = None
