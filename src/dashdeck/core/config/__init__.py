"""
Configuration models and loading.

Pydantic models for dashdeck configuration with layered merging:
defaults < user config < env vars.
"""

from .env import load_layered_env
from .loader import (
    clear_cache,
    get_user_config_path,
    get_xdg_config_home,
    load_config,
)
from .models import DEFAULT_WORKSPACE, DashdeckConfig, ServerConfig

__all__ = [
    # Models
    "DEFAULT_WORKSPACE",
    "DashdeckConfig",
    "ServerConfig",
    # Loader functions
    "clear_cache",
    "get_user_config_path",
    "get_xdg_config_home",
    "load_config",
    "load_layered_env",
]
