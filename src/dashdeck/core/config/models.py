"""
Configuration data models for dashdeck.

These models define the structure of ~/.config/dashdeck/config.json,
with validation and type safety via Pydantic.
"""

from pathlib import Path

from pydantic import BaseModel, Field, field_validator

DEFAULT_WORKSPACE = Path.home() / ".openclaw" / "workspace"


class ServerConfig(BaseModel):
    """
    HTTP server settings for ``dashdeck serve``.
    """
    host: str = Field(
        default="127.0.0.1",
        description="Interface to bind the API server to"
    )
    port: int = Field(
        default=8080,
        ge=1,
        le=65535,
        description="Port to run the API server on"
    )
    cors_origins: list[str] = Field(
        default_factory=lambda: ["http://localhost:5173", "http://localhost:3000"],
        description="Browser origins allowed to call the API"
    )


class DashdeckConfig(BaseModel):
    """
    Top-level dashdeck configuration.

    Example:
        >>> config = DashdeckConfig(workspace="~/notes")
        >>> config.workspace.name
        'notes'
    """
    workspace: Path = Field(
        default=DEFAULT_WORKSPACE,
        description="Root directory holding tasks, projects, facts and notes"
    )
    server: ServerConfig = Field(default_factory=ServerConfig)

    @field_validator("workspace", mode="before")
    @classmethod
    def expand_workspace(cls, v: str | Path) -> Path:
        """Expand ``~`` so configs can use home-relative paths."""
        return Path(v).expanduser()
