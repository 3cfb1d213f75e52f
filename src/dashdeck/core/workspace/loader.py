"""
Record loading helpers for the workspace.

Every helper here treats a missing file or directory as an empty result.
Malformed content (bad JSON, a record that fails validation, an unreadable
file) is logged and reported as ``None`` so one bad record never aborts a
whole load.
"""

import json
import logging
from pathlib import Path
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


def read_json(path: Path) -> Any | None:
    """
    Read and parse a JSON file.

    Args:
        path: File to read

    Returns:
        Parsed JSON value, or None if the file is missing or malformed
    """
    if not path.is_file():
        return None

    try:
        with path.open(encoding="utf-8") as f:
            return json.load(f)
    except json.JSONDecodeError as e:
        logger.warning("Malformed JSON in %s: %s", path, e)
        return None
    except (OSError, UnicodeDecodeError) as e:
        logger.warning("Failed to read %s: %s", path, e)
        return None


def read_text(path: Path) -> str | None:
    """Read a text file, returning None if it is missing or unreadable."""
    if not path.is_file():
        return None

    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.warning("Failed to read %s: %s", path, e)
        return None


def validate_record(
    data: Any, model: type[ModelT], source: Path | str
) -> ModelT | None:
    """
    Validate already-parsed data against a record model.

    Args:
        data: Parsed JSON value
        model: Pydantic model class to validate against
        source: Where the data came from (for log messages)

    Returns:
        Validated model, or None if the data does not fit the model
    """
    if not isinstance(data, dict):
        logger.warning("Expected a JSON object in %s, got %s", source, type(data).__name__)
        return None

    try:
        return model.model_validate(data)
    except ValidationError as e:
        logger.warning(
            "Invalid %s record in %s: %s", model.__name__, source, e.errors()[0]["msg"]
        )
        return None


def load_record(path: Path, model: type[ModelT]) -> ModelT | None:
    """
    Load a single JSON record file as a typed model.

    Example:
        >>> task = load_record(Path("tasks/task-001.json"), Task)
        >>> task.title if task else None
        'Write release notes'
    """
    data = read_json(path)
    if data is None:
        return None
    return validate_record(data, model, path)


def list_files(directory: Path, suffix: str | None = None) -> list[str]:
    """
    List file names in a directory, sorted by name.

    Args:
        directory: Directory to list
        suffix: Only include names ending with this suffix (e.g. ".json")

    Returns:
        Sorted file names, or an empty list if the directory does not exist

    Raises:
        OSError: If the directory exists but cannot be listed
    """
    if not directory.is_dir():
        return []

    names = [
        entry.name
        for entry in directory.iterdir()
        if entry.is_file() and not entry.name.startswith(".")
    ]
    if suffix:
        names = [name for name in names if name.endswith(suffix)]
    return sorted(names)


def list_dirs(directory: Path) -> list[str]:
    """List subdirectory names, sorted. Missing directory gives an empty list."""
    if not directory.is_dir():
        return []

    return sorted(
        entry.name
        for entry in directory.iterdir()
        if entry.is_dir() and not entry.name.startswith(".")
    )
