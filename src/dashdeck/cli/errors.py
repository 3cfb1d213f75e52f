"""
Exit codes and error output shared by the dashdeck commands.

Errors are printed as a red problem line, an optional dim reason and an
optional suggested command.
"""

from enum import IntEnum
from pathlib import Path

from rich.console import Console

console = Console()


class ExitCode(IntEnum):
    """Process exit codes."""

    SUCCESS = 0
    """Command finished normally."""

    GENERAL_ERROR = 1
    """Generic error, including a task or note that does not exist."""

    USER_ERROR = 2
    """Bad arguments or option combinations."""


def print_error(
    problem: str,
    *,
    reason: str | None = None,
    solution: str | None = None,
) -> None:
    """
    Print an error to the console.

    Args:
        problem: One line saying what failed
        reason: Underlying cause, if known
        solution: Command the user can run next

    Example:
        >>> print_error(
        ...     "Task not found: task-042",
        ...     solution="dashdeck task list",
        ... )
    """
    console.print(f"[red]Error:[/red] {problem}")

    if reason:
        console.print(f"[dim]{reason}[/dim]")

    if solution:
        console.print(f"[cyan]→ Try:[/cyan] {solution}")


def print_task_not_found_error(task_id: str) -> None:
    """Report an unknown task id."""
    print_error(
        f"Task not found: {task_id}",
        reason="No tasks/<id>.json file with that id exists in the workspace",
        solution="dashdeck task list  # to see available tasks",
    )


def print_project_not_found_error(project_id: str) -> None:
    print_error(
        f"Project not found: {project_id}",
        solution="dashdeck projects  # to see available projects",
    )


def print_workspace_error(root: Path, error: Exception) -> None:
    """Report a workspace that could not be loaded."""
    print_error(
        f"Could not read workspace at {root}",
        reason=str(error),
        solution="dashdeck --workspace <path> ...  # or set DASHDECK_WORKSPACE",
    )
