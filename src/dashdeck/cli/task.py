"""
Dashdeck CLI - Task commands.

List tasks and edit one field at a time (status, priority or assignee).
Edits are written straight to ``tasks/<id>.json``.
"""

import json
from collections.abc import Callable
from datetime import datetime, timezone

import typer
from rich.console import Console
from rich.table import Table

from dashdeck.cli.context import get_layout
from dashdeck.cli.errors import (
    ExitCode,
    print_error,
    print_task_not_found_error,
    print_workspace_error,
)
from dashdeck.cli.today import STATUS_COLORS
from dashdeck.core.workspace import derive
from dashdeck.core.workspace.aggregator import WorkspaceAggregator
from dashdeck.core.workspace.models import Priority, Task, TaskStatus
from dashdeck.core.workspace.writer import TaskWriter

console = Console()
app = typer.Typer(help="List and update workspace tasks")


def _print_task(task: Task, json_output: bool) -> None:
    if json_output:
        console.print(json.dumps(task.model_dump(mode="json", by_alias=True), indent=2))
        return
    assignee = task.assigned_to or "unassigned"
    console.print(
        f"[green]✓[/green] {task.id}: status={task.status.value} "
        f"priority={task.priority.value} assignee={assignee}"
    )


def _write(
    ctx: typer.Context,
    task_id: str,
    edit: Callable[[TaskWriter], Task | None],
    json_output: bool,
) -> None:
    try:
        updated = edit(TaskWriter(get_layout(ctx)))
    except OSError as e:
        print_error(f"Failed to update task {task_id}", reason=str(e))
        raise typer.Exit(ExitCode.GENERAL_ERROR)

    if updated is None:
        print_task_not_found_error(task_id)
        raise typer.Exit(ExitCode.GENERAL_ERROR)
    _print_task(updated, json_output)


@app.command(name="list")
def list_tasks(
    ctx: typer.Context,
    status: TaskStatus | None = typer.Option(
        None,
        "--status",
        "-s",
        help="Filter by status",
    ),
    priority: Priority | None = typer.Option(
        None,
        "--priority",
        "-p",
        help="Filter by priority",
    ),
    project: str | None = typer.Option(
        None,
        "--project",
        help="Filter by project id",
    ),
    unassigned: bool = typer.Option(
        False,
        "--unassigned",
        help="Only show tasks nobody is assigned to",
    ),
    overdue: bool = typer.Option(
        False,
        "--overdue",
        help="Only show overdue tasks",
    ),
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Output as JSON",
    ),
) -> None:
    """
    List tasks, most recently updated first.

    Examples:
        dashdeck task list
        dashdeck task list --status in_progress
        dashdeck task list --project website --json
        dashdeck task list --overdue
    """
    layout = get_layout(ctx)
    try:
        snapshot = WorkspaceAggregator(layout).load_snapshot()
    except OSError as e:
        print_workspace_error(layout.root, e)
        raise typer.Exit(ExitCode.GENERAL_ERROR)

    tasks = snapshot.tasks
    if overdue:
        tasks = derive.overdue_tasks(snapshot, datetime.now(timezone.utc))
    if status is not None:
        tasks = [t for t in tasks if t.status == status]
    if priority is not None:
        tasks = [t for t in tasks if t.priority == priority]
    if project is not None:
        tasks = [t for t in tasks if t.project_id == project]
    if unassigned:
        tasks = [t for t in tasks if not t.assigned_to]

    if json_output:
        data = [t.model_dump(mode="json", by_alias=True) for t in tasks]
        console.print(json.dumps(data, indent=2))
        return

    if not tasks:
        console.print("[dim]No tasks found.[/dim]")
        return

    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("ID", style="dim")
    table.add_column("Pri", width=6)
    table.add_column("Status", width=12)
    table.add_column("Assignee", width=12)
    table.add_column("Title", overflow="fold")

    for task in tasks:
        color = STATUS_COLORS.get(task.status, "white")
        table.add_row(
            task.id,
            task.priority.value,
            f"[{color}]{task.status.value}[/{color}]",
            task.assigned_to or "",
            task.title,
        )

    console.print(table)
    console.print(f"\n[dim]Total: {len(tasks)} tasks[/dim]")


@app.command()
def status(
    ctx: typer.Context,
    task_id: str = typer.Argument(..., help="Task ID to update"),
    new_status: TaskStatus = typer.Argument(..., help="New status"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """
    Set the status of a task.

    Examples:
        dashdeck task status task-001 done
        dashdeck task status task-002 blocked
    """
    _write(ctx, task_id, lambda w: w.set_task_status(task_id, new_status), json_output)


@app.command()
def priority(
    ctx: typer.Context,
    task_id: str = typer.Argument(..., help="Task ID to update"),
    new_priority: Priority = typer.Argument(..., help="New priority"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """
    Set the priority of a task.

    Examples:
        dashdeck task priority task-001 urgent
    """
    _write(ctx, task_id, lambda w: w.set_task_priority(task_id, new_priority), json_output)


@app.command()
def assign(
    ctx: typer.Context,
    task_id: str = typer.Argument(..., help="Task ID to update"),
    assignee: str | None = typer.Argument(None, help="Person or agent to assign"),
    clear: bool = typer.Option(
        False,
        "--clear",
        help="Remove the current assignee",
    ),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """
    Assign a task, or unassign it with --clear.

    Examples:
        dashdeck task assign task-001 alex
        dashdeck task assign task-001 --clear
    """
    if clear == (assignee is not None):
        print_error(
            "Give either an assignee or --clear",
            solution="dashdeck task assign <task-id> <name>",
        )
        raise typer.Exit(ExitCode.USER_ERROR)
    value = None if clear else assignee
    _write(ctx, task_id, lambda w: w.set_task_assignee(task_id, value), json_output)
