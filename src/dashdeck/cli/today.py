"""
Dashdeck CLI - Today command.

Show what needs attention today: overdue work, tasks due today, open
high-priority tasks and the checklist from today's daily note.
"""

from datetime import date, datetime, timezone

import typer
from rich.console import Console
from rich.table import Table

from dashdeck.cli.context import get_layout
from dashdeck.cli.errors import ExitCode, print_error, print_workspace_error
from dashdeck.core.dashboard.client import DashboardClient, DashboardClientError
from dashdeck.core.notes import DailyNote, DailyNotesReader
from dashdeck.core.workspace import derive
from dashdeck.core.workspace.aggregator import WorkspaceAggregator
from dashdeck.core.workspace.models import Task, TaskStatus, WorkspaceSnapshot

console = Console()

STATUS_COLORS = {
    TaskStatus.TODO: "white",
    TaskStatus.IN_PROGRESS: "yellow",
    TaskStatus.BLOCKED: "red",
    TaskStatus.DONE: "green",
    TaskStatus.CANCELLED: "dim",
}


def _load_local(ctx: typer.Context, today: date) -> tuple[WorkspaceSnapshot, DailyNote | None]:
    layout = get_layout(ctx)
    try:
        snapshot = WorkspaceAggregator(layout).load_snapshot()
    except OSError as e:
        print_workspace_error(layout.root, e)
        raise typer.Exit(ExitCode.GENERAL_ERROR)
    return snapshot, DailyNotesReader(layout).get_note(today)


def _load_remote(url: str, today: date) -> tuple[WorkspaceSnapshot, DailyNote | None]:
    try:
        with DashboardClient(url) as client:
            client.refresh()
            return client.snapshot, client.get_note(today)
    except DashboardClientError as e:
        print_error(f"Could not reach dashboard at {url}", reason=str(e))
        raise typer.Exit(ExitCode.GENERAL_ERROR)


def _task_table(title: str, tasks: list[Task]) -> Table:
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("ID", style="dim")
    table.add_column("Pri", width=6)
    table.add_column("Status", width=12)
    table.add_column("Due", width=10)
    table.add_column("Title", overflow="fold")

    for task in tasks:
        color = STATUS_COLORS.get(task.status, "white")
        table.add_row(
            task.id,
            task.priority.value,
            f"[{color}]{task.status.value}[/{color}]",
            task.due_date.isoformat() if task.due_date else "",
            task.title,
        )
    return table


def _print_note(note: DailyNote) -> None:
    console.print(f"\n[bold]Daily note[/bold] [dim]{note.path}[/dim]")
    for block in note.blocks:
        console.print(
            f"  {block.start:%H:%M}-{block.end:%H:%M}  {block.title} "
            f"[dim]({block.type.value})[/dim]"
        )
    for item in note.items:
        mark = "[green]✓[/green]" if item.done else "[ ]"
        console.print(f"  {mark} {item.text}", highlight=False)
    if note.blocks:
        console.print(f"[dim]Focus time: {note.focus_minutes} min[/dim]")


def today(
    ctx: typer.Context,
    url: str | None = typer.Option(
        None,
        "--url",
        "-u",
        help="Read from a running dashboard server instead of the workspace files",
    ),
) -> None:
    """
    Show overdue, due-today and high-priority tasks.

    Examples:
        dashdeck today
        dashdeck today --url http://127.0.0.1:8080
    """
    now = datetime.now(timezone.utc)
    day = derive.today_of(now)

    if url:
        snapshot, note = _load_remote(url, day)
    else:
        snapshot, note = _load_local(ctx, day)

    overdue = derive.overdue_tasks(snapshot, now)
    due_today = derive.tasks_due_today(snapshot, now)
    urgent = [
        t
        for t in derive.high_priority_tasks(snapshot)
        if not t.is_done and t not in overdue and t not in due_today
    ]

    console.print(f"[bold cyan]Today[/bold cyan] {day.isoformat()}")

    if not (overdue or due_today or urgent):
        console.print("[green]Nothing due.[/green]")
    if overdue:
        console.print(_task_table("Overdue", overdue))
    if due_today:
        console.print(_task_table("Due Today", due_today))
    if urgent:
        console.print(_task_table("High Priority", urgent))

    if note is not None:
        _print_note(note)
