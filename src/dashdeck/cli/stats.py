"""
Dashdeck CLI - Stats and projects commands.
"""

import json
from datetime import datetime, timezone

import typer
from rich.console import Console
from rich.table import Table

from dashdeck.cli.context import get_layout
from dashdeck.cli.errors import (
    ExitCode,
    print_project_not_found_error,
    print_workspace_error,
)
from dashdeck.core.workspace import derive
from dashdeck.core.workspace.aggregator import WorkspaceAggregator
from dashdeck.core.workspace.models import Project, ProjectStatus, WorkspaceSnapshot

console = Console()

PROJECT_STATUS_COLORS = {
    ProjectStatus.ACTIVE: "green",
    ProjectStatus.PAUSED: "yellow",
    ProjectStatus.COMPLETED: "cyan",
    ProjectStatus.ARCHIVED: "dim",
}


def _load_snapshot(ctx: typer.Context) -> WorkspaceSnapshot:
    layout = get_layout(ctx)
    try:
        return WorkspaceAggregator(layout).load_snapshot()
    except OSError as e:
        print_workspace_error(layout.root, e)
        raise typer.Exit(ExitCode.GENERAL_ERROR)


def _progress_bar(percentage: int, width: int = 10) -> str:
    filled = percentage * width // 100
    return "█" * filled + "░" * (width - filled)


def stats(
    ctx: typer.Context,
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Output as JSON (same keys as the API)",
    ),
) -> None:
    """
    Show task, project and fact counts.

    Examples:
        dashdeck stats
        dashdeck stats --json
    """
    snapshot = _load_snapshot(ctx)
    result = derive.dashboard_stats(snapshot, datetime.now(timezone.utc))

    if json_output:
        console.print(json.dumps(result.model_dump(by_alias=True), indent=2))
        return

    table = Table(title="Workspace", show_header=True, header_style="bold cyan")
    table.add_column("Metric")
    table.add_column("Count", justify="right")

    rows = [
        ("Tasks", result.total_tasks),
        ("  completed", result.completed_tasks),
        ("  in progress", result.in_progress_tasks),
        ("  todo", result.todo_tasks),
        ("  blocked", result.blocked_tasks),
        ("  overdue", result.overdue_tasks),
        ("  due today", result.due_today_tasks),
        ("  high priority", result.high_priority_tasks),
        ("  unassigned", result.unassigned_tasks),
        ("Projects", result.total_projects),
        ("  active", result.active_projects),
        ("Facts", result.total_facts),
    ]
    for label, count in rows:
        table.add_row(label, str(count))

    console.print(table)
    completion = derive.percentage(result.completed_tasks, result.total_tasks)
    console.print(f"\n[dim]Completion: {completion}%[/dim]")


def projects(
    ctx: typer.Context,
    project_id: str | None = typer.Argument(
        None,
        help="Show milestones of this project instead of the list",
    ),
    active_only: bool = typer.Option(
        False,
        "--active",
        "-a",
        help="Only show active projects",
    ),
) -> None:
    """
    List projects with task progress, or the milestones of one project.

    Projects are ordered by priority, then most recently updated.

    Examples:
        dashdeck projects
        dashdeck projects --active
        dashdeck projects web-redesign
    """
    snapshot = _load_snapshot(ctx)

    if project_id is not None:
        project = derive.find_project(snapshot, project_id)
        if project is None:
            print_project_not_found_error(project_id)
            raise typer.Exit(ExitCode.GENERAL_ERROR)
        _show_project(snapshot, project)
        return

    shown = derive.active_projects(snapshot) if active_only else snapshot.projects

    if not shown:
        console.print("[dim]No projects found.[/dim]")
        return

    table = Table(title="Projects", show_header=True, header_style="bold cyan")
    table.add_column("ID", style="dim")
    table.add_column("Name", overflow="fold")
    table.add_column("Status", width=10)
    table.add_column("Pri", width=6)
    table.add_column("Progress", width=22)
    table.add_column("Milestones", justify="right")

    for project in shown:
        progress = derive.project_progress(snapshot, project.id)
        color = PROJECT_STATUS_COLORS.get(project.status, "white")
        milestones_done = sum(
            1
            for m in project.milestones
            if derive.milestone_progress(snapshot, m).percentage == 100
        )
        table.add_row(
            project.id,
            project.name,
            f"[{color}]{project.status.value}[/{color}]",
            project.priority.value,
            f"{_progress_bar(progress.percentage)} {progress.completed}/{progress.total}",
            f"{milestones_done}/{len(project.milestones)}",
        )

    console.print(table)
    console.print(f"\n[dim]Total: {len(shown)} projects[/dim]")


def _show_project(snapshot: WorkspaceSnapshot, project: Project) -> None:
    progress = derive.project_progress(snapshot, project.id)
    color = PROJECT_STATUS_COLORS.get(project.status, "white")

    console.print(f"[bold]{project.name}[/bold] [dim]({project.id})[/dim]")
    console.print(
        f"Status: [{color}]{project.status.value}[/{color}]  "
        f"Priority: {project.priority.value}  "
        f"Tasks: {progress.completed}/{progress.total} ({progress.percentage}%)"
    )
    if project.summary:
        console.print(f"\n{project.summary.strip()}")

    if not project.milestones:
        console.print("\n[dim]No milestones.[/dim]")
        return

    table = Table(title="Milestones", show_header=True, header_style="bold cyan")
    table.add_column("ID", style="dim")
    table.add_column("Name", overflow="fold")
    table.add_column("Due", width=10)
    table.add_column("Progress", width=22)

    for milestone in project.milestones:
        done = derive.milestone_progress(snapshot, milestone)
        table.add_row(
            milestone.id,
            milestone.name,
            milestone.due_date.isoformat() if milestone.due_date else "-",
            f"{_progress_bar(done.percentage)} {done.completed}/{done.total}",
        )

    console.print()
    console.print(table)
