"""``pipelogs builds SNAPSHOT`` — list the builds that have pipeline runs."""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from pipelogs.cli.snapshot import ClusterSnapshot
from pipelogs.config import LogsSettings
from pipelogs.core.errors import PipelineLogsError
from pipelogs.core.matcher import get_pipelines_with_active_activity

console = Console()


def builds_cmd(
    snapshot_path: Path = typer.Argument(
        ...,
        exists=True,
        dir_okay=False,
        help="Cluster snapshot JSON file.",
    ),
    filters: list[str] | None = typer.Option(
        None,
        "--filter",
        "-f",
        help="Label filter such as owner=acme or repo=widgets (repeatable).",
    ),
    namespace: str | None = typer.Option(
        None, "--namespace", "-n", help="Namespace to search (default from PIPELOGS_NAMESPACE)."
    ),
) -> None:
    """List matched builds, most recent pipeline run first."""
    namespace = namespace or LogsSettings().namespace
    snapshot = ClusterSnapshot.load(snapshot_path)
    try:
        names, by_name = get_pipelines_with_active_activity(
            snapshot.activity_store(), snapshot.run_store(), namespace, filters or []
        )
    except PipelineLogsError as exc:
        console.print(f"[bold red]Query failed:[/bold red] {escape(str(exc))}")
        raise typer.Exit(code=1)

    if not names:
        console.print("[dim]No builds with pipeline runs found.[/dim]")
        return

    table = Table(title=f"Builds in {namespace}")
    table.add_column("Build", style="cyan")
    table.add_column("Activity")
    table.add_column("Phase")
    table.add_column("Archived", justify="center")
    for name in names:
        activity = by_name[name]
        archived = "[green]Yes[/green]" if activity.build_logs_url else "[dim]No[/dim]"
        table.add_row(name, activity.name, activity.phase.value, archived)
    console.print(table)
