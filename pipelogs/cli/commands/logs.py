"""``pipelogs logs SNAPSHOT BUILD`` — stream the logs of one build.

Live build pods are streamed in creation order; when they are gone the
archived copy is read from the storage bucket instead.
"""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape

from pipelogs.cli.commands.fetch import credential_resolver
from pipelogs.cli.snapshot import ClusterSnapshot
from pipelogs.config import LogsSettings
from pipelogs.core.aggregator import BuildLogAggregator
from pipelogs.core.deadline import Deadline
from pipelogs.core.errors import (
    DeadlineExceededError,
    LogsUnavailableError,
    NotFoundError,
    PipelineLogsError,
)
from pipelogs.writers.console import ConsoleLogWriter

console = Console()


def logs_cmd(
    snapshot_path: Path = typer.Argument(
        ...,
        exists=True,
        dir_okay=False,
        help="Cluster snapshot JSON file.",
    ),
    build_name: str = typer.Argument(
        ...,
        help="Build name as listed by 'pipelogs builds'.",
    ),
    namespace: str | None = typer.Option(
        None, "--namespace", "-n", help="Namespace (default from PIPELOGS_NAMESPACE)."
    ),
    timeout: float | None = typer.Option(
        None,
        "--timeout",
        "-t",
        help="Give up after this many seconds (default: no limit).",
    ),
    poll_interval: float | None = typer.Option(
        None, "--poll", help="Seconds between pod checks while waiting."
    ),
    no_color: bool = typer.Option(False, "--no-color", help="Disable colored headers."),
    username: str | None = typer.Option(
        None, "--username", envvar="PIPELOGS_BUCKET_USERNAME", help="Bucket username."
    ),
    token: str | None = typer.Option(
        None, "--token", envvar="PIPELOGS_BUCKET_TOKEN", help="Bucket access token."
    ),
) -> None:
    """Stream the logs of a build, falling back to the archived copy."""
    overrides: dict[str, object] = {}
    if namespace is not None:
        overrides["namespace"] = namespace
    if poll_interval is not None:
        overrides["poll_interval_seconds"] = poll_interval
    settings = LogsSettings(**overrides)

    snapshot = ClusterSnapshot.load(snapshot_path)
    aggregator = BuildLogAggregator(
        snapshot.activity_store(),
        snapshot.run_store(),
        snapshot.pod_store(),
        credential_resolver(username, token),
        settings=settings,
    )
    writer = ConsoleLogWriter(
        snapshot.log_source(), console=console, color=settings.color and not no_color
    )
    deadline = Deadline(timeout if timeout is not None else settings.stream_timeout_seconds)

    try:
        aggregator.stream_build_logs(build_name, writer, deadline=deadline)
    except NotFoundError as exc:
        console.print(f"[bold red]Build not found:[/bold red] {escape(str(exc))}")
        names, _ = aggregator.list_builds()
        if names:
            console.print("\n[bold]Available builds:[/bold]")
            for name in names[:10]:
                console.print(f"  [cyan]{escape(name)}[/cyan]")
            if len(names) > 10:
                console.print(f"  [dim]... and {len(names) - 10} more[/dim]")
        raise typer.Exit(code=1)
    except LogsUnavailableError as exc:
        console.print(f"[bold yellow]Logs unavailable:[/bold yellow] {escape(str(exc))}")
        raise typer.Exit(code=2)
    except DeadlineExceededError as exc:
        console.print(f"[bold red]Timed out:[/bold red] {escape(str(exc))}")
        raise typer.Exit(code=3)
    except PipelineLogsError as exc:
        console.print(f"[bold red]Failed:[/bold red] {escape(str(exc))}")
        raise typer.Exit(code=1)
