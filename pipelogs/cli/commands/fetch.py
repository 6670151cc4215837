"""``pipelogs fetch URL`` — print an archived build log from the storage bucket."""

from __future__ import annotations

import typer
from rich.console import Console
from rich.markup import escape

from pipelogs.clients import BucketCredentials
from pipelogs.clients.memory import StaticCredentialResolver
from pipelogs.config import LogsSettings
from pipelogs.core.errors import PipelineLogsError
from pipelogs.core.persisted import stream_pipeline_persistent_logs
from pipelogs.writers.console import ConsoleLogWriter

console = Console()


def credential_resolver(
    username: str | None, token: str | None, host: str | None = None
) -> StaticCredentialResolver:
    """Resolver for credentials given on the command line (none if no token)."""
    if not token:
        return StaticCredentialResolver(None)
    return StaticCredentialResolver(
        BucketCredentials(username=username or "oauth2", token=token, host=host)
    )


def fetch_cmd(
    logs_url: str = typer.Argument(..., help="URL of the archived build log."),
    timeout: float | None = typer.Option(
        None,
        "--timeout",
        "-t",
        help="Seconds the whole read may take (default from PIPELOGS_BUCKET_READ_TIMEOUT_SECONDS).",
    ),
    username: str | None = typer.Option(
        None, "--username", envvar="PIPELOGS_BUCKET_USERNAME", help="Bucket username."
    ),
    token: str | None = typer.Option(
        None, "--token", envvar="PIPELOGS_BUCKET_TOKEN", help="Bucket access token."
    ),
) -> None:
    """Read an archived build log and print it."""
    settings = LogsSettings()
    writer = ConsoleLogWriter(console=console, color=settings.color)
    try:
        stream_pipeline_persistent_logs(
            writer,
            logs_url,
            credential_resolver(username, token),
            timeout=timeout if timeout is not None else settings.bucket_read_timeout_seconds,
        )
    except PipelineLogsError as exc:
        console.print(f"[bold red]Fetch failed:[/bold red] {escape(str(exc))}")
        raise typer.Exit(code=1)

