"""Main Typer application — imports and registers all CLI commands.

Entry point: ``pipelogs`` (configured via pyproject.toml project.scripts).
"""

from __future__ import annotations

import logging

import typer
from rich.console import Console
from rich.logging import RichHandler

from pipelogs.cli.commands.builds import builds_cmd
from pipelogs.cli.commands.fetch import fetch_cmd
from pipelogs.cli.commands.logs import logs_cmd
from pipelogs.config import LogsSettings

app = typer.Typer(
    name="pipelogs",
    help="pipelogs: live and archived build logs for pipeline activities.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    add_completion=False,
)

# Register subcommands
app.command(name="builds", help="List builds that have pipeline runs.")(builds_cmd)
app.command(name="logs", help="Stream the logs of a build.")(logs_cmd)
app.command(name="fetch", help="Print an archived build log.")(fetch_cmd)


def configure_logging(level: str) -> None:
    """Route engine logging through Rich on stderr."""
    root = logging.getLogger()
    for handler in list(root.handlers):
        if isinstance(handler, RichHandler):
            root.removeHandler(handler)
    handler = RichHandler(
        console=Console(stderr=True), rich_tracebacks=True, show_path=False, markup=False
    )
    handler.setFormatter(logging.Formatter("%(message)s"))
    root.addHandler(handler)
    root.setLevel(level.upper())


@app.callback()
def main_callback(
    log_level: str | None = typer.Option(
        None,
        "--log-level",
        help="Logging level (default from PIPELOGS_LOG_LEVEL).",
    ),
) -> None:
    """Configure logging before any subcommand runs."""
    configure_logging(log_level or LogsSettings().log_level)


def main() -> None:
    """CLI entry point."""
    app()


if __name__ == "__main__":
    main()
