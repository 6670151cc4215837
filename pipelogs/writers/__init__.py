"""Log writer protocol — the only output surface of the aggregation engine.

Writers decide how lines reach the user: discarded, buffered in memory,
or forwarded to a terminal.  The engine calls ``write_log`` for single
lines (headers, warnings, archived logs) and ``stream_log`` to pipe a
live container's output.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from pipelogs.models.resources import BuildPod, StepContainer


@runtime_checkable
class LogWriter(Protocol):
    """Protocol that every log writer must implement."""

    def write_log(self, line: str) -> None:
        """Write a single buffered line.

        Raises on I/O failure; the engine wraps the error in
        ``LogWriteError``.
        """
        ...

    def stream_log(self, namespace: str, pod: BuildPod, container: StepContainer) -> None:
        """Pipe the output of *container* until it is exhausted.

        Blocks for as long as the container keeps producing output.
        """
        ...
