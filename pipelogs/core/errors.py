"""Error taxonomy for build log aggregation.

Every error carries the identity it concerns (activity, namespace, URL) so
callers can act on it without the engine retrying anything itself.
Failed build pods are not errors; they are reported as warning lines.
"""

from __future__ import annotations


class PipelineLogsError(RuntimeError):
    """Base class for all pipelogs errors."""


class NotFoundError(PipelineLogsError):
    """Raised when a requested activity or build name does not exist."""

    def __init__(self, message: str, *, name: str = "") -> None:
        super().__init__(message)
        self.name = name


class PlatformQueryError(PipelineLogsError):
    """Raised when a query against an activity, run or pod store fails."""

    def __init__(self, message: str, *, namespace: str = "", resource: str = "") -> None:
        super().__init__(message)
        self.namespace = namespace
        self.resource = resource


class LogWriteError(PipelineLogsError):
    """Raised when the log writer cannot accept a line or a stream."""


class InvalidContainerTransitionError(PipelineLogsError):
    """Raised when a container log state transition is not valid."""


class LogsUnavailableError(PipelineLogsError):
    """Raised when no build pod was ever found for an activity.

    The pods have most likely been garbage collected; callers should
    fall back to the persisted copy at ``logs_url`` when one exists.
    """

    def __init__(
        self,
        message: str,
        *,
        activity_name: str = "",
        logs_url: str | None = None,
    ) -> None:
        super().__init__(message)
        self.activity_name = activity_name
        self.logs_url = logs_url


class FallbackFetchError(PipelineLogsError):
    """Raised when the persisted log copy cannot be read."""

    def __init__(self, message: str, *, url: str) -> None:
        super().__init__(f"{message} (source: {url})")
        self.url = url


class DeadlineExceededError(PipelineLogsError):
    """Raised when a deadline expires or is cancelled mid-aggregation."""

    def __init__(self, message: str, *, found_logs: bool = False) -> None:
        super().__init__(message)
        self.found_logs = found_logs
