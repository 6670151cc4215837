"""pipelogs: build log aggregation for pipeline activities.

Given a pipeline activity, pipelogs finds the pipeline runs behind it,
streams the output of their build pods as they progress and, once the
pods have been garbage collected, reads the archived copy from the long
term storage bucket instead.
"""

__version__ = "0.1.0"
__description__ = "Live and archived build log aggregation for pipeline activities"

from pipelogs.core.aggregator import BuildLogAggregator
from pipelogs.core.deadline import Deadline
from pipelogs.core.errors import (
    DeadlineExceededError,
    InvalidContainerTransitionError,
    FallbackFetchError,
    LogsUnavailableError,
    LogWriteError,
    NotFoundError,
    PipelineLogsError,
    PlatformQueryError,
)
from pipelogs.core.matcher import match_activities_to_runs
from pipelogs.core.persisted import stream_pipeline_persistent_logs
from pipelogs.core.tracker import stream_running_build_logs

__all__ = [
    "BuildLogAggregator",
    "Deadline",
    "DeadlineExceededError",
    "InvalidContainerTransitionError",
    "FallbackFetchError",
    "LogWriteError",
    "LogsUnavailableError",
    "NotFoundError",
    "PipelineLogsError",
    "PlatformQueryError",
    "match_activities_to_runs",
    "stream_pipeline_persistent_logs",
    "stream_running_build_logs",
    "__version__",
]
