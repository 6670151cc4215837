"""pipelogs data models — all Pydantic v2, all frozen (immutable)."""

from pipelogs.models.activity import ActivityPhase, PipelineActivity
from pipelogs.models.resources import (
    BuildPod,
    BuildPodInfo,
    ContainerPhase,
    PipelineRun,
    PodPhase,
    RunParam,
    StepContainer,
)
from pipelogs.models.streaming import (
    VALID_CONTAINER_TRANSITIONS,
    ContainerLogRecord,
    ContainerLogState,
    LogStreamSummary,
)

__all__ = [
    # activity
    "ActivityPhase",
    "PipelineActivity",
    # resources
    "BuildPod",
    "BuildPodInfo",
    "ContainerPhase",
    "PipelineRun",
    "PodPhase",
    "RunParam",
    "StepContainer",
    # streaming
    "VALID_CONTAINER_TRANSITIONS",
    "ContainerLogRecord",
    "ContainerLogState",
    "LogStreamSummary",
]
