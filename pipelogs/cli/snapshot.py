"""Cluster snapshots — JSON captures of activities, runs, pods and output.

The CLI replays a snapshot through the in-memory stores, which makes the
aggregation engine usable (and demonstrable) without a live cluster.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict

from pipelogs.clients.memory import (
    InMemoryActivityStore,
    InMemoryPipelineRunStore,
    InMemoryPodLogSource,
    InMemoryPodStore,
)
from pipelogs.models.activity import PipelineActivity
from pipelogs.models.resources import BuildPod, PipelineRun


class ContainerLog(BaseModel):
    """Captured output of one container."""

    model_config = ConfigDict(frozen=True)

    pod: str
    container: str
    lines: list[str] = []


class ClusterSnapshot(BaseModel):
    """Everything the engine reads, captured at one point in time."""

    model_config = ConfigDict(frozen=True)

    activities: list[PipelineActivity] = []
    runs: list[PipelineRun] = []
    pods: list[BuildPod] = []
    logs: list[ContainerLog] = []

    @classmethod
    def load(cls, path: Path) -> ClusterSnapshot:
        return cls.model_validate_json(path.read_text(encoding="utf-8"))

    def activity_store(self) -> InMemoryActivityStore:
        return InMemoryActivityStore(self.activities)

    def run_store(self) -> InMemoryPipelineRunStore:
        return InMemoryPipelineRunStore(self.runs)

    def pod_store(self) -> InMemoryPodStore:
        return InMemoryPodStore(self.pods)

    def log_source(self) -> InMemoryPodLogSource:
        return InMemoryPodLogSource(
            {(log.pod, log.container): list(log.lines) for log in self.logs}
        )
