"""Orchestration platform resources — pipeline runs, build pods, step containers.

These mirror only the fields pipelogs reads.  They are owned by the
platform; pipelogs observes them and never writes them back.
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from pipelogs.models.labels import (
    LABEL_BRANCH,
    LABEL_BUILD,
    LABEL_LEGACY_OWNER,
    LABEL_LEGACY_REPOSITORY,
    LABEL_OWNER,
    LABEL_PIPELINE_RUN_NAME,
    LABEL_REPOSITORY,
    LABEL_STAGE_NAME,
)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class RunParam(BaseModel):
    """A single declared pipeline run parameter."""

    model_config = ConfigDict(frozen=True)

    name: str
    value: str = ""


class PipelineRun(BaseModel):
    """Runtime instantiation of a pipeline within the orchestration platform."""

    model_config = ConfigDict(frozen=True)

    name: str
    namespace: str = "jx"
    labels: dict[str, str] = {}
    params: list[RunParam] = []
    created_at: datetime = Field(default_factory=_utcnow)


class PodPhase(str, Enum):
    """Lifecycle phase of a build pod."""

    PENDING = "Pending"
    RUNNING = "Running"
    SUCCEEDED = "Succeeded"
    FAILED = "Failed"
    UNKNOWN = "Unknown"


class ContainerPhase(str, Enum):
    """Observed state of a single container within a pod."""

    WAITING = "waiting"
    RUNNING = "running"
    TERMINATED = "terminated"


class StepContainer(BaseModel):
    """A step container, mapped to one pipeline step."""

    model_config = ConfigDict(frozen=True)

    name: str
    state: ContainerPhase = ContainerPhase.WAITING

    @property
    def has_started(self) -> bool:
        return self.state != ContainerPhase.WAITING


class BuildPod(BaseModel):
    """A pod hosting the step containers of one pipeline run task.

    When a pod declares init containers, those are the build steps and
    the regular containers are the platform's sidecars.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    namespace: str = "jx"
    labels: dict[str, str] = {}
    phase: PodPhase = PodPhase.PENDING
    init_containers: list[StepContainer] = []
    containers: list[StepContainer] = []
    created_at: datetime = Field(default_factory=_utcnow)

    @property
    def step_containers(self) -> list[StepContainer]:
        """Return the containers that carry build steps, in declared order."""
        if self.init_containers:
            return list(self.init_containers)
        return list(self.containers)

    def has_container_started(self, index: int) -> bool:
        steps = self.step_containers
        if index < 0 or index >= len(steps):
            return False
        return steps[index].has_started

    @property
    def has_failed(self) -> bool:
        return self.phase == PodPhase.FAILED


class BuildPodInfo(BaseModel):
    """The build identity a pod advertises through its labels."""

    model_config = ConfigDict(frozen=True)

    pod_name: str
    organisation: str = ""
    repository: str = ""
    branch: str = ""
    build: str = ""
    pipeline_run: str = ""
    stage_name: str = ""

    @classmethod
    def from_pod(cls, pod: BuildPod) -> BuildPodInfo:
        labels = pod.labels
        return cls(
            pod_name=pod.name,
            organisation=labels.get(LABEL_OWNER) or labels.get(LABEL_LEGACY_OWNER, ""),
            repository=labels.get(LABEL_REPOSITORY)
            or labels.get(LABEL_LEGACY_REPOSITORY, ""),
            branch=labels.get(LABEL_BRANCH, ""),
            build=labels.get(LABEL_BUILD, ""),
            pipeline_run=labels.get(LABEL_PIPELINE_RUN_NAME, ""),
            stage_name=labels.get(LABEL_STAGE_NAME, ""),
        )
