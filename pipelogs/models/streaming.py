"""Container log state machine and stream summary models."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict


class ContainerLogState(str, Enum):
    """Progress of log capture for a single step container."""

    NOT_STARTED = "not_started"
    STARTING = "starting"
    STARTED = "started"
    STREAMING = "streaming"
    DONE = "done"
    FAILED = "failed"


# Terminal states (DONE, FAILED) have no outgoing transitions.
VALID_CONTAINER_TRANSITIONS: dict[ContainerLogState, set[ContainerLogState]] = {
    ContainerLogState.NOT_STARTED: {
        ContainerLogState.STARTING,
        ContainerLogState.STARTED,
        ContainerLogState.FAILED,
    },
    ContainerLogState.STARTING: {ContainerLogState.STARTED, ContainerLogState.FAILED},
    ContainerLogState.STARTED: {ContainerLogState.STREAMING},
    ContainerLogState.STREAMING: {ContainerLogState.DONE},
    ContainerLogState.DONE: set(),
    ContainerLogState.FAILED: set(),
}


class ContainerLogRecord(BaseModel):
    """Final state reached by one container during a streaming call."""

    model_config = ConfigDict(frozen=True)

    pod_name: str
    container_name: str
    pipeline_run: str = ""
    stage_name: str = ""
    state: ContainerLogState


class LogStreamSummary(BaseModel):
    """What a single live-streaming call captured."""

    model_config = ConfigDict(frozen=True)

    activity_name: str
    logged_runs: list[str] = []
    unavailable_runs: list[str] = []
    containers: list[ContainerLogRecord] = []
    iterations: int = 0

    @property
    def streamed_count(self) -> int:
        return sum(1 for c in self.containers if c.state == ContainerLogState.DONE)

    @property
    def failed_count(self) -> int:
        return sum(1 for c in self.containers if c.state == ContainerLogState.FAILED)
