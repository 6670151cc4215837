"""Pipeline activity model — the logical record of one pipeline build."""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class ActivityPhase(str, Enum):
    """Lifecycle phase reported by the activity controller."""

    PENDING = "Pending"
    RUNNING = "Running"
    SUCCEEDED = "Succeeded"
    FAILED = "Failed"
    ABORTED = "Aborted"

    @property
    def is_terminal(self) -> bool:
        return self in (
            ActivityPhase.SUCCEEDED,
            ActivityPhase.FAILED,
            ActivityPhase.ABORTED,
        )


class PipelineActivity(BaseModel):
    """A pipeline build as seen by the activity store.

    Created by an external controller when a pipeline is triggered.
    Read-only to pipelogs.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    namespace: str = "jx"
    owner: str = ""
    repository: str = ""
    branch: str = ""
    build: str = ""
    phase: ActivityPhase = ActivityPhase.PENDING
    labels: dict[str, str] = {}
    build_logs_url: str | None = None  # set once the log sidecar has archived
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc)
    )
