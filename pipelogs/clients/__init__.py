"""Collaborator protocols consumed by the aggregation engine.

The engine never talks to a platform API directly.  Anything with the
right methods satisfies these protocols: a Kubernetes-backed adapter in
production, the in-memory stores in :mod:`pipelogs.clients.memory` for
tests and snapshot replay.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict

from pipelogs.models.activity import PipelineActivity
from pipelogs.models.resources import BuildPod, PipelineRun, StepContainer


class BucketCredentials(BaseModel):
    """Basic credentials for reading archived logs over HTTP(S).

    When ``host`` is set the credentials only apply to URLs on that host.
    """

    model_config = ConfigDict(frozen=True)

    username: str
    token: str
    host: str | None = None


@runtime_checkable
class ActivityStore(Protocol):
    """Lists pipeline activities."""

    def list(self, namespace: str, label_selector: str = "") -> list[PipelineActivity]:
        ...


@runtime_checkable
class PipelineRunStore(Protocol):
    """Lists pipeline runs."""

    def list(self, namespace: str, label_selector: str = "") -> list[PipelineRun]:
        ...


@runtime_checkable
class PodStore(Protocol):
    """Lists and reloads build pods."""

    def list(self, namespace: str) -> list[BuildPod]:
        ...

    def get(self, namespace: str, name: str) -> BuildPod:
        ...


@runtime_checkable
class CredentialResolver(Protocol):
    """Resolves credentials for the log bucket.

    Only called when a persisted log is actually read, so storage
    backends needing no credentials never trigger a lookup.
    """

    def resolve_bucket_access(self) -> BucketCredentials | None:
        ...


@runtime_checkable
class PodLogSource(Protocol):
    """Yields the output lines of one container until it is exhausted."""

    def read_container_log(
        self, namespace: str, pod: BuildPod, container: StepContainer
    ) -> Iterable[str]:
        ...


__all__ = [
    "ActivityStore",
    "BucketCredentials",
    "CredentialResolver",
    "PipelineRunStore",
    "PodLogSource",
    "PodStore",
]
