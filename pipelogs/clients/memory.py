"""In-memory collaborator implementations.

Back the test suite and the snapshot-replay CLI.  Each store holds plain
model instances; pods can be replaced while a streaming call is running
to simulate the platform moving them through their lifecycle.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from pipelogs.clients import BucketCredentials
from pipelogs.clients.selectors import selector_matches
from pipelogs.core.errors import NotFoundError
from pipelogs.models.activity import PipelineActivity
from pipelogs.models.labels import (
    LABEL_BRANCH,
    LABEL_BUILD,
    LABEL_OWNER,
    LABEL_REPOSITORY,
)
from pipelogs.models.resources import BuildPod, PipelineRun, StepContainer


def _activity_labels(activity: PipelineActivity) -> dict[str, str]:
    return {
        LABEL_OWNER: activity.owner,
        LABEL_REPOSITORY: activity.repository,
        LABEL_BRANCH: activity.branch,
        LABEL_BUILD: activity.build,
        **activity.labels,
    }


class InMemoryActivityStore:
    """Activity store over a fixed list of activities."""

    def __init__(self, activities: Iterable[PipelineActivity] = ()) -> None:
        self._activities: list[PipelineActivity] = list(activities)

    def add(self, activity: PipelineActivity) -> None:
        self._activities.append(activity)

    def list(self, namespace: str, label_selector: str = "") -> list[PipelineActivity]:
        return [
            a
            for a in self._activities
            if a.namespace == namespace
            and selector_matches(_activity_labels(a), label_selector)
        ]


class InMemoryPipelineRunStore:
    """Pipeline run store; runs may be added while a call is in flight."""

    def __init__(self, runs: Iterable[PipelineRun] = ()) -> None:
        self._runs: list[PipelineRun] = list(runs)
        self.list_calls = 0

    def add(self, run: PipelineRun) -> None:
        self._runs.append(run)

    def list(self, namespace: str, label_selector: str = "") -> list[PipelineRun]:
        self.list_calls += 1
        return [
            r
            for r in self._runs
            if r.namespace == namespace and selector_matches(r.labels, label_selector)
        ]


class InMemoryPodStore:
    """Pod store keyed by ``(namespace, name)``."""

    def __init__(self, pods: Iterable[BuildPod] = ()) -> None:
        self._pods: dict[tuple[str, str], BuildPod] = {}
        for pod in pods:
            self.put(pod)

    def put(self, pod: BuildPod) -> None:
        """Add or replace a pod."""
        self._pods[(pod.namespace, pod.name)] = pod

    def delete(self, namespace: str, name: str) -> None:
        self._pods.pop((namespace, name), None)

    def list(self, namespace: str) -> list[BuildPod]:
        return [p for (ns, _), p in self._pods.items() if ns == namespace]

    def get(self, namespace: str, name: str) -> BuildPod:
        try:
            return self._pods[(namespace, name)]
        except KeyError:
            raise NotFoundError(
                f"pod {name} not found in namespace {namespace}", name=name
            ) from None


class StaticCredentialResolver:
    """Returns fixed credentials and counts how often it was asked."""

    def __init__(self, credentials: BucketCredentials | None = None) -> None:
        self._credentials = credentials
        self.calls = 0

    def resolve_bucket_access(self) -> BucketCredentials | None:
        self.calls += 1
        return self._credentials


class InMemoryPodLogSource:
    """Container output keyed by ``(pod name, container name)``."""

    def __init__(self, logs: dict[tuple[str, str], list[str]] | None = None) -> None:
        self._logs: dict[tuple[str, str], list[str]] = dict(logs or {})

    def set_log(self, pod_name: str, container_name: str, lines: Iterable[str]) -> None:
        self._logs[(pod_name, container_name)] = list(lines)

    def read_container_log(
        self, namespace: str, pod: BuildPod, container: StepContainer
    ) -> Iterator[str]:
        yield from self._logs.get((pod.name, container.name), [])
