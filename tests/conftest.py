"""Shared test fixtures for pipelogs."""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime, timedelta, timezone
from typing import Any

import pytest

from pipelogs.clients.memory import (
    InMemoryActivityStore,
    InMemoryPipelineRunStore,
    InMemoryPodLogSource,
    InMemoryPodStore,
    StaticCredentialResolver,
)
from pipelogs.config import LogsSettings
from pipelogs.models.activity import ActivityPhase, PipelineActivity
from pipelogs.models.resources import (
    BuildPod,
    ContainerPhase,
    PipelineRun,
    PodPhase,
    RunParam,
    StepContainer,
)
from pipelogs.writers.memory import BufferLogWriter

BASE_TIME = datetime(2026, 3, 1, 12, 0, 0, tzinfo=timezone.utc)


def _at(minutes: int) -> datetime:
    return BASE_TIME + timedelta(minutes=minutes)


@pytest.fixture
def at() -> Callable[[int], datetime]:
    """Timestamps *minutes* after a fixed epoch: ``at(5)``."""
    return _at


@pytest.fixture
def settings() -> LogsSettings:
    """Settings that never sleep and give up after two idle passes."""
    return LogsSettings(
        poll_interval_seconds=0.0,
        max_idle_iterations=2,
        stream_timeout_seconds=None,
        bucket_read_timeout_seconds=5.0,
    )


# ---------------------------------------------------------------------------
# Resource factories — shared across test modules
# ---------------------------------------------------------------------------


@pytest.fixture
def make_activity() -> Callable[..., PipelineActivity]:
    """Factory fixture: the acme/widgets/master #7 activity by default."""

    def _factory(**overrides: Any) -> PipelineActivity:
        defaults: dict[str, Any] = {
            "name": "acme-widgets-master-7",
            "namespace": "jx",
            "owner": "acme",
            "repository": "widgets",
            "branch": "master",
            "build": "7",
            "phase": ActivityPhase.RUNNING,
        }
        defaults.update(overrides)
        return PipelineActivity(**defaults)

    return _factory


@pytest.fixture
def make_run() -> Callable[..., PipelineRun]:
    """Factory fixture: a pipeline run labelled for acme/widgets/master #7."""

    def _factory(
        name: str = "acme-widgets-master-7-release",
        *,
        context: str = "release",
        build: str | None = "7",
        build_id_param: str | None = None,
        created_at: datetime | None = None,
        **label_overrides: str,
    ) -> PipelineRun:
        labels = {
            "owner": "acme",
            "repo": "widgets",
            "branch": "master",
            "context": context,
        }
        if build is not None:
            labels["build"] = build
        labels.update(label_overrides)
        params = []
        if build_id_param is not None:
            params = [RunParam(name="version", value="1.0.0"), RunParam(name="build_id", value=build_id_param)]
        return PipelineRun(
            name=name,
            namespace="jx",
            labels=labels,
            params=params,
            created_at=created_at or _at(0),
        )

    return _factory


@pytest.fixture
def make_pod() -> Callable[..., BuildPod]:
    """Factory fixture: a build pod of a pipeline run with named step containers."""

    def _factory(
        name: str = "acme-widgets-master-7-release-pod",
        *,
        run: str = "acme-widgets-master-7-release",
        stage: str = "ci",
        steps: dict[str, ContainerPhase] | None = None,
        phase: PodPhase = PodPhase.RUNNING,
        created_at: datetime | None = None,
        use_init_containers: bool = True,
        **label_overrides: str,
    ) -> BuildPod:
        labels = {
            "owner": "acme",
            "repository": "widgets",
            "branch": "master",
            "build": "7",
            "tekton.dev/pipelineRun": run,
            "jenkins.io/task-stage-name": stage,
        }
        labels.update(label_overrides)
        if steps is None:
            steps = {
                "build": ContainerPhase.TERMINATED,
                "test": ContainerPhase.RUNNING,
            }
        containers = [StepContainer(name=n, state=s) for n, s in steps.items()]
        fields: dict[str, Any] = {
            "name": name,
            "namespace": "jx",
            "labels": labels,
            "phase": phase,
            "created_at": created_at or _at(1),
        }
        if use_init_containers:
            fields["init_containers"] = containers
            fields["containers"] = [StepContainer(name="nop", state=ContainerPhase.RUNNING)]
        else:
            fields["containers"] = containers
        return BuildPod(**fields)

    return _factory


# ---------------------------------------------------------------------------
# Stores and writers
# ---------------------------------------------------------------------------


@pytest.fixture
def activity_store() -> InMemoryActivityStore:
    return InMemoryActivityStore()


@pytest.fixture
def run_store() -> InMemoryPipelineRunStore:
    return InMemoryPipelineRunStore()


@pytest.fixture
def pod_store() -> InMemoryPodStore:
    return InMemoryPodStore()


@pytest.fixture
def log_source() -> InMemoryPodLogSource:
    return InMemoryPodLogSource()


@pytest.fixture
def buffer_writer(log_source: InMemoryPodLogSource) -> BufferLogWriter:
    """A BufferLogWriter reading container output from ``log_source``."""
    return BufferLogWriter(log_source)


@pytest.fixture
def credential_resolver() -> StaticCredentialResolver:
    return StaticCredentialResolver(None)
