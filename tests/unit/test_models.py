"""Tests for all Pydantic data models — validation, immutability, defaults."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from pipelogs.models import (
    VALID_CONTAINER_TRANSITIONS,
    ActivityPhase,
    BuildPod,
    BuildPodInfo,
    ContainerLogRecord,
    ContainerLogState,
    ContainerPhase,
    LogStreamSummary,
    PipelineActivity,
    PodPhase,
    StepContainer,
)


class TestActivityModels:
    def test_terminal_phases(self):
        assert ActivityPhase.SUCCEEDED.is_terminal
        assert ActivityPhase.FAILED.is_terminal
        assert ActivityPhase.ABORTED.is_terminal
        assert not ActivityPhase.RUNNING.is_terminal
        assert not ActivityPhase.PENDING.is_terminal

    def test_activity_is_frozen(self, make_activity):
        activity = make_activity()
        with pytest.raises(ValidationError):
            activity.build = "8"

    def test_activity_defaults(self):
        activity = PipelineActivity(name="a")
        assert activity.namespace == "jx"
        assert activity.phase == ActivityPhase.PENDING
        assert activity.build_logs_url is None

    def test_phase_parsed_from_value(self):
        assert PipelineActivity(name="a", phase="Succeeded").phase == ActivityPhase.SUCCEEDED


class TestResourceModels:
    def test_init_containers_are_the_steps(self, make_pod):
        pod = make_pod()
        assert [c.name for c in pod.step_containers] == ["build", "test"]

    def test_containers_used_without_init_containers(self, make_pod):
        pod = make_pod(use_init_containers=False)
        assert [c.name for c in pod.step_containers] == ["build", "test"]

    def test_container_started(self):
        assert not StepContainer(name="s").has_started
        assert StepContainer(name="s", state=ContainerPhase.RUNNING).has_started
        assert StepContainer(name="s", state=ContainerPhase.TERMINATED).has_started

    def test_has_container_started_out_of_range(self, make_pod):
        pod = make_pod()
        assert pod.has_container_started(5) is False
        assert pod.has_container_started(-1) is False

    def test_pod_failed(self):
        assert BuildPod(name="p", phase=PodPhase.FAILED).has_failed
        assert not BuildPod(name="p", phase=PodPhase.SUCCEEDED).has_failed

    def test_pod_info_from_labels(self, make_pod):
        info = BuildPodInfo.from_pod(make_pod())
        assert info.organisation == "acme"
        assert info.repository == "widgets"
        assert info.branch == "master"
        assert info.build == "7"
        assert info.pipeline_run == "acme-widgets-master-7-release"
        assert info.stage_name == "ci"

    def test_pod_info_legacy_labels(self):
        pod = BuildPod(name="p", labels={"org": "acme", "repo": "widgets"})
        info = BuildPodInfo.from_pod(pod)
        assert info.organisation == "acme"
        assert info.repository == "widgets"
        assert info.build == ""


class TestStreamingModels:
    def test_container_state_values(self):
        assert ContainerLogState.NOT_STARTED == "not_started"
        assert ContainerLogState.DONE == "done"

    def test_terminal_states_have_no_transitions(self):
        assert VALID_CONTAINER_TRANSITIONS[ContainerLogState.DONE] == set()
        assert VALID_CONTAINER_TRANSITIONS[ContainerLogState.FAILED] == set()

    def test_started_only_leads_to_streaming(self):
        assert VALID_CONTAINER_TRANSITIONS[ContainerLogState.STARTED] == {
            ContainerLogState.STREAMING
        }

    def test_summary_counts(self):
        def record(state):
            return ContainerLogRecord(
                pod_name="p", container_name="c", pipeline_run="r", stage_name="s", state=state
            )

        summary = LogStreamSummary(
            activity_name="a",
            containers=[
                record(ContainerLogState.DONE),
                record(ContainerLogState.DONE),
                record(ContainerLogState.FAILED),
            ],
        )
        assert summary.streamed_count == 2
        assert summary.failed_count == 1
