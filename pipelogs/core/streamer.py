"""Live log streaming for a single build pod.

Each step container moves through ``ContainerLogState``::

    NOT_STARTED -> STARTING (poll) -> STARTED -> STREAMING -> DONE
    NOT_STARTED / STARTING -> FAILED      (the pod's phase is Failed)

A container that started before its pod failed is still streamed.

Containers are handled in declared order.  A failed pod is expected:
a warning line goes through the writer, the pod's remaining containers
are skipped, and no error is raised.  A pod deleted while being waited
on is handled the same way.
"""

from __future__ import annotations

import logging

from pipelogs.clients import PodStore
from pipelogs.core.deadline import Deadline
from pipelogs.core.errors import (
    InvalidContainerTransitionError,
    LogWriteError,
    NotFoundError,
    PipelineLogsError,
    PlatformQueryError,
)
from pipelogs.models.activity import PipelineActivity
from pipelogs.models.resources import BuildPod, BuildPodInfo, StepContainer
from pipelogs.models.streaming import (
    VALID_CONTAINER_TRANSITIONS,
    ContainerLogRecord,
    ContainerLogState,
)
from pipelogs.writers import LogWriter
from pipelogs.writers._formatting import (
    format_header,
    format_pod_failed,
    format_pod_gone,
    format_waiting,
)

logger = logging.getLogger(__name__)


class ContainerProgress:
    """Tracks one container through the log state machine."""

    def __init__(self, pod_name: str, container_name: str) -> None:
        self.pod_name = pod_name
        self.container_name = container_name
        self.state = ContainerLogState.NOT_STARTED
        self.pod_gone = False
        self.history: list[ContainerLogState] = [ContainerLogState.NOT_STARTED]

    def advance(self, target: ContainerLogState) -> None:
        allowed = VALID_CONTAINER_TRANSITIONS.get(self.state, set())
        if target not in allowed:
            raise InvalidContainerTransitionError(
                f"Cannot move {self.pod_name}/{self.container_name} from "
                f"{self.state.value} to {target.value}. "
                f"Allowed: {sorted(s.value for s in allowed)}"
            )
        self.state = target
        self.history.append(target)


def pod_matches_activity(
    info: BuildPodInfo,
    activity: PipelineActivity,
    logged_runs: dict[str, bool],
) -> bool:
    """Whether a pod belongs to *activity* and its run is not yet logged.

    Owner, repository and build must match exactly; the branch is
    compared case-insensitively.
    """
    if info.pipeline_run in logged_runs:
        return False
    return (
        info.organisation == activity.owner
        and info.repository == activity.repository
        and info.branch.lower() == activity.branch.lower()
        and info.build == activity.build
    )


def write_line(writer: LogWriter, line: str) -> None:
    """Write one line, wrapping writer failures in ``LogWriteError``."""
    try:
        writer.write_log(line)
    except Exception as exc:  # noqa: BLE001
        raise LogWriteError(
            f"there was a problem writing a single line into the logs writer: {exc}"
        ) from exc


class PodLogStreamer:
    """Streams the step containers of build pods through a writer.

    Parameters
    ----------
    pod_store:
        Used to reload a pod while waiting for a container to start.
    writer:
        Receives header and warning lines and the container streams.
    poll_interval:
        Seconds between pod reloads while waiting.
    deadline:
        Bounds every wait.  Unbounded when omitted.
    """

    def __init__(
        self,
        pod_store: PodStore,
        writer: LogWriter,
        *,
        poll_interval: float = 1.0,
        deadline: Deadline | None = None,
    ) -> None:
        self._pods = pod_store
        self._writer = writer
        self._poll_interval = poll_interval
        self._deadline = deadline or Deadline.never()

    # ------------------------------------------------------------------
    # Waiting
    # ------------------------------------------------------------------

    def wait_for_container_to_start(
        self,
        namespace: str,
        pod: BuildPod,
        index: int,
        progress: ContainerProgress,
    ) -> BuildPod:
        """Block until step container *index* has started or the pod failed.

        Returns the most recently observed pod; *progress* ends in
        ``STARTED`` or ``FAILED``.
        """
        if pod.has_container_started(index):
            progress.advance(ContainerLogState.STARTED)
            return pod
        if pod.has_failed:
            progress.advance(ContainerLogState.FAILED)
            return pod

        progress.advance(ContainerLogState.STARTING)
        try:
            self._writer.write_log(format_waiting(pod.name, progress.container_name))
        except Exception as exc:  # noqa: BLE001
            logger.warning(
                "There was a problem writing a single line into the log writer: %s", exc
            )

        action = f"waiting for pod {pod.name} container {progress.container_name} to start"
        while True:
            self._deadline.sleep(self._poll_interval, action=action)
            try:
                pod = self._pods.get(namespace, pod.name)
            except NotFoundError:
                logger.warning("pod %s was deleted while waiting for it", pod.name)
                progress.pod_gone = True
                progress.advance(ContainerLogState.FAILED)
                return pod
            except PipelineLogsError:
                raise
            except Exception as exc:  # noqa: BLE001
                raise PlatformQueryError(
                    f"failed to load pod {pod.name}: {exc}",
                    namespace=namespace,
                    resource="Pod",
                ) from exc
            if pod.has_container_started(index):
                progress.advance(ContainerLogState.STARTED)
                return pod
            if pod.has_failed:
                progress.advance(ContainerLogState.FAILED)
                return pod

    # ------------------------------------------------------------------
    # Streaming
    # ------------------------------------------------------------------

    def stream_pod(self, namespace: str, pod: BuildPod, build_name: str) -> list[ContainerLogRecord]:
        """Stream every step container of *pod*, in declared order."""
        info = BuildPodInfo.from_pod(pod)
        records: list[ContainerLogRecord] = []
        steps = pod.step_containers

        for index, declared in enumerate(steps):
            self._deadline.check(f"streaming pod {pod.name}", found_logs=True)
            progress = ContainerProgress(pod.name, declared.name)
            pod = self.wait_for_container_to_start(namespace, pod, index, progress)

            if progress.state == ContainerLogState.FAILED:
                if progress.pod_gone:
                    write_line(self._writer, format_pod_gone(pod.name))
                else:
                    logger.warning("pod %s has failed", pod.name)
                    write_line(self._writer, format_pod_failed(pod.name))
                records.append(self._record(info, progress))
                for skipped in steps[index + 1:]:
                    rest = ContainerProgress(pod.name, skipped.name)
                    rest.advance(ContainerLogState.FAILED)
                    records.append(self._record(info, rest))
                break

            container = self._current_container(pod, index, declared)
            write_line(self._writer, format_header(build_name, info.stage_name, container.name))
            progress.advance(ContainerLogState.STREAMING)
            try:
                self._writer.stream_log(namespace, pod, container)
            except Exception as exc:  # noqa: BLE001
                raise LogWriteError(
                    f"there was a problem writing into the stream writer for "
                    f"pod {pod.name} container {container.name}: {exc}"
                ) from exc
            progress.advance(ContainerLogState.DONE)
            records.append(self._record(info, progress))

        return records

    @staticmethod
    def _current_container(pod: BuildPod, index: int, declared: StepContainer) -> StepContainer:
        steps = pod.step_containers
        if index < len(steps) and steps[index].name == declared.name:
            return steps[index]
        return declared

    @staticmethod
    def _record(info: BuildPodInfo, progress: ContainerProgress) -> ContainerLogRecord:
        return ContainerLogRecord(
            pod_name=progress.pod_name,
            container_name=progress.container_name,
            pipeline_run=info.pipeline_run,
            stage_name=info.stage_name,
            state=progress.state,
        )
