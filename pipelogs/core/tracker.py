"""Completion tracking across every pipeline run of one activity.

New pipeline runs can appear while earlier ones are being streamed, so
the run names are re-queried on every pass.  A run is logged once any of
its pods has been streamed; its pods are never streamed again during the
same call.  Within a pass pods are handled oldest first.
"""

from __future__ import annotations

import logging

from pipelogs.clients import PipelineRunStore, PodStore
from pipelogs.clients.selectors import build_label_selector
from pipelogs.config import LogsSettings
from pipelogs.core.deadline import Deadline
from pipelogs.core.errors import (
    DeadlineExceededError,
    LogsUnavailableError,
    PipelineLogsError,
    PlatformQueryError,
)
from pipelogs.core.streamer import PodLogStreamer, pod_matches_activity, write_line
from pipelogs.models.activity import PipelineActivity
from pipelogs.models.labels import (
    LABEL_BRANCH,
    LABEL_BUILD,
    LABEL_LEGACY_REPOSITORY,
    LABEL_OWNER,
    LABEL_REPOSITORY,
)
from pipelogs.models.resources import BuildPod, BuildPodInfo
from pipelogs.models.streaming import ContainerLogRecord, LogStreamSummary
from pipelogs.writers import LogWriter
from pipelogs.writers._formatting import format_unavailable_runs

logger = logging.getLogger(__name__)


def get_pipeline_run_names_for_activity(
    activity: PipelineActivity,
    run_store: PipelineRunStore,
) -> list[str]:
    """Names of every pipeline run labelled with the activity's build.

    Runs are labelled ``repo``; runs that only carry the newer
    ``repository`` label are found by a second query.
    """
    for repo_label in (LABEL_LEGACY_REPOSITORY, LABEL_REPOSITORY):
        selector = build_label_selector([
            f"{LABEL_OWNER}={activity.owner}",
            f"{repo_label}={activity.repository}",
            f"{LABEL_BRANCH}={activity.branch}",
            f"{LABEL_BUILD}={activity.build}",
        ])
        try:
            runs = run_store.list(activity.namespace, selector)
        except Exception as exc:  # noqa: BLE001
            raise PlatformQueryError(
                f"failed to get pipeline run names for activity {activity.name} "
                f"in namespace {activity.namespace}: {exc}",
                namespace=activity.namespace,
                resource="PipelineRun",
            ) from exc
        if runs:
            return [r.name for r in runs]
    return []


def _list_build_pods(pod_store: PodStore, namespace: str) -> list[BuildPod]:
    try:
        pods = pod_store.list(namespace)
    except PipelineLogsError:
        raise
    except Exception as exc:  # noqa: BLE001
        raise PlatformQueryError(
            f"failed to get build pods in namespace {namespace}: {exc}",
            namespace=namespace,
            resource="Pod",
        ) from exc
    return sorted(pods, key=lambda p: p.created_at)


def stream_running_build_logs(
    activity: PipelineActivity,
    build_name: str,
    *,
    pod_store: PodStore,
    run_store: PipelineRunStore,
    writer: LogWriter,
    deadline: Deadline | None = None,
    settings: LogsSettings | None = None,
) -> LogStreamSummary:
    """Stream the live logs of every pipeline run of *activity*.

    Parameters
    ----------
    activity:
        The build to stream.
    build_name:
        Display name used in header lines (usually the matched name).
    pod_store, run_store:
        Platform collaborators.
    writer:
        Receives every line and container stream.
    deadline:
        Bounds the whole call.  Built from
        ``settings.stream_timeout_seconds`` when omitted.
    settings:
        Poll interval and idle ceiling.  Environment defaults when omitted.

    Raises
    ------
    LogsUnavailableError
        No pod of the activity was ever found; the pods have most likely
        been garbage collected.
    DeadlineExceededError
        The deadline expired or was cancelled.
    PlatformQueryError
        A store query failed.
    LogWriteError
        The writer failed.
    """
    settings = settings or LogsSettings()
    deadline = deadline or Deadline(settings.stream_timeout_seconds)
    namespace = activity.namespace
    streamer = PodLogStreamer(
        pod_store,
        writer,
        poll_interval=settings.poll_interval_seconds,
        deadline=deadline,
    )

    run_names = get_pipeline_run_names_for_activity(activity, run_store)
    logged_runs: dict[str, bool] = {}
    records: list[ContainerLogRecord] = []
    found_logs = False
    iterations = 0
    idle_iterations = 0

    def pending() -> list[str]:
        return [name for name in run_names if name not in logged_runs]

    try:
        while pending():
            iterations += 1
            deadline.check(f"streaming logs for activity {activity.name}", found_logs=found_logs)

            seen_runs: dict[str, bool] = {}
            for pod in _list_build_pods(pod_store, namespace):
                info = BuildPodInfo.from_pod(pod)
                if not pod_matches_activity(info, activity, logged_runs):
                    continue
                seen_runs[info.pipeline_run] = True
                found_logs = True
                records.extend(streamer.stream_pod(namespace, pod, build_name))

            run_names = get_pipeline_run_names_for_activity(activity, run_store)
            logged_runs.update(seen_runs)

            if seen_runs:
                idle_iterations = 0
                continue
            if not pending():
                break
            idle_iterations += 1
            if idle_iterations >= settings.max_idle_iterations:
                logger.info(
                    "No new build pods for activity %s after %d passes",
                    activity.name, idle_iterations,
                )
                break
            deadline.sleep(
                settings.poll_interval_seconds,
                action=f"waiting for build pods of activity {activity.name}",
            )
    except DeadlineExceededError as exc:
        raise DeadlineExceededError(str(exc), found_logs=found_logs) from exc

    if not found_logs:
        raise LogsUnavailableError(
            "the build pods for this build have been garbage collected and "
            "the log was not found in the long term storage bucket",
            activity_name=activity.name,
            logs_url=activity.build_logs_url,
        )

    unavailable = pending()
    if unavailable:
        logger.warning(
            "Pipeline runs %s of activity %s have no build pods",
            ", ".join(unavailable), activity.name,
        )
        write_line(writer, format_unavailable_runs(unavailable))

    return LogStreamSummary(
        activity_name=activity.name,
        logged_runs=sorted(logged_runs),
        unavailable_runs=sorted(unavailable),
        containers=records,
        iterations=iterations,
    )
