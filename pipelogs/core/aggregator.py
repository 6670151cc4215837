"""BuildLogAggregator — the entry point callers use to get a build's logs.

Wires the matcher, the completion tracker and the persisted log fetcher
together behind three calls: list the builds, resolve one by name, and
stream its logs with the archived copy as fallback.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from pipelogs.clients import ActivityStore, CredentialResolver, PipelineRunStore, PodStore
from pipelogs.config import LogsSettings
from pipelogs.core.deadline import Deadline
from pipelogs.core.errors import LogsUnavailableError, NotFoundError
from pipelogs.core.matcher import get_pipelines_with_active_activity
from pipelogs.core.persisted import stream_pipeline_persistent_logs
from pipelogs.core.tracker import stream_running_build_logs
from pipelogs.models.activity import PipelineActivity
from pipelogs.models.streaming import LogStreamSummary
from pipelogs.writers import LogWriter

logger = logging.getLogger(__name__)


class BuildLogAggregator:
    """Aggregates live and archived build logs.

    Parameters
    ----------
    activity_store, run_store, pod_store:
        Platform collaborators.
    credential_resolver:
        Consulted only when an archived log is read.
    settings:
        Namespace, poll interval, timeouts.  Environment defaults when omitted.
    """

    def __init__(
        self,
        activity_store: ActivityStore,
        run_store: PipelineRunStore,
        pod_store: PodStore,
        credential_resolver: CredentialResolver,
        *,
        settings: LogsSettings | None = None,
    ) -> None:
        self._activities = activity_store
        self._runs = run_store
        self._pods = pod_store
        self._credentials = credential_resolver
        self.settings = settings or LogsSettings()

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def list_builds(
        self, filters: Sequence[str] = ()
    ) -> tuple[list[str], dict[str, PipelineActivity]]:
        """Return matched build names (most recent first) and their activities."""
        return get_pipelines_with_active_activity(
            self._activities, self._runs, self.settings.namespace, filters
        )

    def get_activity(self, name: str, filters: Sequence[str] = ()) -> PipelineActivity:
        """Resolve a build name returned by :meth:`list_builds`.

        Activities whose runs have been pruned are still reachable by
        their plain ``owner/repository/branch #build`` key.
        """
        _, by_name = self.list_builds(filters)
        if name not in by_name:
            raise NotFoundError(
                f"no pipeline activity named {name!r} in namespace {self.settings.namespace}",
                name=name,
            )
        return by_name[name]

    # ------------------------------------------------------------------
    # Logs
    # ------------------------------------------------------------------

    def stream_build_logs(
        self,
        name: str,
        writer: LogWriter,
        *,
        filters: Sequence[str] = (),
        deadline: Deadline | None = None,
    ) -> LogStreamSummary | None:
        """Write the logs of build *name* through *writer*.

        Finished builds with an archived copy are read from the bucket.
        Otherwise the live pods are streamed; when none can be found the
        archived copy is read instead, if there is one.

        Returns the live streaming summary, or ``None`` when the logs
        came from the bucket.
        """
        activity = self.get_activity(name, filters)

        if activity.phase.is_terminal and activity.build_logs_url:
            self._fetch_persisted(activity.build_logs_url, writer)
            return None

        try:
            return stream_running_build_logs(
                activity,
                name,
                pod_store=self._pods,
                run_store=self._runs,
                writer=writer,
                deadline=deadline,
                settings=self.settings,
            )
        except LogsUnavailableError as exc:
            if not exc.logs_url:
                raise
            logger.info(
                "Build pods for %s are gone; falling back to %s", name, exc.logs_url
            )
            self._fetch_persisted(exc.logs_url, writer)
            return None

    def _fetch_persisted(self, logs_url: str, writer: LogWriter) -> None:
        stream_pipeline_persistent_logs(
            writer,
            logs_url,
            self._credentials,
            timeout=self.settings.bucket_read_timeout_seconds,
        )
