"""Joins pipeline activities with the pipeline runs that implement them.

Activities and runs are created by different controllers and appear
independently.  A run with no activity yet (or any longer) is skipped,
not reported: it simply has nothing to be matched against.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

from pipelogs.clients import ActivityStore, PipelineRunStore
from pipelogs.clients.selectors import activity_label_selector, build_label_selector
from pipelogs.core.correlation import activity_key, disambiguate, run_key
from pipelogs.core.errors import PlatformQueryError
from pipelogs.models.activity import PipelineActivity
from pipelogs.models.labels import LABEL_CONTEXT
from pipelogs.models.resources import PipelineRun

logger = logging.getLogger(__name__)


def match_activities_to_runs(
    activities: Iterable[PipelineActivity],
    runs: Iterable[PipelineRun],
) -> tuple[list[str], dict[str, PipelineActivity]]:
    """Match activities to runs on their canonical build key.

    Returns the matched names, most recently created run first, and a
    mapping from each name to its activity.  Names carry the run's
    ``context`` label so two runs of the same build stay distinct; a
    second run with the same key and context is listed once.  Activities
    no run matched stay in the mapping under their plain key.
    """
    by_key: dict[str, PipelineActivity] = {}
    for activity in activities:
        by_key[activity_key(activity)] = activity

    by_name = dict(by_key)
    names: list[str] = []
    for run in sorted(runs, key=lambda r: r.created_at, reverse=True):
        key = run_key(run)
        activity = by_key.get(key)
        if activity is None:
            continue
        name = disambiguate(key, run.labels.get(LABEL_CONTEXT, ""))
        if name in names:
            continue
        by_name.pop(key, None)
        by_name[name] = activity
        names.append(name)

    return names, by_name


def get_pipelines_with_active_activity(
    activity_store: ActivityStore,
    run_store: PipelineRunStore,
    namespace: str,
    filters: Sequence[str] = (),
) -> tuple[list[str], dict[str, PipelineActivity]]:
    """List activities and runs matching *filters* and join them.

    *filters* are ``key=value`` label terms written against run labels
    (``repo=``); the activity query rewrites the first ``repo=`` term to
    the activity's ``repository=`` label.
    """
    try:
        activities = activity_store.list(namespace, activity_label_selector(filters))
    except Exception as exc:  # noqa: BLE001
        raise PlatformQueryError(
            f"there was a problem getting the pipeline activities in namespace {namespace}: {exc}",
            namespace=namespace,
            resource="PipelineActivity",
        ) from exc

    try:
        runs = run_store.list(namespace, build_label_selector(filters))
    except Exception as exc:  # noqa: BLE001
        raise PlatformQueryError(
            f"there was a problem getting the pipeline runs in namespace {namespace}: {exc}",
            namespace=namespace,
            resource="PipelineRun",
        ) from exc

    names, by_name = match_activities_to_runs(activities, runs)
    logger.debug(
        "Matched %d of %d pipeline runs to %d activities in %s",
        len(names), len(runs), len(activities), namespace,
    )
    return names, by_name
