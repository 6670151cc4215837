"""Canonical build identity shared by pipeline activities and pipeline runs.

Both resource kinds advertise owner, repository, branch and build number.
The key built from them is lower-cased and never raises: missing labels
simply produce a degenerate key that matches nothing real.
"""

from __future__ import annotations

from collections.abc import Mapping

from pipelogs.models.activity import PipelineActivity
from pipelogs.models.labels import (
    LABEL_BRANCH,
    LABEL_BUILD,
    LABEL_CONTEXT,
    LABEL_LEGACY_REPOSITORY,
    LABEL_OWNER,
    LABEL_REPOSITORY,
    PARAM_LEGACY_BUILD_ID,
)
from pipelogs.models.resources import PipelineRun


def pipeline_activity_key(labels: Mapping[str, str], build_number: str) -> str:
    """Return ``owner/repository/branch #build`` in lower case.

    The label is called ``repo`` on pipeline runs and ``repository`` on
    activities, so an empty ``repository`` falls back to ``repo``.
    """
    repository = labels.get(LABEL_REPOSITORY) or labels.get(LABEL_LEGACY_REPOSITORY, "")
    owner = labels.get(LABEL_OWNER, "")
    branch = labels.get(LABEL_BRANCH, "")
    return f"{owner}/{repository}/{branch} #{build_number or ''}".lower()


def find_legacy_build_number(run: PipelineRun) -> str:
    """Recover the build number from a run's ``build_id`` parameter.

    The last matching parameter wins; ``""`` when there is none.
    """
    build_number = ""
    for param in run.params:
        if param.name == PARAM_LEGACY_BUILD_ID:
            build_number = param.value
    return build_number


def run_build_number(run: PipelineRun) -> str:
    return run.labels.get(LABEL_BUILD) or find_legacy_build_number(run)


def run_key(run: PipelineRun) -> str:
    return pipeline_activity_key(run.labels, run_build_number(run))


def disambiguate(key: str, context: str) -> str:
    """Append the run context so same-key runs get distinct names."""
    return f"{key} {context}"


def run_display_name(run: PipelineRun) -> str:
    return disambiguate(run_key(run), run.labels.get(LABEL_CONTEXT, ""))


def activity_key(activity: PipelineActivity) -> str:
    """Key for an activity; its labels win over its spec fields."""
    labels = {
        LABEL_OWNER: activity.owner,
        LABEL_REPOSITORY: activity.repository,
        LABEL_BRANCH: activity.branch,
        **activity.labels,
    }
    return pipeline_activity_key(labels, activity.build)
