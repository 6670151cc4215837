"""Label and parameter keys shared by activities, pipeline runs and build pods."""

from __future__ import annotations

LABEL_OWNER = "owner"
LABEL_REPOSITORY = "repository"
LABEL_BRANCH = "branch"
LABEL_BUILD = "build"
LABEL_CONTEXT = "context"

# Pipeline runs carry "repo" where activities carry "repository".
LABEL_LEGACY_REPOSITORY = "repo"
LABEL_LEGACY_OWNER = "org"

LABEL_PIPELINE_RUN_NAME = "tekton.dev/pipelineRun"
LABEL_STAGE_NAME = "jenkins.io/task-stage-name"

PARAM_LEGACY_BUILD_ID = "build_id"
