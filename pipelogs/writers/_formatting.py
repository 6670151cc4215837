"""Shared wording for the lines the engine emits through a writer.

Keeps the streamer, the tracker and the writers consistent about what a
header, a wait notice or a warning looks like.
"""

from __future__ import annotations

from collections.abc import Iterable


def format_header(build_name: str, stage_name: str, container_name: str) -> str:
    """Return the line announcing a container's logs.

    Examples
    --------
    >>> format_header("acme/widgets/master #7", "ci", "build")
    'Showing logs for build acme/widgets/master #7 stage ci and container build\\n'
    """
    return (
        f"Showing logs for build {build_name} stage {stage_name} "
        f"and container {container_name}\n"
    )


def format_waiting(pod_name: str, container_name: str) -> str:
    return f"waiting for pod {pod_name} container {container_name} to start...\n"


def format_pod_failed(pod_name: str) -> str:
    return f"WARNING: pod {pod_name} has failed\n"


def format_pod_gone(pod_name: str) -> str:
    return f"WARNING: pod {pod_name} no longer exists\n"


def format_unavailable_runs(run_names: Iterable[str]) -> str:
    names = ", ".join(sorted(run_names))
    return (
        f"WARNING: no build pods found for pipeline runs {names}; "
        "they may have been garbage collected\n"
    )


def is_header(line: str) -> bool:
    return line.startswith("Showing logs for build ")


def is_warning(line: str) -> bool:
    return line.startswith("WARNING: ")
