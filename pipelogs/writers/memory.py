"""Writers that keep output in process: discard and buffer-to-memory."""

from __future__ import annotations

import logging

from pipelogs.clients import PodLogSource
from pipelogs.models.resources import BuildPod, StepContainer

logger = logging.getLogger(__name__)


class DiscardLogWriter:
    """Accepts everything and keeps nothing."""

    def write_log(self, line: str) -> None:
        return None

    def stream_log(self, namespace: str, pod: BuildPod, container: StepContainer) -> None:
        return None


class BufferLogWriter:
    """Buffers every line in memory.

    Parameters
    ----------
    log_source:
        Where streamed container output comes from.  Without one,
        ``stream_log`` only records which containers were streamed.
    """

    def __init__(self, log_source: PodLogSource | None = None) -> None:
        self._source = log_source
        self.lines: list[str] = []
        self.streamed: list[tuple[str, str]] = []

    def write_log(self, line: str) -> None:
        self.lines.append(line)

    def stream_log(self, namespace: str, pod: BuildPod, container: StepContainer) -> None:
        self.streamed.append((pod.name, container.name))
        if self._source is None:
            return
        for line in self._source.read_container_log(namespace, pod, container):
            self.lines.append(line if line.endswith("\n") else f"{line}\n")
        logger.debug("BufferLogWriter: streamed %s/%s", pod.name, container.name)

    @property
    def text(self) -> str:
        return "".join(self.lines)

    def clear(self) -> None:
        self.lines.clear()
        self.streamed.clear()
