"""Terminal writer — forwards log lines to a Rich console.

Header lines are highlighted in green and warnings in yellow; container
output is printed verbatim and unwrapped, with markup and highlighting
disabled so log content can never be mistaken for Rich markup.
"""

from __future__ import annotations

from rich.console import Console
from rich.text import Text

from pipelogs.clients import PodLogSource
from pipelogs.models.resources import BuildPod, StepContainer
from pipelogs.writers._formatting import is_header, is_warning

_HEADER_STYLE = "bold green"
_WARNING_STYLE = "yellow"


class ConsoleLogWriter:
    """Writes lines and streams container output to a terminal.

    Parameters
    ----------
    log_source:
        Supplies the output of live containers.  Without one, live
        streams are skipped (archived logs only).
    console:
        Target console.  A fresh ``Console()`` when omitted.
    color:
        Whether to style headers and warnings.
    """

    def __init__(
        self,
        log_source: PodLogSource | None = None,
        console: Console | None = None,
        *,
        color: bool = True,
    ) -> None:
        self._source = log_source
        self.console = console or Console()
        self._color = color

    def _style_for(self, line: str) -> str:
        if not self._color:
            return ""
        if is_header(line):
            return _HEADER_STYLE
        if is_warning(line):
            return _WARNING_STYLE
        return ""

    def write_log(self, line: str) -> None:
        self.console.print(Text(line, style=self._style_for(line)), end="", soft_wrap=True)

    def stream_log(self, namespace: str, pod: BuildPod, container: StepContainer) -> None:
        if self._source is None:
            return
        for line in self._source.read_container_log(namespace, pod, container):
            self.console.print(
                line.rstrip("\n"), markup=False, highlight=False, soft_wrap=True
            )
