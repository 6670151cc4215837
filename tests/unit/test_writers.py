"""Tests for log writers and the shared line wording."""

from __future__ import annotations

import io

from rich.console import Console

from pipelogs.writers import LogWriter
from pipelogs.writers._formatting import (
    format_header,
    format_pod_failed,
    format_unavailable_runs,
    format_waiting,
    is_header,
    is_warning,
)
from pipelogs.writers.console import ConsoleLogWriter
from pipelogs.writers.memory import BufferLogWriter, DiscardLogWriter


def _console() -> tuple[Console, io.StringIO]:
    buffer = io.StringIO()
    return Console(file=buffer, width=40, color_system=None), buffer


class TestFormatting:
    def test_header(self):
        line = format_header("acme/widgets/master #7 release", "ci", "build")
        assert line == (
            "Showing logs for build acme/widgets/master #7 release stage ci and container build\n"
        )
        assert is_header(line)

    def test_waiting_is_not_a_warning(self):
        line = format_waiting("pod-1", "build")
        assert not is_warning(line)
        assert not is_header(line)

    def test_warnings(self):
        assert is_warning(format_pod_failed("pod-1"))
        assert is_warning(format_unavailable_runs(["b", "a"]))

    def test_unavailable_runs_sorted(self):
        assert "a, b;" in format_unavailable_runs(["b", "a"])


class TestMemoryWriters:
    def test_writers_satisfy_protocol(self):
        assert isinstance(DiscardLogWriter(), LogWriter)
        assert isinstance(BufferLogWriter(), LogWriter)
        assert isinstance(ConsoleLogWriter(), LogWriter)

    def test_discard(self, make_pod):
        pod = make_pod()
        writer = DiscardLogWriter()
        writer.write_log("anything\n")
        writer.stream_log("jx", pod, pod.step_containers[0])

    def test_buffer_terminates_streamed_lines(self, make_pod, log_source):
        pod = make_pod()
        log_source.set_log(pod.name, "build", ["no newline", "has newline\n"])
        writer = BufferLogWriter(log_source)

        writer.write_log("header\n")
        writer.stream_log("jx", pod, pod.step_containers[0])

        assert writer.text == "header\nno newline\nhas newline\n"
        assert writer.streamed == [(pod.name, "build")]

    def test_buffer_clear(self):
        writer = BufferLogWriter()
        writer.write_log("x\n")
        writer.clear()
        assert writer.lines == []
        assert writer.streamed == []


class TestConsoleLogWriter:
    def test_long_lines_not_wrapped(self):
        console, buffer = _console()
        writer = ConsoleLogWriter(console=console)
        line = format_header("acme/widgets/master #7 release", "ci", "build")

        writer.write_log(line)

        assert buffer.getvalue().rstrip("\n") == line.rstrip("\n")

    def test_container_output_printed_verbatim(self, make_pod, log_source):
        pod = make_pod()
        log_source.set_log(pod.name, "test", ["[bold]not markup[/bold]\n", "done"])
        console, buffer = _console()

        ConsoleLogWriter(log_source, console=console).stream_log("jx", pod, pod.step_containers[1])

        assert buffer.getvalue() == "[bold]not markup[/bold]\ndone\n"

    def test_no_source_skips_stream(self, make_pod):
        pod = make_pod()
        console, buffer = _console()
        ConsoleLogWriter(console=console).stream_log("jx", pod, pod.step_containers[0])
        assert buffer.getvalue() == ""

    def test_header_styled_when_color_enabled(self):
        buffer = io.StringIO()
        console = Console(file=buffer, force_terminal=True, color_system="standard", width=200)
        ConsoleLogWriter(console=console).write_log(format_header("b", "s", "c"))
        assert "\x1b[" in buffer.getvalue()

    def test_no_style_when_color_disabled(self):
        buffer = io.StringIO()
        console = Console(file=buffer, force_terminal=True, color_system="standard", width=200)
        ConsoleLogWriter(console=console, color=False).write_log(format_header("b", "s", "c"))
        assert buffer.getvalue().rstrip("\n") == format_header("b", "s", "c").rstrip("\n")
