"""Line loop and output sink.

Reads lines one at a time, runs the configured command for each and writes
whatever the decision says to emit. Lines are handled strictly in order; the
next line is not read until the previous one has been written.
"""

from __future__ import annotations

from typing import BinaryIO, Iterator

import click

from ..executor import execute
from ..models import Options, OutputDecision
from ..template import Template, build_request, resolve_template
from .decision import decide
from .errors import (
    DownstreamClosed,
    FatalExecutionError,
    InputReadError,
    OutputWriteError,
)


class OutputSink:
    """Writes emitted records to stdout, one flush per record."""

    def __init__(self, stream: BinaryIO):
        self.stream = stream

    def write(self, data: bytes) -> None:
        """Write and flush ``data``.

        Raises:
            DownstreamClosed: The reader closed its end of the pipe
            OutputWriteError: Any other write failure
        """
        try:
            self.stream.write(data)
            self.stream.flush()
        except BrokenPipeError as e:
            raise DownstreamClosed() from e
        except OSError as e:
            raise OutputWriteError(str(e)) from e

    def write_line(self, line: str) -> None:
        self.write(line.encode() + b"\n")

    def flush_quietly(self) -> None:
        """Best-effort flush after the reader went away."""
        try:
            self.stream.flush()
        except OSError:
            pass


def iter_lines(input_stream: BinaryIO) -> Iterator[str]:
    """Yield UTF-8 lines without their record separator.

    Only ``\n`` separates records. A ``\r`` directly before it is dropped;
    any other ``\r`` is part of the line. A final line without a trailing
    newline is still yielded.

    Raises:
        InputReadError: Reading or decoding the input failed
    """
    while True:
        try:
            raw = input_stream.readline()
        except OSError as e:
            raise InputReadError(str(e)) from e
        if not raw:
            return
        if raw.endswith(b"\n"):
            raw = raw[:-1]
            if raw.endswith(b"\r"):
                raw = raw[:-1]
        try:
            line = raw.decode("utf-8")
        except UnicodeDecodeError as e:
            raise InputReadError(str(e)) from e
        yield line


def process_line(
    line: str, template: Template, options: Options, sink: OutputSink
) -> None:
    """Run the command for one line and emit the result."""
    request = build_request(template, line, options)
    result = execute(request)
    decision = decide(result, options, template.mode)

    if decision is OutputDecision.ABORT:
        raise FatalExecutionError(str(result.error)) from result.error
    if decision is OutputDecision.SKIP:
        if result.error is not None:
            click.echo(f"Error executing command: {result.error}", err=True)
        return
    if decision is OutputDecision.EMIT_CAPTURED_BYTES:
        sink.write(result.output)
    else:
        sink.write_line(line)


def run_lines(
    options: Options,
    input_stream: BinaryIO,
    output_stream: BinaryIO,
) -> None:
    """Filter (and map) every line of ``input_stream`` into ``output_stream``.

    Args:
        options: Run configuration
        input_stream: Binary stream to read newline-separated lines from
        output_stream: Binary stream emitted records are written to

    Raises:
        DownstreamClosed: The reader of ``output_stream`` went away
        FpipeError: Any fatal error; the run stops at the failing line
    """
    template = resolve_template(options.command_and_args)
    sink = OutputSink(output_stream)

    try:
        for line in iter_lines(input_stream):
            if template is None:
                sink.write_line(line)
            else:
                process_line(line, template, options, sink)
    except DownstreamClosed:
        sink.flush_quietly()
        raise


__all__ = ["OutputSink", "iter_lines", "process_line", "run_lines"]
