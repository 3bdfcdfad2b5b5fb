"""Subprocess execution for a single input line.

Runs one child per request and reports the outcome as a
:class:`~fpipe.models.SubprocessResult`. Failures to run the child at all are
returned as the result's ``error``; deciding whether such a failure is fatal
is left to the caller.
"""

from __future__ import annotations

import subprocess
import threading
from typing import IO, Optional

from .models import SubprocessRequest, SubprocessResult
from .process_utils import popen_with_validation


class ExecutionError(Exception):
    """The command could not be run to completion."""

    pass


class SpawnError(ExecutionError):
    """The program could not be launched."""

    pass


class ChildStdinWriteError(ExecutionError):
    """Writing the line to the child's stdin failed."""

    pass


class ChildStdoutReadError(ExecutionError):
    """Reading the child's captured stdout failed."""

    pass


def _write_stdin(stdin: IO[bytes], data: bytes) -> None:
    """Write ``data`` to the child and close its stdin.

    The child may exit, crash, never open stdin, or read part of the line and
    quit before we are done writing. Those show up as a closed pipe and are
    ignored here; the exit status still decides the result.

    Raises:
        ChildStdinWriteError: On any failure other than a closed pipe
    """
    try:
        try:
            stdin.write(data)
        finally:
            stdin.close()
    except BrokenPipeError:
        return
    except OSError as e:
        raise ChildStdinWriteError(str(e)) from e


class _StdinFeeder(threading.Thread):
    """Feeds the child's stdin while the caller drains its stdout."""

    def __init__(self, stdin: IO[bytes], data: bytes):
        super().__init__(name="fpipe-stdin-feeder", daemon=True)
        self._stdin = stdin
        self._data = data
        self.error: Optional[ChildStdinWriteError] = None

    def run(self) -> None:
        try:
            _write_stdin(self._stdin, self._data)
        except ChildStdinWriteError as e:
            self.error = e


def _read_stdout(stdout: IO[bytes]) -> bytes:
    try:
        return stdout.read()
    except OSError as e:
        raise ChildStdoutReadError(str(e)) from e


def _close_quietly(stream: Optional[IO[bytes]]) -> None:
    if stream is None:
        return
    try:
        stream.close()
    except OSError:
        pass


def _reap(proc: subprocess.Popen) -> None:
    """Release our pipe ends and wait so no zombie is left behind."""
    _close_quietly(proc.stdin)
    _close_quietly(proc.stdout)
    proc.wait()


def _stdout_target(request: SubprocessRequest) -> Optional[int]:
    # Capturing wins over quiet: captured output never reaches our stdout.
    if request.capture:
        return subprocess.PIPE
    if request.quiet:
        return subprocess.DEVNULL
    # None inherits our stdout, so the child's output interleaves live
    return None


def execute(request: SubprocessRequest) -> SubprocessResult:
    """Run the child described by ``request``.

    Stdin is piped only when the request carries stdin data, otherwise the
    child gets an empty stdin. Stderr is always inherited.

    When the line is written to stdin and stdout is captured at the same time,
    the write happens on a feeder thread while this thread drains stdout, so
    neither side can fill a pipe buffer and block the other.

    Args:
        request: What to run and how to wire its streams

    Returns:
        Result with exit success and captured output, or with ``error`` set
        when the command could not be run
    """
    if request.is_noop:
        return SubprocessResult.noop_result()

    try:
        proc = popen_with_validation(
            request.argv,
            stdin=subprocess.PIPE if request.attach_stdin else subprocess.DEVNULL,
            stdout=_stdout_target(request),
        )
    except (OSError, ValueError) as e:
        return SubprocessResult.failed(SpawnError(str(e)))

    feeder: Optional[_StdinFeeder] = None
    output = b""
    try:
        if request.attach_stdin:
            assert proc.stdin is not None
            data = request.stdin_data.encode()
            if request.capture:
                feeder = _StdinFeeder(proc.stdin, data)
                feeder.start()
            else:
                _write_stdin(proc.stdin, data)

        if request.capture:
            assert proc.stdout is not None
            output = _read_stdout(proc.stdout)
            proc.stdout.close()

        if feeder is not None:
            feeder.join()
            if feeder.error is not None:
                raise feeder.error
    except ExecutionError as e:
        if feeder is not None:
            # Closing our read end unblocks a child stuck writing stdout,
            # which in turn lets the feeder finish.
            _close_quietly(proc.stdout)
            feeder.join()
        _reap(proc)
        return SubprocessResult.failed(e)

    returncode = proc.wait()
    return SubprocessResult(success=returncode == 0, output=output)


__all__ = [
    "ChildStdinWriteError",
    "ChildStdoutReadError",
    "ExecutionError",
    "SpawnError",
    "execute",
]
