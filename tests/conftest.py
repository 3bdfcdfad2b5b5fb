"""Pytest configuration and shared fixtures."""

import errno
import subprocess
import sys

import pytest
from click.testing import CliRunner

from fpipe.cli.main import cli


@pytest.fixture
def cli_runner():
    """Provide Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def invoke(cli_runner):
    """Helper to invoke the CLI in-process with args and optional input.

    Usage:
        result = invoke(["-n", "true"], input_data="abc\\n")
        result.exit_code, result.output

    Children whose stdout is inherited write to the real fd 1, not to the
    runner's buffer; use ``run_fpipe`` to observe interleaved child output.
    """

    def _invoke(args, input_data=None):
        return cli_runner.invoke(cli, args, input=input_data)

    return _invoke


@pytest.fixture
def fpipe_cli():
    """Return argv prefix running fpipe in a separate interpreter."""
    return [sys.executable, "-m", "fpipe.cli.main"]


@pytest.fixture
def run_fpipe(fpipe_cli):
    """Run fpipe as a real process, like it runs inside a shell pipe."""

    def _run(*args, input_data=""):
        return subprocess.run(
            [*fpipe_cli, *args],
            input=input_data,
            capture_output=True,
            text=True,
            timeout=60,
        )

    return _run


@pytest.fixture
def py():
    """Build argv running a Python snippet in a child interpreter."""

    def _py(code):
        return [sys.executable, "-c", code]

    return _py


class FailingWriter:
    """Child stdin whose writes fail; closing still releases the pipe."""

    def __init__(self, pipe, error):
        self.pipe = pipe
        self.error = error

    def write(self, data):
        raise self.error

    def close(self):
        self.pipe.close()


class FailingReader:
    """Child stdout whose reads fail with EIO; closing releases the pipe."""

    def __init__(self, pipe):
        self.pipe = pipe

    def read(self, *args):
        raise OSError(errno.EIO, "Input/output error")

    def close(self):
        self.pipe.close()


@pytest.fixture
def spawned(monkeypatch):
    """Spawn real children, wrapping their pipes as configured.

    Returns ``(procs, wrappers)``: every child the executor started, and a
    dict where tests put ``"stdin"``/``"stdout"`` wrapper factories.
    """
    procs = []
    wrappers = {}

    def popen(argv, **kwargs):
        proc = subprocess.Popen(argv, **kwargs)
        if "stdin" in wrappers and proc.stdin is not None:
            proc.stdin = wrappers["stdin"](proc.stdin)
        if "stdout" in wrappers and proc.stdout is not None:
            proc.stdout = wrappers["stdout"](proc.stdout)
        procs.append(proc)
        return proc

    monkeypatch.setattr("fpipe.executor.popen_with_validation", popen)
    return procs, wrappers


@pytest.fixture
def failing_stdin():
    """Factory: stdin wrapper whose writes raise ``error``."""

    def _wrap(error):
        return lambda pipe: FailingWriter(pipe, error)

    return _wrap


@pytest.fixture
def failing_stdout():
    """Stdout wrapper whose reads raise EIO."""
    return FailingReader
