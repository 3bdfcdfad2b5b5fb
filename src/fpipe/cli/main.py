"""fpipe CLI entry point."""

import io
import os
import sys

import click
from pydantic import ValidationError

from .. import __version__
from ..core import DownstreamClosed, FpipeError, run_lines
from ..models import Options


def _silence_stdout():
    """Point the stdout fd at /dev/null after the reader went away.

    Keeps the interpreter's final flush at exit from failing a second time.
    """
    try:
        fd = sys.stdout.fileno()
    except (AttributeError, OSError, ValueError, io.UnsupportedOperation):
        # Not a real file handle (e.g., Click test runner)
        return
    devnull = os.open(os.devnull, os.O_WRONLY)
    os.dup2(devnull, fd)
    os.close(devnull)


@click.command(
    context_settings=dict(
        allow_interspersed_args=False,
        help_option_names=["-h", "--help"],
    )
)
@click.option(
    "-q",
    "--quiet",
    "-s",
    "--silent",
    "quiet",
    is_flag=True,
    default=False,
    help="Suppress stdout of command (stderr is still propagated)",
)
@click.option(
    "-n",
    "--negate",
    is_flag=True,
    default=False,
    help="Negate the command exit status",
)
@click.option(
    "-m",
    "--map",
    "map_",
    is_flag=True,
    default=False,
    help="Perform mapping (only command output is emitted, only if successful)",
)
@click.version_option(__version__, prog_name="fpipe")
@click.argument("command_and_args", nargs=-1, type=click.UNPROCESSED)
def cli(quiet, negate, map_, command_and_args):
    """Filter (and map) in a shell pipe.

    Each input line is handed to COMMAND. The line is kept when the command
    succeeds and dropped when it fails.

    '{}' arguments to the command are replaced with the input line before
    execution. Without any '{}', the line is written to the command's stdin.
    When the command itself is '{}', each line is run as a command.

    Examples:
        # Keep lines that name existing files
        ls | fpipe test -f {}

        # Drop lines matching a pattern
        fpipe -n -q grep -q secret < notes.txt

        # Replace each line with the command's output
        fpipe -m wc -c < lines.txt

        # Run each line as a command, keep those that succeed
        fpipe -q {} < commands.txt

    Note:
        Everything from COMMAND onwards is passed to the command, options
        included. Use '--' before a command that starts with '-'.
    """
    try:
        options = Options(
            quiet=quiet,
            negate=negate,
            map=map_,
            command_and_args=command_and_args,
        )
    except ValidationError as e:
        message = e.errors()[0]["msg"]
        click.echo(f"Error: {message}", err=True)
        sys.exit(1)

    try:
        run_lines(
            options,
            click.get_binary_stream("stdin"),
            click.get_binary_stream("stdout"),
        )
    except DownstreamClosed:
        # Reader took what it wanted (e.g., `fpipe ... | head -1`)
        _silence_stdout()
        sys.exit(0)
    except FpipeError as e:
        click.echo(str(e), err=True)
        sys.exit(1)


def main():
    """Entry point for CLI."""
    cli(prog_name="fpipe")


if __name__ == "__main__":
    main()
