"""Errors that end an fpipe run."""


class FpipeError(Exception):
    """Base class for fatal fpipe errors."""

    pass


class InputReadError(FpipeError):
    """Reading the next input line failed."""

    def __str__(self) -> str:
        return f"Error reading from stdin: {self.args[0]}"


class FatalExecutionError(FpipeError):
    """A templated command could not be run.

    The command is fixed by configuration, so a failure to run it would repeat
    for every line.
    """

    def __str__(self) -> str:
        return f"Error executing command: {self.args[0]}"


class OutputWriteError(FpipeError):
    """Writing to stdout failed for a reason other than a closed reader."""

    def __str__(self) -> str:
        return f"Error printing output: {self.args[0]}"


class DownstreamClosed(Exception):
    """The process reading our stdout went away.

    Not an error: the run ends successfully, like any pipeline stage whose
    consumer only wanted a prefix.
    """

    pass
