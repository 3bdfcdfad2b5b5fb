"""fpipe core logic.

This module contains the per-line processing separated from CLI presentation:
- decision: exit outcome + flags -> output decision
- streaming: line loop and output sink
- errors: fatal error types and the benign downstream-closed signal
"""

from .decision import decide
from .errors import (
    DownstreamClosed,
    FatalExecutionError,
    FpipeError,
    InputReadError,
    OutputWriteError,
)
from .streaming import OutputSink, iter_lines, process_line, run_lines

__all__ = [
    "DownstreamClosed",
    "FatalExecutionError",
    "FpipeError",
    "InputReadError",
    "OutputSink",
    "OutputWriteError",
    "decide",
    "iter_lines",
    "process_line",
    "run_lines",
]
