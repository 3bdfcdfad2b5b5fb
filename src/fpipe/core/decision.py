"""Turn a child's outcome into an output decision."""

from __future__ import annotations

from ..models import Options, OutputDecision, SubprocessResult
from ..template import ExecutionMode


def decide(
    result: SubprocessResult, options: Options, mode: ExecutionMode
) -> OutputDecision:
    """Decide what to do with a line after its command ran.

    Args:
        result: Outcome reported by the executor
        options: Run configuration (negate and map apply here)
        mode: Template execution mode; decides whether errors are fatal

    Returns:
        ABORT for an execution error in templated mode, SKIP for an execution
        error in self-executing mode or an unsuccessful exit, otherwise the
        kind of emission
    """
    if result.error is not None:
        if mode is ExecutionMode.SELF_EXECUTING:
            return OutputDecision.SKIP
        return OutputDecision.ABORT

    if result.noop:
        return OutputDecision.EMIT_ORIGINAL_LINE

    if not (result.success ^ options.negate):
        return OutputDecision.SKIP

    if options.map:
        return OutputDecision.EMIT_CAPTURED_BYTES
    return OutputDecision.EMIT_ORIGINAL_LINE


__all__ = ["decide"]
