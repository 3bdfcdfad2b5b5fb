"""Per-line execution records: request, result and output decision."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Optional, Tuple

if TYPE_CHECKING:
    from ..executor import ExecutionError


@dataclass(frozen=True)
class SubprocessRequest:
    """What to run for one line and how to wire its streams.

    An empty ``argv`` is the no-op request: nothing is spawned and the line
    counts as a success with no captured output.
    """

    argv: Tuple[str, ...]
    stdin_data: Optional[str] = None
    quiet: bool = False
    capture: bool = False

    @classmethod
    def noop(cls) -> "SubprocessRequest":
        return cls(argv=())

    @property
    def is_noop(self) -> bool:
        return not self.argv

    @property
    def attach_stdin(self) -> bool:
        return self.stdin_data is not None


@dataclass(frozen=True)
class SubprocessResult:
    """Outcome of one child: exit success plus captured bytes, or an error."""

    success: bool = False
    output: bytes = b""
    error: Optional["ExecutionError"] = field(default=None)
    noop: bool = False

    @classmethod
    def noop_result(cls) -> "SubprocessResult":
        """Result of a no-op request: nothing ran, the line passes through."""
        return cls(success=True, noop=True)

    @classmethod
    def failed(cls, error: "ExecutionError") -> "SubprocessResult":
        return cls(success=False, output=b"", error=error)

    @property
    def ok(self) -> bool:
        """True when the child ran to completion (any exit status)."""
        return self.error is None


class OutputDecision(Enum):
    """What the line loop does with a finished line."""

    SKIP = "skip"
    EMIT_ORIGINAL_LINE = "emit_original_line"
    EMIT_CAPTURED_BYTES = "emit_captured_bytes"
    ABORT = "abort"


__all__ = ["OutputDecision", "SubprocessRequest", "SubprocessResult"]
