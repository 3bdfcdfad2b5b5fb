"""Process and subprocess utilities shared across fpipe layers.

Lives outside the executor so argv validation has a single home and the
``Popen`` call site stays easy to audit.
"""

from __future__ import annotations

import subprocess
from collections.abc import Sequence
from typing import Any


def _check_command(cmd: Sequence[str]) -> list[str]:
    """Require a program name; substituted arguments may be empty lines."""
    if not cmd:
        msg = "Command must include at least one argument"
        raise ValueError(msg)
    if not cmd[0].strip():
        msg = "Command name cannot be empty or whitespace"
        raise ValueError(msg)
    return list(cmd)


def popen_with_validation(
    cmd: Sequence[str], **kwargs: Any
) -> subprocess.Popen[Any]:
    """Run subprocess.Popen with validation to satisfy security lint checks."""
    return subprocess.Popen(_check_command(cmd), **kwargs)  # noqa: S603
