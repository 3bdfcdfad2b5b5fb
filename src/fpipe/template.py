"""Command templates.

The configured command and its arguments are parsed once into a
:class:`Template`. Per line, :func:`build_request` turns the template and the
current line into a :class:`~fpipe.models.SubprocessRequest`.

The placeholder ``{}`` marks where the line is substituted. When it appears as
the program token the line itself names the program to run (self-executing
mode). When it appears nowhere, the line is written to the child's stdin
instead; a line is never both substituted and piped.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Sequence, Tuple

from .models import Options, SubprocessRequest

PLACEHOLDER = "{}"


class ExecutionMode(Enum):
    """Where the program name comes from."""

    TEMPLATED = "templated"
    SELF_EXECUTING = "self_executing"


class InputDeliveryMode(Enum):
    """How the line reaches the child."""

    AS_STDIN = "as_stdin"
    AS_SUBSTITUTION = "as_substitution"


@dataclass(frozen=True)
class Template:
    """Parsed command template, fixed for the whole run."""

    tokens: Tuple[str, ...]
    mode: ExecutionMode
    delivery: InputDeliveryMode

    @property
    def program(self) -> str:
        return self.tokens[0]

    @property
    def arguments(self) -> Tuple[str, ...]:
        return self.tokens[1:]

    @property
    def self_executing(self) -> bool:
        return self.mode is ExecutionMode.SELF_EXECUTING


def resolve_template(tokens: Sequence[str]) -> Optional[Template]:
    """Parse command tokens into a template.

    Args:
        tokens: Configured command followed by its arguments

    Returns:
        The template, or None when no command is configured (every line then
        passes through unchanged)
    """
    if not tokens:
        return None

    tokens = tuple(tokens)
    if tokens[0] == PLACEHOLDER:
        mode = ExecutionMode.SELF_EXECUTING
    else:
        mode = ExecutionMode.TEMPLATED

    if PLACEHOLDER in tokens:
        delivery = InputDeliveryMode.AS_SUBSTITUTION
    else:
        delivery = InputDeliveryMode.AS_STDIN

    return Template(tokens=tokens, mode=mode, delivery=delivery)


def substitute(tokens: Sequence[str], line: str) -> List[str]:
    """Replace every placeholder token with the line text."""
    return [line if token == PLACEHOLDER else token for token in tokens]


def build_request(
    template: Template, line: str, options: Options
) -> SubprocessRequest:
    """Build the subprocess request for one input line.

    Args:
        template: Parsed command template
        line: Current input line, without its record separator
        options: Run configuration (quiet/map decide stdout wiring)

    Returns:
        Request to hand to the executor; a no-op request when a
        self-executing line has no words
    """
    if template.self_executing:
        words = line.split()
        if not words:
            return SubprocessRequest.noop()
        argv = [*words, *substitute(template.arguments, line)]
        stdin_data = None
    else:
        argv = [template.program, *substitute(template.arguments, line)]
        if template.delivery is InputDeliveryMode.AS_STDIN:
            stdin_data = line
        else:
            stdin_data = None

    return SubprocessRequest(
        argv=tuple(argv),
        stdin_data=stdin_data,
        quiet=options.quiet,
        capture=options.map,
    )


__all__ = [
    "PLACEHOLDER",
    "ExecutionMode",
    "InputDeliveryMode",
    "Template",
    "build_request",
    "resolve_template",
    "substitute",
]
