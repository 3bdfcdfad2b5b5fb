"""Run configuration model."""

from __future__ import annotations

from typing import Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Options(BaseModel):
    """Validated configuration shared read-only by every line of a run."""

    model_config = ConfigDict(frozen=True)

    quiet: bool = False
    negate: bool = False
    map: bool = False
    command_and_args: Tuple[str, ...] = Field(default_factory=tuple)

    @field_validator("command_and_args")
    @classmethod
    def program_not_blank(cls, v: Tuple[str, ...]) -> Tuple[str, ...]:
        """Reject an empty program token; arguments may be anything."""

        if v and not v[0]:
            raise ValueError("Command name cannot be empty")
        return v

    @property
    def has_command(self) -> bool:
        return bool(self.command_and_args)


__all__ = ["Options"]
