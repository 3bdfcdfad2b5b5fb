"""Records passed between the fpipe layers."""

from .execution import OutputDecision, SubprocessRequest, SubprocessResult
from .options import Options

__all__ = [
    "Options",
    "OutputDecision",
    "SubprocessRequest",
    "SubprocessResult",
]
