"""fpipe: filter (and map) lines of a shell pipe through a command."""

__all__ = ["__version__"]

__version__ = "0.1.0"
