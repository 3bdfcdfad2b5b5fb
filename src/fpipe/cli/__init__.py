"""fpipe CLI layer; the click command lives in :mod:`fpipe.cli.main`."""
