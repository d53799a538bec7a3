"""skillgate command line."""

from skillgate.cli.main import app

__all__ = ["app"]
