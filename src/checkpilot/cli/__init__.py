"""Command line interface for checkpilot."""

from checkpilot.cli.app import dispatch, run

__all__ = ["dispatch", "run"]
