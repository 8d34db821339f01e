"""Command-line interface for github-team-sync."""

from ghsync.cli.app import app

__all__ = ["app"]
