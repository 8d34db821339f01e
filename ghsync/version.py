"""Version information for github-team-sync."""

__version__ = "0.1.0"
