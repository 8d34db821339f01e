"""GitHub Team Sync - declarative team membership and user reconciliation.

This package reconciles locally declared GitHub team memberships and user
records with the state reported by the GitHub REST API.
"""

from ghsync.version import __version__

__all__ = ["__version__"]
