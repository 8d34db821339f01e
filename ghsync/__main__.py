"""Allow running as ``python -m ghsync``."""

from ghsync.cli.app import app

if __name__ == "__main__":
    app()
