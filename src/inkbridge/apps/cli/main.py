"""Entry point for the ``inkbridge`` console script."""
from __future__ import annotations

from inkbridge.apps.cli.commands.device import app

__all__ = ["app"]


if __name__ == "__main__":  # pragma: no cover
    app()
