"""Command line interface for SlackGuard."""

from .main import app

__all__ = ["app"]
