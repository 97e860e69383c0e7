"""Command-line interface for userinput."""

from .app import app

__all__ = ["app"]
