"""Command-line interface for peat."""

from .app import app, main

__all__ = ["app", "main"]
