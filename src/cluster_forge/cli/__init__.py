"""Command-line interface for cluster-forge."""

from .app import app, main

__all__ = ["app", "main"]
