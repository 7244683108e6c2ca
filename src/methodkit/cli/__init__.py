"""Command line interface for methodkit."""

from methodkit.cli.app import app

__all__ = ["app"]
