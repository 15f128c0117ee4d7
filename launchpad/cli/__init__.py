"""Command line interface for launchpad"""

from .main import cli, main

__all__ = ["cli", "main"]
