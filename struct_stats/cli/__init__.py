"""Command line interface for struct-stats."""

from .main import main

__all__ = ["main"]
