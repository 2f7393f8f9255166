"""CLI commands module."""

from . import analyze, bonds

__all__ = ["analyze", "bonds"]
