"""Command-line interface for linting and rendering markup files."""

from .main import main

__all__ = ["main"]
