"""Command-line interface for MarketLens.

This module exports the main CLI entry point.
"""

from marketlens.cli.main import cli, main

__all__ = ["cli", "main"]
