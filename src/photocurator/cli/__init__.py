"""CLI interface package for photocurator.

This package provides the command-line interface for the photocurator tool.
"""

from photocurator.cli.app import app

__all__ = ['app']
