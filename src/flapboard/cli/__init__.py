"""Command line interface for flapboard."""

from flapboard.cli.commands.root import cli

__all__ = ["cli"]
