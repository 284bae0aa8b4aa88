"""Developer notes CLI.

A command-line front end for the note manager, built with Click and Rich.
"""

from devnotes.cli.main import cli

__all__ = ["cli"]
