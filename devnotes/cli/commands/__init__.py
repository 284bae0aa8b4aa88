"""CLI commands module."""

from . import note

__all__ = ["note"]
