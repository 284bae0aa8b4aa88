"""Developer note keeper with per-note version history."""

__version__ = "1.0.0"
