"""Rule engine for Klopy, a two-player territorial bug game."""

__version__ = "0.1.0"
