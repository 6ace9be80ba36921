"""Pokefeed - paginated Pokemon list with lazily merged detail."""

__version__ = "0.1.0"
