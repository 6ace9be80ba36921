"""Utility functions package."""

from pokefeed.utils.formatting import format_entry, format_phase, format_view_state

__all__ = [
    "format_entry",
    "format_phase",
    "format_view_state",
]
