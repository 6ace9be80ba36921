"""Formatting utilities for console display."""

from pokefeed.core.models import PokemonEntry
from pokefeed.core.state import Failed, Idle, LoadPhase, Loading, Ready, Refreshing, ViewState


def format_entry(entry: PokemonEntry) -> str:
    """Format one list entry as a single line.

    Args:
        entry: The list entry

    Returns:
        Line with id and name, plus whatever detail has resolved
    """
    parts = [f"#{entry.id} {entry.name}"]
    detail = entry.detail
    if detail is not None:
        if detail.weight is not None:
            parts.append(f"Weight: {detail.weight} Kg")
        if detail.move is not None:
            parts.append(f"Move: {detail.move}")
        if detail.image:
            parts.append(detail.image)
    return " | ".join(parts)


def format_phase(phase: LoadPhase) -> str:
    """Format a load phase as a short status label."""
    if isinstance(phase, Failed):
        return f"Error: {phase.reason}"
    labels = {
        Idle: "Idle",
        Loading: "Loading...",
        Refreshing: "Refreshing...",
        Ready: "Ready",
    }
    return labels[type(phase)]


def format_view_state(state: ViewState) -> str:
    """Format a whole snapshot: a status line followed by one line per entry."""
    header = f"{format_phase(state.phase)} ({len(state.entries)} Pokemon, page {state.page})"
    lines = [header]
    lines.extend(f"  {format_entry(entry)}" for entry in state.entries)
    return "\n".join(lines)
