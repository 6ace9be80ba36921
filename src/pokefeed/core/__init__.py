"""Core list state machine package."""

from pokefeed.core.coordinator import PokemonListCoordinator
from pokefeed.core.models import (
    Err,
    FetchResult,
    Ok,
    PokemonDetail,
    PokemonEntry,
    PokemonSummary,
)
from pokefeed.core.repository import PokemonRepository
from pokefeed.core.state import (
    Failed,
    Idle,
    LoadPhase,
    Loading,
    PhaseKind,
    Ready,
    Refreshing,
    ViewState,
)
from pokefeed.core.store import StateStore

__all__ = [
    "PokemonListCoordinator",
    "PokemonRepository",
    "StateStore",
    "ViewState",
    "LoadPhase",
    "PhaseKind",
    "Idle",
    "Loading",
    "Refreshing",
    "Ready",
    "Failed",
    "PokemonSummary",
    "PokemonDetail",
    "PokemonEntry",
    "FetchResult",
    "Ok",
    "Err",
]
