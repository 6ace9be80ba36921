"""Data provider contract consumed by the list coordinator."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from pokefeed.core.models import PokemonDetail, PokemonSummary


@runtime_checkable
class PokemonProvider(Protocol):
    """Source of Pokemon pages and per-Pokemon detail.

    Both calls raise ``TransportError`` on network or parse problems and must
    be safe to retry.
    """

    async def fetch_page(self, page: int) -> list[PokemonSummary]:
        """Fetch one page (1-indexed) of summaries, in list order."""
        ...

    async def fetch_detail(self, summary: PokemonSummary) -> PokemonDetail:
        """Fetch the detail record for one summary."""
        ...
