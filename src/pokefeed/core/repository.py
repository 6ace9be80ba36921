"""Repository that turns provider outcomes into fetch results."""

from __future__ import annotations

from typing import TYPE_CHECKING

from pokefeed.core.models import Err, FetchResult, Ok, PokemonDetail, PokemonSummary
from pokefeed.exceptions import DetailFetchFailed, PageFetchFailed
from pokefeed.logging import get_logger

if TYPE_CHECKING:
    from pokefeed.providers.base import PokemonProvider

logger = get_logger(__name__)

PAGE_ERROR_FALLBACK = "Fetching the data failed!"
DETAIL_ERROR_FALLBACK = "Error fetching the pokemon detail!"


class PokemonRepository:
    """Wraps a provider so that loads return ``Ok``/``Err`` and never raise."""

    def __init__(self, provider: PokemonProvider):
        self.provider = provider

    async def load_page(self, page: int) -> FetchResult[list[PokemonSummary]]:
        """Load one page of summaries."""
        try:
            summaries = await self.provider.fetch_page(page)
        except Exception as e:
            reason = str(e) or PAGE_ERROR_FALLBACK
            logger.warning("Page fetch failed", page=page, error=reason)
            return Err(reason, PageFetchFailed(page, reason))
        return Ok(list(summaries))

    async def load_detail(self, summary: PokemonSummary) -> FetchResult[PokemonDetail]:
        """Load the detail record for one summary."""
        try:
            detail = await self.provider.fetch_detail(summary)
        except Exception as e:
            reason = str(e) or DETAIL_ERROR_FALLBACK
            logger.debug(
                "Detail fetch failed",
                pokemon_id=summary.id,
                error=reason,
            )
            return Err(reason, DetailFetchFailed(summary.id, reason))
        return Ok(detail)
