"""PokeAPI-backed data provider."""

from __future__ import annotations

from typing import Any

import httpx

from pokefeed.config import settings
from pokefeed.core.models import PokemonDetail, PokemonSummary
from pokefeed.exceptions import TransportError
from pokefeed.logging import get_logger

logger = get_logger(__name__)


def parse_resource_id(url: str) -> int | None:
    """Extract the numeric id from a URL like .../api/v2/pokemon/25/."""
    parts = url.rstrip("/").split("/")
    return int(parts[-1]) if parts and parts[-1].isdigit() else None


def parse_summaries(payload: dict[str, Any]) -> list[PokemonSummary]:
    """Build summaries from a ``/pokemon`` list response."""
    try:
        return _build_summaries(payload["results"])
    except (KeyError, TypeError, AttributeError) as e:
        raise TransportError("Malformed page response") from e


def _build_summaries(results: list[Any]) -> list[PokemonSummary]:
    summaries = []
    for item in results:
        if not isinstance(item, dict):
            raise TransportError(f"Malformed list item: {item!r}")
        url = item.get("url", "")
        pokemon_id = parse_resource_id(url)
        if pokemon_id is None or not item.get("name"):
            raise TransportError(f"Malformed list item: {item!r}")
        summaries.append(
            PokemonSummary(
                id=pokemon_id,
                name=item["name"].replace("-", " ").title(),
                url=url,
            )
        )
    return summaries


def parse_detail(payload: dict[str, Any]) -> PokemonDetail:
    """Build a detail record from a ``/pokemon/{id}`` response."""
    try:
        return _build_detail(payload)
    except (TypeError, AttributeError) as e:
        raise TransportError("Malformed detail response") from e


def _build_detail(payload: dict[str, Any]) -> PokemonDetail:
    sprites = payload.get("sprites") or {}
    moves = payload.get("moves") or []
    move = None
    if moves:
        move = moves[0].get("move", {}).get("name")

    return PokemonDetail(
        image=sprites.get("front_default"),
        weight=payload.get("weight"),
        move=move,
    )


class PokeApiProvider:
    """Fetch Pokemon pages and detail from PokeAPI over HTTP.

    Use as an async context manager, or pass an existing ``httpx.AsyncClient``
    whose lifetime the caller manages.
    """

    def __init__(
        self,
        client: httpx.AsyncClient | None = None,
        base_url: str | None = None,
        page_size: int | None = None,
    ):
        self.base_url = (base_url or settings.pokeapi_base_url).rstrip("/")
        self.page_size = page_size or settings.page_size
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            timeout=settings.request_timeout_seconds,
            headers={"User-Agent": settings.user_agent},
        )

    async def __aenter__(self) -> PokeApiProvider:
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def _get_json(self, url: str, params: dict | None = None) -> Any:
        try:
            response = await self._client.get(url, params=params)
        except httpx.HTTPError as e:
            raise TransportError(str(e) or type(e).__name__) from e

        if response.status_code != 200:
            raise TransportError(f"HTTP {response.status_code} from {url}")

        try:
            return response.json()
        except ValueError as e:
            raise TransportError(f"Invalid JSON from {url}") from e

    async def fetch_page(self, page: int) -> list[PokemonSummary]:
        """Fetch one page (1-indexed) of the Pokemon list."""
        if page < 1:
            raise ValueError(f"Page numbers start at 1, got {page}")

        params = {"offset": (page - 1) * self.page_size, "limit": self.page_size}
        payload = await self._get_json(f"{self.base_url}/pokemon", params=params)
        summaries = parse_summaries(payload)
        logger.debug("Fetched page", page=page, count=len(summaries))
        return summaries

    async def fetch_detail(self, summary: PokemonSummary) -> PokemonDetail:
        """Fetch image, weight and first move for one Pokemon."""
        url = summary.url or f"{self.base_url}/pokemon/{summary.id}/"
        payload = await self._get_json(url)
        return parse_detail(payload)
