"""Pytest configuration and shared fixtures."""

import asyncio

import pytest

from pokefeed.core.models import PokemonDetail, PokemonSummary
from pokefeed.exceptions import TransportError


class FakeProvider:
    """In-memory provider whose responses and timing tests control.

    ``pages`` and ``details`` map a page number / Pokemon id to a value or an
    exception to raise. A gate registered for a page or id blocks the next
    call for it until the event is set; the response is read before blocking.
    """

    def __init__(self, pages=None, details=None):
        self.pages = dict(pages or {})
        self.details = dict(details or {})
        self.page_gates: dict[int, asyncio.Event] = {}
        self.detail_gates: dict[int, asyncio.Event] = {}
        self.page_calls: list[int] = []
        self.detail_calls: list[int] = []
        self.in_flight = 0
        self.max_in_flight = 0

    async def fetch_page(self, page):
        self.page_calls.append(page)
        result = self.pages.get(page, [])
        gate = self.page_gates.pop(page, None)
        if gate is not None:
            await gate.wait()
        if isinstance(result, Exception):
            raise result
        return list(result)

    async def fetch_detail(self, summary):
        self.detail_calls.append(summary.id)
        result = self.details.get(summary.id)
        gate = self.detail_gates.pop(summary.id, None)
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            await asyncio.sleep(0)
            if gate is not None:
                await gate.wait()
        finally:
            self.in_flight -= 1
        if result is None:
            raise TransportError(f"no detail for {summary.id}")
        if isinstance(result, Exception):
            raise result
        return result


async def wait_until(predicate, attempts=200):
    """Yield to the event loop until ``predicate()`` holds."""
    for _ in range(attempts):
        if predicate():
            return
        await asyncio.sleep(0)
    raise AssertionError("condition never became true")


def summary(pokemon_id, name=None):
    return PokemonSummary(id=pokemon_id, name=name or f"Pokemon {pokemon_id}")


def detail(weight, move=None):
    return PokemonDetail(image=f"https://img.test/{weight}.png", weight=weight, move=move)


@pytest.fixture
def bulbasaur():
    """Return the first Pokemon summary."""
    return PokemonSummary(
        id=1,
        name="Bulbasaur",
        url="https://pokeapi.co/api/v2/pokemon/1/",
    )
