"""Tests for the PokeAPI provider."""

import asyncio

import httpx
import pytest

from pokefeed.core.models import PokemonDetail, PokemonSummary
from pokefeed.exceptions import TransportError
from pokefeed.providers.pokeapi import (
    PokeApiProvider,
    parse_detail,
    parse_resource_id,
    parse_summaries,
)

BASE_URL = "https://pokeapi.test/api/v2"

PAGE_PAYLOAD = {
    "count": 1302,
    "results": [
        {"name": "bulbasaur", "url": f"{BASE_URL}/pokemon/1/"},
        {"name": "mr-mime", "url": f"{BASE_URL}/pokemon/122/"},
    ],
}

DETAIL_PAYLOAD = {
    "id": 1,
    "weight": 69,
    "sprites": {"front_default": "https://sprites.test/1.png"},
    "moves": [{"move": {"name": "razor-wind"}}, {"move": {"name": "swords-dance"}}],
}


def make_provider(handler, page_size=20):
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return client, PokeApiProvider(client=client, base_url=BASE_URL, page_size=page_size)


def test_parse_resource_id():
    assert parse_resource_id(f"{BASE_URL}/pokemon/25/") == 25
    assert parse_resource_id(f"{BASE_URL}/pokemon/25") == 25
    assert parse_resource_id(f"{BASE_URL}/pokemon/") is None


def test_parse_summaries():
    summaries = parse_summaries(PAGE_PAYLOAD)

    assert summaries == [
        PokemonSummary(id=1, name="Bulbasaur", url=f"{BASE_URL}/pokemon/1/"),
        PokemonSummary(id=122, name="Mr Mime", url=f"{BASE_URL}/pokemon/122/"),
    ]


def test_parse_summaries_rejects_malformed_payload():
    with pytest.raises(TransportError):
        parse_summaries({"count": 0})
    with pytest.raises(TransportError):
        parse_summaries({"results": [{"name": "missingno", "url": "nowhere"}]})


@pytest.mark.parametrize(
    "payload",
    [
        {"results": None},
        {"results": [{"name": "bulbasaur", "url": 1}]},
        {"results": [{"name": 7, "url": f"{BASE_URL}/pokemon/1/"}]},
        ["not", "a", "page"],
        None,
    ],
)
def test_parse_summaries_wraps_wrong_types(payload):
    with pytest.raises(TransportError):
        parse_summaries(payload)


@pytest.mark.parametrize(
    "payload",
    [
        {"moves": ["razor-wind"]},
        {"sprites": "https://sprites.test/1.png"},
        [],
        None,
    ],
)
def test_parse_detail_wraps_wrong_types(payload):
    with pytest.raises(TransportError):
        parse_detail(payload)


def test_parse_detail_uses_first_move():
    assert parse_detail(DETAIL_PAYLOAD) == PokemonDetail(
        image="https://sprites.test/1.png",
        weight=69,
        move="razor-wind",
    )


def test_parse_detail_tolerates_missing_fields():
    assert parse_detail({}) == PokemonDetail()


def test_fetch_page_requests_offset_and_limit():
    requests = []

    def handler(request):
        requests.append(request)
        return httpx.Response(200, json=PAGE_PAYLOAD)

    async def scenario():
        client, provider = make_provider(handler, page_size=20)
        async with client:
            return await provider.fetch_page(3)

    summaries = asyncio.run(scenario())

    assert [s.id for s in summaries] == [1, 122]
    assert requests[0].url.path == "/api/v2/pokemon"
    assert requests[0].url.params["offset"] == "40"
    assert requests[0].url.params["limit"] == "20"


def test_fetch_page_rejects_non_positive_page():
    async def scenario():
        client, provider = make_provider(lambda request: httpx.Response(200, json=PAGE_PAYLOAD))
        async with client:
            await provider.fetch_page(0)

    with pytest.raises(ValueError):
        asyncio.run(scenario())


def test_fetch_detail_follows_summary_url():
    def handler(request):
        assert request.url.path == "/api/v2/pokemon/1/"
        return httpx.Response(200, json=DETAIL_PAYLOAD)

    async def scenario():
        client, provider = make_provider(handler)
        async with client:
            return await provider.fetch_detail(
                PokemonSummary(id=1, name="Bulbasaur", url=f"{BASE_URL}/pokemon/1/")
            )

    assert asyncio.run(scenario()).weight == 69


def test_fetch_detail_builds_url_from_id():
    paths = []

    def handler(request):
        paths.append(request.url.path)
        return httpx.Response(200, json=DETAIL_PAYLOAD)

    async def scenario():
        client, provider = make_provider(handler)
        async with client:
            await provider.fetch_detail(PokemonSummary(id=7, name="Squirtle"))

    asyncio.run(scenario())

    assert paths == ["/api/v2/pokemon/7/"]


@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(500),
        httpx.Response(404),
        httpx.Response(200, content=b"<html>not json</html>"),
    ],
)
def test_bad_responses_raise_transport_error(response):
    async def scenario():
        client, provider = make_provider(lambda request: response)
        async with client:
            await provider.fetch_page(1)

    with pytest.raises(TransportError):
        asyncio.run(scenario())


def test_network_error_raises_transport_error():
    def handler(request):
        raise httpx.ConnectError("network down", request=request)

    async def scenario():
        client, provider = make_provider(handler)
        async with client:
            await provider.fetch_page(1)

    with pytest.raises(TransportError, match="network down"):
        asyncio.run(scenario())


def test_provider_does_not_close_borrowed_client():
    async def scenario():
        client, provider = make_provider(lambda request: httpx.Response(200, json=PAGE_PAYLOAD))
        async with provider:
            pass
        closed = client.is_closed
        await client.aclose()
        return closed

    assert asyncio.run(scenario()) is False
