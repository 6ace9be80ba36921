"""Data providers package."""

from pokefeed.providers.base import PokemonProvider
from pokefeed.providers.pokeapi import PokeApiProvider

__all__ = [
    "PokemonProvider",
    "PokeApiProvider",
]
