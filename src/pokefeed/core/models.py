"""Pokemon list data model."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Generic, TypeVar

from pokefeed.exceptions import PokefeedError

T = TypeVar("T")


@dataclass(frozen=True)
class PokemonSummary:
    """A list item as returned by a page fetch."""

    id: int
    name: str
    url: str | None = None


@dataclass(frozen=True)
class PokemonDetail:
    """Per-item detail fetched lazily after its page loads."""

    image: str | None = None
    weight: int | None = None
    move: str | None = None


@dataclass(frozen=True)
class PokemonEntry:
    """A summary paired with its detail, once the detail has resolved."""

    summary: PokemonSummary
    detail: PokemonDetail | None = None

    @property
    def id(self) -> int:
        return self.summary.id

    @property
    def name(self) -> str:
        return self.summary.name

    def with_detail(self, detail: PokemonDetail | None) -> PokemonEntry:
        """Return a copy of this entry carrying ``detail``."""
        return replace(self, detail=detail)


@dataclass(frozen=True)
class Ok(Generic[T]):
    """Successful fetch result."""

    value: T

    @property
    def is_ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Err:
    """Failed fetch result with a human-readable reason."""

    reason: str
    error: PokefeedError | None = None

    @property
    def is_ok(self) -> bool:
        return False


FetchResult = Ok[T] | Err
