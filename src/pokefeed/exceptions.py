"""Exception types raised by Pokefeed."""


class PokefeedError(Exception):
    """Base class for Pokefeed errors."""


class TransportError(PokefeedError):
    """A data provider could not fetch or parse a response."""


class PageFetchFailed(PokefeedError):
    """A page load failed; surfaces only as a ``Failed`` phase."""

    def __init__(self, page: int, reason: str):
        super().__init__(reason)
        self.page = page
        self.reason = reason


class DetailFetchFailed(PokefeedError):
    """A detail fetch failed; absorbed at the fan-out boundary."""

    def __init__(self, pokemon_id: int, reason: str):
        super().__init__(reason)
        self.pokemon_id = pokemon_id
        self.reason = reason
