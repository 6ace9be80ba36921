"""Main entry point for Pokefeed."""

import asyncio
import sys

from pokefeed.core import PokemonListCoordinator, PokemonRepository
from pokefeed.core.state import Failed
from pokefeed.logging import get_logger, setup_logging
from pokefeed.providers import PokeApiProvider
from pokefeed.utils import format_view_state

logger = get_logger(__name__)

DEFAULT_PAGES = 2


def parse_pages(argv: list[str]) -> int:
    """Read the optional page count argument."""
    if len(argv) > 1 and argv[1].isdigit() and int(argv[1]) > 0:
        return int(argv[1])
    return DEFAULT_PAGES


async def collect(coordinator: PokemonListCoordinator, pages: int) -> None:
    """Load ``pages`` pages, giving each failed step one manual retry."""
    await coordinator.load_initial()
    if isinstance(coordinator.state.phase, Failed):
        logger.warning("Initial load failed, retrying", reason=coordinator.state.error)
        await coordinator.retry()
        if isinstance(coordinator.state.phase, Failed):
            return

    while coordinator.state.page < pages:
        page_before = coordinator.state.page
        await coordinator.load_more()
        if isinstance(coordinator.state.phase, Failed):
            logger.warning(
                "Page load failed, retrying",
                page=page_before + 1,
                reason=coordinator.state.error,
            )
            await coordinator.retry_page()
            if isinstance(coordinator.state.phase, Failed):
                return
        if coordinator.state.page == page_before:
            # Empty page: end of the list
            break


async def main(pages: int = DEFAULT_PAGES) -> int:
    """Fetch the list and print the final view state."""
    setup_logging()
    logger.info("Starting Pokefeed...", pages=pages)

    async with PokeApiProvider() as provider:
        coordinator = PokemonListCoordinator(PokemonRepository(provider))
        try:
            await collect(coordinator, pages)
            await coordinator.join()
        finally:
            await coordinator.close()

    state = coordinator.state
    print(format_view_state(state))
    return 1 if isinstance(state.phase, Failed) else 0


def run() -> None:
    """Entry point for the application."""
    try:
        sys.exit(asyncio.run(main(parse_pages(sys.argv))))
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    run()
