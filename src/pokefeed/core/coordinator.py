"""Pagination and detail-merge coordinator for the Pokemon list.

The coordinator is the single writer of the list's ``ViewState``. Callers
issue intents (``load_initial``, ``load_more``, ``refresh``, ``retry``,
``retry_page``) and observe the outcome only through the state store.

Every intent runs as its own task:

1. A short locked section records the starting phase and remembers the
   state generation the operation started from.
2. The page fetch runs unlocked.
3. A second locked section commits the page result.
4. Detail fetches for the newly committed entries run concurrently, and
   their results are merged in one locked write, but only while the list
   generation they were requested for is still current.

Nothing is retried automatically.
"""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator, Coroutine, Sequence
from dataclasses import replace
from typing import Any

from pokefeed.config import settings
from pokefeed.core.models import Err, Ok, PokemonDetail, PokemonSummary
from pokefeed.core.repository import PAGE_ERROR_FALLBACK, PokemonRepository
from pokefeed.core.state import Failed, Loading, Ready, Refreshing, ViewState
from pokefeed.core.store import StateStore
from pokefeed.logging import get_logger

logger = get_logger(__name__)


class PokemonListCoordinator:
    """Owns the list view state and sequences page and detail loads.

    Intents must be called from a running event loop. Each returns the
    ``asyncio.Task`` doing the work; awaiting it is optional and never raises.
    """

    def __init__(
        self,
        repository: PokemonRepository,
        store: StateStore | None = None,
        detail_concurrency: int | None = None,
    ):
        self.repository = repository
        self.store = store or StateStore()
        self._lock = asyncio.Lock()
        limit = detail_concurrency or settings.detail_concurrency
        # No limit means every detail fetch of a batch is outstanding at once
        self._detail_semaphore = asyncio.Semaphore(limit) if limit else None
        self._tasks: set[asyncio.Task] = set()
        self._load_more_task: asyncio.Task | None = None

    @property
    def state(self) -> ViewState:
        """Current snapshot."""
        return self.store.value

    def subscribe(self) -> AsyncIterator[ViewState]:
        """Iterate over the current snapshot and every later one."""
        return self.store.subscribe()

    # Intents

    def load_initial(self) -> asyncio.Task:
        """Clear the list and load page 1 from scratch."""
        return self._spawn(self._load_initial(), "load_initial")

    def load_more(self) -> asyncio.Task:
        """Append the next page.

        While the previous ``load_more`` is still waiting for its page, that
        task is returned instead of requesting the same page twice. Once the
        page is committed, a new call requests the following page even if the
        previous page's detail fetches are still running.
        """
        if self._load_more_task is not None and not self._load_more_task.done():
            return self._load_more_task
        self._load_more_task = self._spawn(self._load_more(), "load_more")
        return self._load_more_task

    def refresh(self) -> asyncio.Task:
        """Reload page 1 while keeping the current entries visible."""
        return self._spawn(self._refresh(), "refresh")

    def retry(self) -> asyncio.Task:
        """Start over after a failed initial load."""
        return self.load_initial()

    def retry_page(self) -> asyncio.Task:
        """Request the page whose append failed again."""
        return self.load_more()

    # Lifecycle

    async def join(self) -> None:
        """Wait until every running operation and detail fan-out has finished."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    async def close(self) -> None:
        """Cancel outstanding work and end all subscriptions."""
        tasks = list(self._tasks)
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        self.store.close()

    # Operations

    async def _load_initial(self) -> None:
        async with self._lock:
            self._commit(self.state.replace_entries([], Loading(), page=1))

        result = await self.repository.load_page(1)

        async with self._lock:
            current = self.state
            if isinstance(result, Err):
                self._commit(current.with_phase(Failed(result.reason)))
                return
            state = current.replace_entries(result.value, Ready(), page=1)
            self._commit(state)

        logger.info("Initial page loaded", count=len(state.entries))
        await self._fan_out([entry.summary for entry in state.entries], state.generation)

    async def _load_more(self) -> None:
        try:
            appended = await self._append_next_page()
        finally:
            if self._load_more_task is asyncio.current_task():
                self._load_more_task = None

        if appended is not None:
            added, generation = appended
            await self._fan_out(added, generation)

    async def _append_next_page(self) -> tuple[list[PokemonSummary], int] | None:
        """Fetch and commit the next page; return what needs detail."""
        async with self._lock:
            generation = self.state.generation
            page = self.state.page + 1

        result = await self.repository.load_page(page)

        async with self._lock:
            current = self.state
            if current.generation != generation:
                # The list was replaced while this page was in flight
                logger.debug(
                    "Discarding page for replaced list",
                    page=page,
                    generation=generation,
                    current_generation=current.generation,
                )
                return None
            if isinstance(result, Err):
                self._commit(current.with_phase(Failed(result.reason)))
                return None
            if not result.value:
                logger.info("No more pages", page=page)
                self._commit(current.with_phase(Ready()))
                return None

            state, added = current.append_entries(result.value)
            state = replace(state, phase=Ready(), page=max(current.page, page))
            self._commit(state)

        logger.info(
            "Page appended",
            page=page,
            received=len(result.value),
            added=len(added),
        )
        return added, state.generation

    async def _refresh(self) -> None:
        async with self._lock:
            self._commit(self.state.with_phase(Refreshing()))

        result = await self.repository.load_page(1)

        async with self._lock:
            current = self.state
            if isinstance(result, Err):
                self._commit(current.with_phase(Failed(result.reason)))
                return
            state = current.replace_entries(result.value, Ready(), page=1)
            self._commit(state)

        logger.info("List refreshed", count=len(state.entries))
        await self._fan_out([entry.summary for entry in state.entries], state.generation)

    async def _fan_out(self, summaries: Sequence[PokemonSummary], generation: int) -> None:
        """Fetch detail for every summary concurrently, then merge once."""
        if not summaries:
            return

        results = await asyncio.gather(
            *(self._fetch_detail(summary) for summary in summaries)
        )
        details: dict[int, PokemonDetail] = {
            summary.id: result.value
            for summary, result in zip(summaries, results)
            if isinstance(result, Ok)
        }

        async with self._lock:
            state, applied = self.state.merge_details(details, generation)
            if applied:
                self._commit(state)

        logger.info(
            "Detail fan-out finished",
            requested=len(summaries),
            resolved=len(details),
            failed=len(summaries) - len(details),
            applied=applied,
        )
        if applied < len(details):
            logger.debug(
                "Discarded stale details",
                generation=generation,
                discarded=len(details) - applied,
            )

    async def _fetch_detail(self, summary: PokemonSummary):
        if self._detail_semaphore is None:
            return await self.repository.load_detail(summary)
        async with self._detail_semaphore:
            return await self.repository.load_detail(summary)

    # Internals

    def _spawn(self, operation: Coroutine[Any, Any, None], name: str) -> asyncio.Task:
        task = asyncio.get_running_loop().create_task(
            self._run(operation, name), name=f"pokefeed:{name}"
        )
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def _run(self, operation: Coroutine[Any, Any, None], name: str) -> None:
        try:
            await operation
        except Exception as e:
            logger.exception("Operation failed unexpectedly", operation=name)
            async with self._lock:
                if not self.store.closed:
                    self._commit(self.state.with_phase(Failed(str(e) or PAGE_ERROR_FALLBACK)))

    def _commit(self, state: ViewState) -> None:
        previous = self.state
        self.store.set(state)
        if previous.phase != state.phase:
            logger.debug(
                "Phase changed",
                previous=previous.phase.kind.value,
                phase=state.phase.kind.value,
                entries=len(state.entries),
                page=state.page,
            )
