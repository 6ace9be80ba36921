"""Observable container for the current view state."""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator, Callable

from pokefeed.core.state import ViewState
from pokefeed.logging import get_logger

logger = get_logger(__name__)

Listener = Callable[[ViewState], None]

_CLOSED = object()


class StateStore:
    """Holds one ViewState and publishes every replacement to observers.

    Snapshots are frozen, so observers can never see a half-applied update.
    Only the owning coordinator calls ``set``. Each ``subscribe`` iterator has
    its own unbounded queue: the writer never waits on a slow subscriber, and
    a subscriber that stops iterating keeps buffering snapshots until it is
    closed.
    """

    def __init__(self, initial: ViewState | None = None):
        self._value = initial if initial is not None else ViewState()
        self._queues: set[asyncio.Queue] = set()
        self._listeners: list[Listener] = []
        self._closed = False

    @property
    def value(self) -> ViewState:
        """Current snapshot."""
        return self._value

    @property
    def closed(self) -> bool:
        return self._closed

    def set(self, state: ViewState) -> None:
        """Publish a new snapshot."""
        if self._closed:
            raise RuntimeError("StateStore is closed")
        if state == self._value:
            return
        self._value = state
        for queue in self._queues:
            queue.put_nowait(state)
        for listener in list(self._listeners):
            self._notify(listener, state)

    def listen(self, listener: Listener) -> Callable[[], None]:
        """Call ``listener`` with the current snapshot and each later one.

        Returns a function that removes the listener.
        """
        self._listeners.append(listener)
        self._notify(listener, self._value)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self, listener: Listener, state: ViewState) -> None:
        try:
            listener(state)
        except Exception as e:
            logger.error("State listener failed", error=str(e))

    async def subscribe(self) -> AsyncIterator[ViewState]:
        """Yield the current snapshot, then every subsequent one until closed."""
        queue: asyncio.Queue = asyncio.Queue()
        queue.put_nowait(self._value)
        if self._closed:
            queue.put_nowait(_CLOSED)
        self._queues.add(queue)
        try:
            while True:
                item = await queue.get()
                if item is _CLOSED:
                    return
                yield item
        finally:
            self._queues.discard(queue)

    def close(self) -> None:
        """End every open subscription."""
        if self._closed:
            return
        self._closed = True
        for queue in self._queues:
            queue.put_nowait(_CLOSED)
        self._listeners.clear()
