"""Session-scoped rating cache.

Memoizes canonical title -> Rating for the lifetime of one page session.
Failed lookups are never stored, so a later encounter retries them.
"""

import asyncio
from collections.abc import Awaitable, Callable

from src.enrichment.types import Rating
from src.enrichment.utils.logger import setup_logger

logger = setup_logger("enrichment.cache")

RatingFetcher = Callable[[str], Awaitable[Rating]]


class RatingCache:
    """Unbounded in-memory title -> Rating mapping.

    No eviction: the candidate set of a page is bounded by the visible
    catalog size. Concurrent misses for one title share a single fetch.
    """

    def __init__(self) -> None:
        self._entries: dict[str, Rating] = {}
        self._inflight: dict[str, asyncio.Task[Rating]] = {}
        # Bumped by clear(); fetches started before it are not stored
        self._generation = 0

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, title: object) -> bool:
        return title in self._entries

    def get(self, title: str) -> Rating | None:
        """Return the cached Rating for a title, if any."""
        return self._entries.get(title)

    def put(self, title: str, rating: Rating) -> None:
        """Store a Rating. The first stored Rating for a title is kept."""
        self._entries.setdefault(title, rating)

    def clear(self) -> None:
        """Drop every entry (page navigation or reload)."""
        self._generation += 1
        self._entries.clear()
        self._inflight.clear()

    async def get_or_fetch(self, title: str, fetch: RatingFetcher) -> Rating:
        """Return the cached Rating or fetch, store and return it.

        Args:
            title: Canonical title (cache key).
            fetch: Coroutine function performing the remote lookup.

        Returns:
            The cached or freshly fetched Rating.

        Raises:
            Whatever ``fetch`` raises. Nothing is cached in that case.
        """
        cached = self._entries.get(title)
        if cached is not None:
            logger.debug(f"Cache hit: '{title}'")
            return cached

        task = self._inflight.get(title)
        if task is None:
            logger.debug(f"Cache miss: '{title}'")
            task = asyncio.ensure_future(self._fetch_and_store(title, fetch, self._generation))
            task.add_done_callback(self._on_fetch_done)
            self._inflight[title] = task

        return await asyncio.shield(task)

    async def _fetch_and_store(self, title: str, fetch: RatingFetcher, generation: int) -> Rating:
        try:
            rating = await fetch(title)
        finally:
            if generation == self._generation:
                self._inflight.pop(title, None)

        if generation != self._generation:
            return rating
        self.put(title, rating)
        return self._entries[title]

    @staticmethod
    def _on_fetch_done(task: asyncio.Task[Rating]) -> None:
        # Every awaiter may have been cancelled; read the error here
        if not task.cancelled() and task.exception() is not None:
            logger.debug(f"Rating fetch failed: {task.exception()!r}")
