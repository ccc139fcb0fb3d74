"""
Fetch-through deck cache.

Keeps Decks in memory keyed by normalized play code. A lookup returns the
cached Deck while it is younger than the TTL; otherwise it fetches the deck,
replaces the entry and returns the new Deck.

INVARIANTS:
- Keys are normalized (stripped, lower-cased); " CAHBS " and "cahbs" share an entry
- An entry is replaced as a whole, never mutated; deck and fetched_at come
  from the same fetch
- A failed fetch never creates or updates an entry
- Staleness is evaluated lazily at lookup; nothing is purged in the background

CONCURRENCY:
Concurrent lookups that miss on the same key share one in-flight fetch and
all receive the same Deck (or the same FetchError). The entry map is only
written after the fetch completes, from the event loop thread, so readers
never see a half-written entry. Cancelling one waiter does not affect the
others; the fetch is cancelled only when every waiter has gone, and a
cancelled fetch caches nothing.
"""

import asyncio
import logging
import time
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Protocol

from cardcast.config import settings
from cardcast.models.deck import Deck
from cardcast.models.failure import DeckResult, FetchError

logger = logging.getLogger(__name__)


class DeckFetcher(Protocol):
    """Anything that can fetch a complete deck (normally a CardcastClient)."""

    async def fetch_deck(self, code: str) -> Deck: ...


def normalize_code(code: str) -> str:
    """Normalize a play code: strip surrounding whitespace and lower-case."""
    return code.strip().lower()


@dataclass(frozen=True, slots=True)
class CacheEntry:
    """A cached deck and the clock reading taken when it was stored."""

    deck: Deck
    fetched_at: float


@dataclass(slots=True)
class _InFlight:
    task: "asyncio.Task[Deck]"
    waiters: int = field(default=0)


class DeckCache:
    """
    In-memory fetch-through cache of Decks.

    Each instance owns its entries; instances with different TTLs do not
    interfere.

    Args:
        fetcher: Source of decks on miss or staleness
        ttl_seconds: Freshness window. Zero or negative refetches on every lookup.
            Defaults to settings.cache_ttl_seconds.
        clock: Returns the current time in seconds. Defaults to time.monotonic.
        evict_on_failure: If True, a failed refresh also drops the stale entry.
            By default the stale entry is left in place (it is still stale, so
            the next lookup fetches again).
    """

    def __init__(
        self,
        fetcher: DeckFetcher,
        ttl_seconds: float | None = None,
        *,
        clock: Callable[[], float] = time.monotonic,
        evict_on_failure: bool = False,
    ):
        self._fetcher = fetcher
        self._ttl_seconds = float(
            ttl_seconds if ttl_seconds is not None else settings.cache_ttl_seconds
        )
        self._clock = clock
        self.evict_on_failure = evict_on_failure
        self._entries: dict[str, CacheEntry] = {}
        self._in_flight: dict[str, _InFlight] = {}

    @property
    def ttl_seconds(self) -> float:
        return self._ttl_seconds

    @ttl_seconds.setter
    def ttl_seconds(self, value: float) -> None:
        self._ttl_seconds = float(value)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, code: object) -> bool:
        """True if an entry exists for the code, fresh or stale."""
        return isinstance(code, str) and normalize_code(code) in self._entries

    def is_fresh(self, code: str) -> bool:
        """True if a lookup for the code would be served from the cache."""
        entry = self._entries.get(normalize_code(code))
        return entry is not None and self._is_fresh(entry)

    async def get_deck(self, code: str) -> Deck:
        """
        Get a deck, fetching it if it is not cached or has gone stale.

        Args:
            code: Play code, any casing and surrounding whitespace

        Returns:
            The cached or freshly fetched Deck

        Raises:
            FetchError: If a fetch was needed and failed. The cache is left as it
                was, except that evict_on_failure drops a stale entry.
        """
        key = normalize_code(code)

        entry = self._entries.get(key)
        if entry is not None and self._is_fresh(entry):
            logger.debug("Cache hit for %s", key)
            return entry.deck

        flight = self._in_flight.get(key)
        if flight is None:
            logger.debug("Cache %s for %s", "stale" if entry else "miss", key)
            flight = _InFlight(task=asyncio.create_task(self._refresh(key)))
            flight.task.add_done_callback(self._fetch_done(key, flight))
            self._in_flight[key] = flight
        else:
            logger.debug("Joining in-flight fetch for %s", key)

        flight.waiters += 1
        try:
            return await asyncio.shield(flight.task)
        finally:
            flight.waiters -= 1
            if flight.waiters == 0 and not flight.task.done():
                # Every waiter was cancelled
                logger.debug("Cancelling abandoned fetch for %s", key)
                if self._in_flight.get(key) is flight:
                    del self._in_flight[key]
                flight.task.cancel()

    async def try_get_deck(self, code: str) -> DeckResult:
        """Like get_deck, but returns failures as a DeckResult instead of raising."""
        try:
            return DeckResult.success(await self.get_deck(code))
        except FetchError as e:
            return e.to_result()

    def invalidate(self, code: str) -> bool:
        """
        Drop the cached deck for a code.

        Returns:
            True if an entry was removed, False if none existed
        """
        key = normalize_code(code)
        if self._entries.pop(key, None) is None:
            return False
        logger.debug("Invalidated %s", key)
        return True

    def clear(self) -> None:
        """Drop every cached deck. In-flight fetches still complete and store."""
        self._entries.clear()

    def _is_fresh(self, entry: CacheEntry) -> bool:
        return self._clock() - entry.fetched_at < self._ttl_seconds

    async def _refresh(self, key: str) -> Deck:
        try:
            deck = await self._fetcher.fetch_deck(key)
        except FetchError as e:
            logger.warning("Fetch failed for %s (%s): %s", key, e.kind.value, e.message)
            if self.evict_on_failure and self._entries.pop(key, None) is not None:
                logger.debug("Evicted stale entry for %s after failed refresh", key)
            raise

        self._entries[key] = CacheEntry(deck=deck, fetched_at=self._clock())
        return deck

    def _fetch_done(self, key: str, flight: _InFlight) -> Callable[["asyncio.Task[Deck]"], None]:
        def callback(task: "asyncio.Task[Deck]") -> None:
            if self._in_flight.get(key) is flight:
                del self._in_flight[key]
            # Mark the exception retrieved when every waiter was cancelled
            if not task.cancelled():
                task.exception()

        return callback
