"""
Client-side query cache

Holds server-fetched collections per (entity kind, user id, params) key.
Serves cached values while refetching stale ones, shares one fetch between
concurrent identical reads, and notifies subscribers when a key's value
changes.
"""

from typing import Optional, Any, Dict, List, Tuple, Callable, Awaitable, NamedTuple
from datetime import datetime
import asyncio
import enum
import logging

logger = logging.getLogger(__name__)

Fetcher = Callable[[], Awaitable[List[Any]]]
Subscriber = Callable[["CacheKey", List[Any]], None]


class EntityKind(str, enum.Enum):
    """Server-backed collections held in the cache"""
    VITAL_SIGNS = "vital-signs"
    MEDICATIONS = "medications"
    CONSULTATIONS = "consultations"


def _normalize(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


class CacheKey(NamedTuple):
    kind: EntityKind
    user_id: Optional[str]
    params: Tuple[Tuple[str, str], ...] = ()

    @classmethod
    def build(cls, kind: EntityKind, user_id: Any, **params) -> "CacheKey":
        """Normalize params so equal queries map to the same key"""
        normalized = tuple(sorted(
            (name, _normalize(value)) for name, value in params.items() if value is not None
        ))
        return cls(
            kind=EntityKind(kind),
            user_id=None if user_id is None else str(user_id),
            params=normalized,
        )


class CacheEntry:
    """Cached collection for one key"""

    def __init__(self, key: CacheKey):
        self.key = key
        self.value: List[Any] = []
        self.is_fresh = False
        self.fetched_at: Optional[datetime] = None
        # Bumped on every issued fetch and every invalidation
        self.generation = 0
        self.fetcher: Optional[Fetcher] = None
        self.in_flight: Optional[asyncio.Task] = None

    @property
    def has_value(self) -> bool:
        return self.fetched_at is not None


class QueryCache:
    """Per-session store of server-fetched collections"""

    def __init__(self):
        self._entries: Dict[CacheKey, CacheEntry] = {}
        self._subscribers: Dict[CacheKey, List[Subscriber]] = {}
        self._closed = False

    async def __aenter__(self) -> "QueryCache":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    def _ensure_open(self) -> None:
        if self._closed:
            raise RuntimeError("Query cache is closed")

    def peek(self, key: CacheKey) -> Optional[CacheEntry]:
        """Get the entry for a key without fetching"""
        return self._entries.get(key)

    async def get(self, key: CacheKey, fetcher: Fetcher) -> List[Any]:
        """Read a collection.

        Fresh values are returned as-is. Stale values are returned while a
        background refetch runs. Keys without a value wait for the fetch.
        A key without a user id is disabled and reads as empty.
        """
        if key.user_id is None:
            return []
        self._ensure_open()

        entry = self._entries.get(key)
        if entry is None:
            entry = self._entries[key] = CacheEntry(key)
        entry.fetcher = fetcher

        if entry.has_value:
            if not entry.is_fresh:
                self._start_fetch(entry)
            return entry.value

        return await asyncio.shield(self._start_fetch(entry))

    async def fetch(self, key: CacheKey, fetcher: Fetcher) -> List[Any]:
        """Force a fetch for a key and wait for it"""
        if key.user_id is None:
            return []
        self._ensure_open()

        entry = self._entries.get(key)
        if entry is None:
            entry = self._entries[key] = CacheEntry(key)
        entry.fetcher = fetcher
        if entry.is_fresh:
            entry.is_fresh = False
            entry.generation += 1
            entry.in_flight = None

        return await asyncio.shield(self._start_fetch(entry))

    async def settled(self, key: CacheKey) -> List[Any]:
        """Wait for the key's in-flight fetch, if any, and return its value"""
        entry = self._entries.get(key)
        while entry is not None and entry.in_flight is not None and not entry.in_flight.done():
            await asyncio.shield(entry.in_flight)
            entry = self._entries.get(key)
        return entry.value if entry is not None else []

    def _start_fetch(self, entry: CacheEntry) -> asyncio.Task:
        if entry.in_flight is not None and not entry.in_flight.done():
            return entry.in_flight

        entry.generation += 1
        task = asyncio.ensure_future(self._run_fetch(entry, entry.fetcher, entry.generation))
        task.add_done_callback(lambda t: self._on_fetch_done(entry, t))
        entry.in_flight = task
        logger.debug(f"Fetching {entry.key} (generation {entry.generation})")
        return task

    async def _run_fetch(self, entry: CacheEntry, fetcher: Fetcher, generation: int) -> List[Any]:
        value = list(await fetcher())

        # Only the latest issued fetch for a still-registered key may write
        if self._entries.get(entry.key) is not entry or entry.generation != generation:
            logger.debug(f"Discarding superseded result for {entry.key}")
            return value

        entry.value = value
        entry.is_fresh = True
        entry.fetched_at = datetime.utcnow()
        self._notify(entry.key, value)
        return value

    def _on_fetch_done(self, entry: CacheEntry, task: asyncio.Task) -> None:
        if entry.in_flight is task:
            entry.in_flight = None
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            logger.warning(f"Fetch for {entry.key} failed: {error}")

    def _notify(self, key: CacheKey, value: List[Any]) -> None:
        for callback in list(self._subscribers.get(key, [])):
            try:
                callback(key, value)
            except Exception:
                logger.exception(f"Subscriber for {key} failed")

    def subscribe(self, key: CacheKey, callback: Subscriber) -> Callable[[], None]:
        """Register interest in a key; returns the unsubscribe function"""
        self._ensure_open()
        self._subscribers.setdefault(key, []).append(callback)

        def unsubscribe() -> None:
            callbacks = self._subscribers.get(key, [])
            if callback in callbacks:
                callbacks.remove(callback)
            if not callbacks:
                self._subscribers.pop(key, None)

        return unsubscribe

    def invalidate(self, kind: EntityKind, user_id: Any) -> List[CacheKey]:
        """Mark every key of a kind and user stale, whatever its params.

        In-flight fetches for those keys can no longer write. Keys with
        subscribers are refetched in the background.
        """
        scope = None if user_id is None else str(user_id)
        keys = [key for key in self._entries if key.kind == kind and key.user_id == scope]

        for key in keys:
            entry = self._entries[key]
            entry.is_fresh = False
            entry.generation += 1
            entry.in_flight = None
            if self._subscribers.get(key) and entry.fetcher is not None:
                self._start_fetch(entry)

        logger.debug(f"Invalidated {len(keys)} {EntityKind(kind).value} keys for user {scope}")
        return keys

    def release(self, key: CacheKey) -> None:
        """Forget a key; a fetch still running for it is discarded"""
        self._entries.pop(key, None)
        self._subscribers.pop(key, None)

    async def close(self) -> None:
        """Cancel in-flight fetches and drop all entries and subscriptions"""
        self._closed = True
        tasks = [e.in_flight for e in self._entries.values() if e.in_flight is not None]
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
        self._entries.clear()
        self._subscribers.clear()
