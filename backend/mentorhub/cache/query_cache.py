"""
Keyed query cache with explicit invalidation and subscriptions.

Read side:
    value = await cache.fetch(keys.TASKS, load_tasks)

- A fresh entry is returned without touching the store.
- Concurrent fetches of one key share a single in-flight load.
- A failed load is not cached; the error goes to every waiter.

Write side:
    row = await cache.mutate(lambda: store.insert("tasks", data), invalidates=keys.TASK_MUTATION_KEYS)

- Invalidation runs only after the mutation succeeds. A failed mutation
  leaves every entry exactly as it was.
- Invalidated entries turn STALE: fetch() reloads them, peek() still shows the
  prior value until the reload lands.
- A load that started before an invalidation is never written back.

Mounted views register a QueryObserver (or a raw subscription) per key and are
called back when that key is invalidated.
"""

import asyncio
import logging
import time
from collections import defaultdict
from collections.abc import Awaitable, Callable, Iterable
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Generic, TypeVar

from mentorhub.cache.keys import QueryKey, QueryName

logger = logging.getLogger(__name__)

T = TypeVar("T")
Loader = Callable[[], Awaitable[T]]
Listener = Callable[[QueryKey], None]


class Freshness(str, Enum):
    FRESH = "fresh"
    STALE = "stale"


@dataclass(frozen=True)
class CacheEntry:
    value: Any
    freshness: Freshness
    fetched_at: float


class Subscription:
    """Handle returned by subscribe(); cancel() stops further callbacks."""

    def __init__(self, cache: "QueryCache", key: QueryKey | None, listener: Listener) -> None:
        self._cache = cache
        self._key = key
        self._listener = listener
        self.active = True

    def cancel(self) -> None:
        if self.active:
            self._cache._remove_listener(self._key, self._listener)
            self.active = False


def _consume_exception(task: asyncio.Task) -> None:
    # Loads abandoned by every waiter still finish; keep their errors out of the loop's handler
    if not task.cancelled():
        task.exception()


class QueryCache:
    """In-process cache: QueryKey -> {value, freshness}."""

    def __init__(self) -> None:
        self._entries: dict[QueryKey, CacheEntry] = {}
        self._in_flight: dict[QueryKey, asyncio.Task] = {}
        self._generations: dict[QueryKey, int] = {}
        # None collects listeners interested in every key
        self._listeners: dict[QueryKey | None, list[Listener]] = defaultdict(list)

    # =========================================================================
    # READS
    # =========================================================================

    async def fetch(self, key: QueryKey, loader: Loader[T]) -> T:
        """Return the fresh cached value for key, loading it if absent or stale."""
        entry = self._entries.get(key)
        if entry is not None and entry.freshness is Freshness.FRESH:
            return entry.value
        return await self._load(key, loader)

    async def refetch(self, key: QueryKey, loader: Loader[T]) -> T:
        """Load key from the store even if a fresh value is cached."""
        return await self._load(key, loader)

    def peek(self, key: QueryKey) -> Any | None:
        """Last known value for key, fresh or stale, without loading."""
        entry = self._entries.get(key)
        return None if entry is None else entry.value

    def entry(self, key: QueryKey) -> CacheEntry | None:
        return self._entries.get(key)

    def snapshot(self) -> dict[QueryKey, CacheEntry]:
        """Copy of the current entry map."""
        return dict(self._entries)

    def is_loading(self, key: QueryKey) -> bool:
        return key in self._in_flight

    def keys_named(self, *names: QueryName) -> set[QueryKey]:
        """Cached or loading keys with any of the given names."""
        return {key for key in [*self._entries, *self._in_flight] if key.name in names}

    async def _load(self, key: QueryKey, loader: Loader[T]) -> T:
        task = self._in_flight.get(key)
        if task is None:
            task = asyncio.ensure_future(self._run_loader(key, loader, self._generations.get(key, 0)))
            task.add_done_callback(_consume_exception)
            self._in_flight[key] = task
        # Shielded: a waiter that goes away does not cancel the store request
        return await asyncio.shield(task)

    async def _run_loader(self, key: QueryKey, loader: Loader[T], generation: int) -> T:
        try:
            value = await loader()
        finally:
            if self._in_flight.get(key) is asyncio.current_task():
                del self._in_flight[key]

        if self._generations.get(key, 0) == generation:
            self._entries[key] = CacheEntry(value=value, freshness=Freshness.FRESH, fetched_at=time.monotonic())
        else:
            logger.debug("Dropping result for %s loaded before invalidation", key)
        return value

    # =========================================================================
    # WRITES
    # =========================================================================

    async def mutate(
        self,
        mutation: Callable[[], Awaitable[T]],
        *,
        invalidates: Iterable[QueryKey],
        invalidates_names: Iterable[QueryName] = (),
    ) -> T:
        """
        Run a mutation; invalidate the given keys only if it succeeds.

        invalidates_names covers parameterized keys (one per idea, say): every
        key of those names known to the cache when the mutation returns.
        """
        result = await mutation()
        self.invalidate({*invalidates, *self.keys_named(*invalidates_names)})
        return result

    def invalidate(self, keys: Iterable[QueryKey]) -> None:
        """Mark keys stale, drop their in-flight loads, then notify subscribers."""
        keys = list(keys)
        for key in keys:
            self._generations[key] = self._generations.get(key, 0) + 1
            self._in_flight.pop(key, None)
            entry = self._entries.get(key)
            if entry is not None:
                self._entries[key] = replace(entry, freshness=Freshness.STALE)

        if keys:
            logger.debug("Invalidated %s", ", ".join(sorted(str(key) for key in keys)))

        for key in keys:
            for listener in [*self._listeners.get(key, ()), *self._listeners.get(None, ())]:
                try:
                    listener(key)
                except Exception:
                    logger.exception("Cache listener failed for %s", key)

    def clear(self) -> None:
        """Drop every entry (listeners stay registered)."""
        self.invalidate(list(self._entries))
        self._entries.clear()

    def invalidate_name(self, name: QueryName) -> None:
        """Invalidate every known key of one name, whatever its params."""
        self.invalidate(self.keys_named(name))

    # =========================================================================
    # SUBSCRIPTIONS
    # =========================================================================

    def subscribe(self, key: QueryKey, listener: Listener) -> Subscription:
        """Call listener(key) every time key is invalidated."""
        self._listeners[key].append(listener)
        return Subscription(self, key, listener)

    def subscribe_all(self, listener: Listener) -> Subscription:
        """Call listener(key) for every invalidated key."""
        self._listeners[None].append(listener)
        return Subscription(self, None, listener)

    def _remove_listener(self, key: QueryKey | None, listener: Listener) -> None:
        listeners = self._listeners.get(key)
        if listeners and listener in listeners:
            listeners.remove(listener)
            if not listeners:
                del self._listeners[key]


class QueryObserver(Generic[T]):
    """
    A mounted view's interest in one key.

    start() fetches the current value and subscribes; every invalidation of
    the key triggers a background refetch whose result goes to on_data.
    close() abandons the observer: later results are not delivered, but a
    refetch already in flight still runs to completion.
    """

    def __init__(
        self,
        cache: QueryCache,
        key: QueryKey,
        loader: Loader[T],
        on_data: Callable[[T], Any],
        on_error: Callable[[Exception], Any] | None = None,
    ) -> None:
        self.cache = cache
        self.key = key
        self._loader = loader
        self._on_data = on_data
        self._on_error = on_error
        self._subscription: Subscription | None = None
        self._refresh_task: asyncio.Task | None = None
        self.closed = False

    async def start(self) -> T:
        self._subscription = self.cache.subscribe(self.key, self._on_invalidated)
        value = await self.cache.fetch(self.key, self._loader)
        if not self.closed:
            self._on_data(value)
        return value

    def close(self) -> None:
        self.closed = True
        if self._subscription is not None:
            self._subscription.cancel()

    async def settle(self) -> None:
        """Wait for a pending background refetch, if any."""
        if self._refresh_task is not None:
            await asyncio.gather(self._refresh_task, return_exceptions=True)

    def _on_invalidated(self, key: QueryKey) -> None:
        if not self.closed:
            self._refresh_task = asyncio.ensure_future(self._refresh())

    async def _refresh(self) -> None:
        try:
            value = await self.cache.fetch(self.key, self._loader)
        except Exception as e:
            if self.closed:
                return
            if self._on_error is None:
                logger.exception("Background refetch of %s failed", self.key)
            else:
                self._on_error(e)
            return
        if not self.closed:
            self._on_data(value)


# Process-wide cache shared by every view
query_cache = QueryCache()
