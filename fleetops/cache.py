import time
from collections.abc import Awaitable, Callable
from typing import Any

import structlog

logger = structlog.get_logger()

QueryKey = tuple[Any, ...]

# Distinguishes "not cached" from a cached None
_MISSING = object()


class QueryCache:
    """In-process cache of list views, keyed by tuples such as ("distance", "list", 3).

    Entries expire after `ttl_seconds`; `invalidate` drops every key that starts
    with the given prefix.
    """

    def __init__(self, ttl_seconds: float = 60.0, clock: Callable[[], float] = time.monotonic) -> None:
        self._ttl = ttl_seconds
        self._clock = clock
        self._entries: dict[QueryKey, tuple[float, Any]] = {}

    def get(self, key: QueryKey) -> Any | None:
        value = self._lookup(key)
        return None if value is _MISSING else value

    def set(self, key: QueryKey, value: Any) -> None:
        self._entries[key] = (self._clock(), value)

    async def get_or_fetch(self, key: QueryKey, fetch: Callable[[], Awaitable[Any]]) -> Any:
        cached = self._lookup(key)
        if cached is not _MISSING:
            return cached
        value = await fetch()
        self.set(key, value)
        return value

    def invalidate(self, prefix: QueryKey) -> int:
        stale = [key for key in self._entries if key[: len(prefix)] == prefix]
        for key in stale:
            del self._entries[key]
        logger.debug("query_cache_invalidated", prefix=prefix, dropped=len(stale))
        return len(stale)

    def _lookup(self, key: QueryKey) -> Any:
        entry = self._entries.get(key)
        if entry is None:
            return _MISSING
        stored_at, value = entry
        if self._clock() - stored_at > self._ttl:
            del self._entries[key]
            return _MISSING
        return value
