"""Read-through helper for caching awaited upstream calls."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import Any

from aggregator_core.cache.ttl import MISS, ResponseCache
from aggregator_core.logging import get_logger

log = get_logger(__name__)


async def get_or_fetch(
    cache: ResponseCache,
    key: str,
    fetch: Callable[[], Awaitable[Any]],
) -> Any:
    """Return the cached value for *key*, or await *fetch* and cache its result.

    Failed fetches are not cached; the exception propagates to the caller.
    """
    value = cache.get(key)
    if value is not MISS:
        log.debug("cache_hit", key=key)
        return value
    log.debug("cache_miss", key=key)
    value = await fetch()
    cache.set(key, value)
    return value
