"""Response caching for upstream reads."""

from aggregator_core.cache.keys import cache_key
from aggregator_core.cache.memoize import get_or_fetch
from aggregator_core.cache.ttl import MISS, Miss, ResponseCache

__all__ = ["MISS", "Miss", "ResponseCache", "cache_key", "get_or_fetch"]
