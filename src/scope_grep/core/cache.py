"""Per-file result caching for the MCP search tool."""
import hashlib
import time
from collections import OrderedDict
from typing import Any, Dict, List, Optional, Tuple

from scope_grep.constants import CacheDefaults
from scope_grep.models.search import ScopeMatch


class QueryCache:
    """Simple LRU cache with TTL for per-file match lists.

    Entries are keyed by query, file path, a digest of the file contents and
    the serialized grammar profile, so an edited file or a changed scope
    configuration never returns stale matches.
    """

    def __init__(self, max_size: int = CacheDefaults.DEFAULT_CACHE_SIZE, ttl_seconds: int = CacheDefaults.TTL_SECONDS) -> None:
        self.max_size = max_size
        self.ttl_seconds = ttl_seconds
        self.cache: OrderedDict[str, Tuple[List[ScopeMatch], float]] = OrderedDict()
        self.hits = 0
        self.misses = 0

    def _make_key(self, query: str, file_path: str, source: bytes, grammar: str) -> str:
        digest = hashlib.sha256(source).hexdigest()
        key_str = "|".join([query, file_path, digest, grammar])
        return hashlib.sha256(key_str.encode()).hexdigest()[:CacheDefaults.CACHE_KEY_LENGTH]

    def get(self, query: str, file_path: str, source: bytes, grammar: str = "") -> Optional[List[ScopeMatch]]:
        """Get cached matches if available and not expired."""
        key = self._make_key(query, file_path, source, grammar)

        if key not in self.cache:
            self.misses += 1
            return None

        matches, timestamp = self.cache[key]

        if time.time() - timestamp > self.ttl_seconds:
            del self.cache[key]
            self.misses += 1
            return None

        self.cache.move_to_end(key)
        self.hits += 1
        return list(matches)

    def put(self, query: str, file_path: str, source: bytes, matches: List[ScopeMatch], grammar: str = "") -> None:
        """Store matches for one file."""
        key = self._make_key(query, file_path, source, grammar)

        if len(self.cache) >= self.max_size and key not in self.cache:
            self.cache.popitem(last=False)

        self.cache[key] = (list(matches), time.time())
        self.cache.move_to_end(key)

    def clear(self) -> None:
        """Clear all cache entries."""
        self.cache.clear()
        self.hits = 0
        self.misses = 0

    def get_stats(self) -> Dict[str, Any]:
        total = self.hits + self.misses
        hit_rate = self.hits / total if total > 0 else 0
        return {
            "size": len(self.cache),
            "max_size": self.max_size,
            "hits": self.hits,
            "misses": self.misses,
            "hit_rate": round(hit_rate, 3),
            "ttl_seconds": self.ttl_seconds
        }


# Global cache instance (initialized after config is parsed)
_query_cache: Optional[QueryCache] = None


def get_query_cache() -> Optional[QueryCache]:
    """Get the global query cache instance if caching is enabled."""
    from scope_grep.core import config
    return _query_cache if config.CACHE_ENABLED else None


def init_query_cache(max_size: int, ttl_seconds: int) -> None:
    """Initialize the global query cache."""
    global _query_cache
    _query_cache = QueryCache(max_size=max_size, ttl_seconds=ttl_seconds)
