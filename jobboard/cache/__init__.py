"""In-memory query caching helpers."""

from .keys import (
    generate_cache_key,
    generate_filter_cache_key,
    generate_pagination_cache_key,
    generate_query_cache_key,
    hash_cache_key,
)
from .lru import CacheEntry, CacheStats, LRUCache, QueryCacheEntry, QueryResultCache

__all__ = [
    "CacheEntry",
    "CacheStats",
    "LRUCache",
    "QueryCacheEntry",
    "QueryResultCache",
    "generate_cache_key",
    "generate_filter_cache_key",
    "generate_pagination_cache_key",
    "generate_query_cache_key",
    "hash_cache_key",
]
