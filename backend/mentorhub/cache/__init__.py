"""Query cache and typed cache keys."""

from mentorhub.cache import keys
from mentorhub.cache.keys import QueryKey, QueryName
from mentorhub.cache.query_cache import (
    CacheEntry,
    Freshness,
    QueryCache,
    QueryObserver,
    Subscription,
    query_cache,
)

__all__ = [
    "keys",
    "QueryKey",
    "QueryName",
    "CacheEntry",
    "Freshness",
    "QueryCache",
    "QueryObserver",
    "Subscription",
    "query_cache",
]
