"""
Cache module

Bounded, expiring caches for similarity scores and search results.

Usage:
    from bomgraph.cache import SimilarityCache

    cache = SimilarityCache()
    cache.put_score("A-100", "B-200", 0.87)
    cache.get_score("B-200", "A-100")  # 0.87
"""

from .similarity_cache import (
    CacheEntry,
    CacheStats,
    ExpiringLRUPool,
    SimilarityCache,
    score_key,
    search_key,
)

__all__ = [
    "CacheEntry",
    "CacheStats",
    "ExpiringLRUPool",
    "SimilarityCache",
    "score_key",
    "search_key",
]
