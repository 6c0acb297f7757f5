# ============================================================
# bomgraph/cache/similarity_cache.py - Similarity/search cache
# ============================================================
# Two bounded, expiring pools:
#   - score pool:  similarity score per item pair (10,000 / 1h)
#   - result pool: search result per spec map     (100 / 30min)
#
# Keys:
#   - score:  sorted(a, b) joined with ":"  (a,b == b,a)
#   - search: "k=v" pairs sorted by key, joined with ","
#
# Expiry is measured from the write and checked lazily on
# access. Past capacity the least recently used entry goes.
# Stat counters change under the pool lock.
# ============================================================

import logging
import threading
import time
from collections import OrderedDict
from dataclasses import dataclass
from typing import Any, Callable, Dict, Generic, Mapping, Optional, TypeVar

from ..config import CacheSettings, get_settings

logger = logging.getLogger(__name__)

V = TypeVar("V")

Clock = Callable[[], float]


# ============================================================
# [1] Keys
# ============================================================

def score_key(a: Any, b: Any) -> str:
    """Order-independent pair key"""
    return ":".join(sorted((str(a), str(b))))


def search_key(specs: Mapping[str, Any]) -> str:
    """Insertion-order-independent spec map key"""
    return ",".join(f"{k}={specs[k]}" for k in sorted(specs))


# ============================================================
# [2] Entry / stats
# ============================================================

@dataclass
class CacheEntry(Generic[V]):
    """Cached value with its write and last-access times"""
    key: str
    value: V
    inserted_at: float
    last_access: float


@dataclass
class CacheStats:
    """Counters for one pool"""
    hit_count: int = 0
    miss_count: int = 0
    eviction_count: int = 0
    load_count: int = 0
    total_load_time: float = 0.0

    @property
    def request_count(self) -> int:
        return self.hit_count + self.miss_count

    @property
    def hit_rate(self) -> float:
        return self.hit_count / self.request_count if self.request_count else 0.0

    @property
    def miss_rate(self) -> float:
        return self.miss_count / self.request_count if self.request_count else 0.0

    @property
    def average_load_time(self) -> float:
        """Mean loader time in seconds"""
        return self.total_load_time / self.load_count if self.load_count else 0.0

    def combine(self, other: "CacheStats") -> "CacheStats":
        return CacheStats(
            hit_count=self.hit_count + other.hit_count,
            miss_count=self.miss_count + other.miss_count,
            eviction_count=self.eviction_count + other.eviction_count,
            load_count=self.load_count + other.load_count,
            total_load_time=self.total_load_time + other.total_load_time,
        )

    def to_dict(self, size: int) -> Dict[str, Any]:
        return {
            "hit_count": self.hit_count,
            "miss_count": self.miss_count,
            "request_count": self.request_count,
            "hit_rate": self.hit_rate,
            "miss_rate": self.miss_rate,
            "eviction_count": self.eviction_count,
            "average_load_time": self.average_load_time,
            "size": size,
        }


# ============================================================
# [3] ExpiringLRUPool
# ============================================================

class ExpiringLRUPool(Generic[V]):
    """
    Bounded LRU map with write-time expiry

    Usage:
        pool = ExpiringLRUPool("score", max_size=10000, ttl_seconds=3600)
        pool.put("a:b", 0.93)
        pool.get("a:b")   # 0.93 until an hour after the put
    """

    def __init__(self, name: str, max_size: int, ttl_seconds: float, clock: Optional[Clock] = None):
        if max_size <= 0:
            raise ValueError(f"max_size must be positive: {max_size}")
        self.name = name
        self.max_size = max_size
        self.ttl_seconds = ttl_seconds
        self._clock = clock or time.monotonic
        self._entries: "OrderedDict[str, CacheEntry[V]]" = OrderedDict()
        self._stats = CacheStats()
        self.lock = threading.Lock()

    def __len__(self) -> int:
        with self.lock:
            return len(self._entries)

    def _expired(self, entry: CacheEntry, now: float) -> bool:
        return now - entry.inserted_at >= self.ttl_seconds

    def get(self, key: str) -> Optional[V]:
        """Value for key, or None (missing or expired)"""
        now = self._clock()
        with self.lock:
            entry = self._entries.get(key)
            if entry is not None and self._expired(entry, now):
                del self._entries[key]
                self._stats.eviction_count += 1
                entry = None
            if entry is None:
                self._stats.miss_count += 1
                return None

            self._stats.hit_count += 1
            entry.last_access = now
            self._entries.move_to_end(key)
            return entry.value

    def put(self, key: str, value: V) -> None:
        now = self._clock()
        with self.lock:
            self._entries[key] = CacheEntry(key=key, value=value, inserted_at=now, last_access=now)
            self._entries.move_to_end(key)
            while len(self._entries) > self.max_size:
                evicted, _ = self._entries.popitem(last=False)
                self._stats.eviction_count += 1
                logger.debug(f"[{self.name}] evicted {evicted}")

    def get_or_load(self, key: str, loader: Callable[[], V]) -> Optional[V]:
        """
        Cached value, or loader() stored under key

        Loader time feeds average_load_time. A loader exception propagates
        and nothing is cached. A None result is returned but not cached.
        """
        value = self.get(key)
        if value is not None:
            return value

        started = self._clock()
        value = loader()
        elapsed = self._clock() - started
        with self.lock:
            self._stats.load_count += 1
            self._stats.total_load_time += elapsed
        if value is not None:
            self.put(key, value)
        return value

    def invalidate(self, key: str) -> None:
        with self.lock:
            self._entries.pop(key, None)

    def clear_locked(self) -> None:
        """Drop all entries; caller holds self.lock"""
        self._entries.clear()

    def clear(self) -> None:
        with self.lock:
            self.clear_locked()

    def stats(self) -> CacheStats:
        with self.lock:
            return CacheStats(**vars(self._stats))

    def stats_dict(self) -> Dict[str, Any]:
        with self.lock:
            return self._stats.to_dict(size=len(self._entries))


# ============================================================
# [4] SimilarityCache
# ============================================================

class SimilarityCache:
    """
    Score and search-result cache

    Usage:
        cache = SimilarityCache()
        cache.put_score("A-100", "B-200", 0.87)
        cache.get_score("B-200", "A-100")            # 0.87
        cache.put_search_result({"bore": "63", "series": "10"}, results)
        cache.get_search_result({"series": "10", "bore": "63"})   # results
        cache.stats()["overall"]["hit_rate"]
    """

    def __init__(self, settings: Optional[CacheSettings] = None, clock: Optional[Clock] = None):
        """
        Args:
            settings: pool sizes/TTLs (default: settings.cache)
            clock: monotonic seconds source (tests inject a fake)
        """
        settings = settings or get_settings().cache
        self._scores: ExpiringLRUPool[float] = ExpiringLRUPool(
            "score", settings.score_max_size, settings.score_ttl_seconds, clock
        )
        self._results: ExpiringLRUPool[Any] = ExpiringLRUPool(
            "result", settings.result_max_size, settings.result_ttl_seconds, clock
        )

    # --------------------------------------------------------
    # [4.1] Scores
    # --------------------------------------------------------

    def get_score(self, a: Any, b: Any) -> Optional[float]:
        return self._scores.get(score_key(a, b))

    def put_score(self, a: Any, b: Any, score: float) -> None:
        self._scores.put(score_key(a, b), score)

    def get_or_compute_score(self, a: Any, b: Any, loader: Callable[[], float]) -> Optional[float]:
        """Cached score, or loader() cached under the pair key"""
        return self._scores.get_or_load(score_key(a, b), loader)

    # --------------------------------------------------------
    # [4.2] Search results
    # --------------------------------------------------------

    def get_search_result(self, specs: Mapping[str, Any]) -> Optional[Any]:
        return self._results.get(search_key(specs))

    def put_search_result(self, specs: Mapping[str, Any], result: Any) -> None:
        self._results.put(search_key(specs), result)

    # --------------------------------------------------------
    # [4.3] Maintenance
    # --------------------------------------------------------

    def clear(self) -> None:
        """Empty both pools; no reader sees one cleared and the other not"""
        with self._scores.lock, self._results.lock:
            self._scores.clear_locked()
            self._results.clear_locked()
        logger.info("Similarity cache cleared")

    def stats(self) -> Dict[str, Dict[str, Any]]:
        """Per-pool stats plus the aggregate under "overall"""
        with self._scores.lock, self._results.lock:
            score_stats = CacheStats(**vars(self._scores._stats))
            result_stats = CacheStats(**vars(self._results._stats))
            score_size = len(self._scores._entries)
            result_size = len(self._results._entries)

        return {
            "score": score_stats.to_dict(size=score_size),
            "result": result_stats.to_dict(size=result_size),
            "overall": score_stats.combine(result_stats).to_dict(size=score_size + result_size),
        }

    def log_stats(self) -> None:
        stats = self.stats()
        for pool in ("score", "result"):
            s = stats[pool]
            logger.info(
                f"{pool} cache: size={s['size']}, hit_rate={s['hit_rate']:.2%}, "
                f"evictions={s['eviction_count']}"
            )
