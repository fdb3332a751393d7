import time
from typing import Any, Callable, Optional, Dict, Tuple
import threading
import logging

from winmix.config import PREDICTION_CACHE_TTL
from winmix.infrastructure.cache.redis_client import RedisClient, get_redis_client

logger = logging.getLogger(__name__)

PREDICTION_PREFIX = "prediction"
MAX_MEMORY_ENTRIES = 1024


class CacheService:
    """
    Two-layer prediction cache: Redis when reachable, process memory always.

    Every entry carries its own TTL in both layers; an expired memory entry
    is never served. Writes sweep expired entries from memory, and once
    ``max_entries`` is reached the oldest entries are evicted first.

    TTL presets:
    - PREDICTIONS: PREDICTION_CACHE_TTL (default 5 minutes)
    - TEAMS: 1 hour
    """

    TTL_PREDICTIONS = PREDICTION_CACHE_TTL
    TTL_TEAMS = 3600

    def __init__(
        self,
        redis_client: Optional[RedisClient] = None,
        clock: Callable[[], float] = time.monotonic,
        max_entries: int = MAX_MEMORY_ENTRIES,
    ):
        self.redis = redis_client or get_redis_client()
        self._clock = clock
        self._max_entries = max(1, max_entries)
        self._entries: Dict[str, Tuple[Any, float]] = {}
        self._lock = threading.RLock()
        self._hits = 0
        self._misses = 0

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    @property
    def hits(self) -> int:
        return self._hits

    @property
    def misses(self) -> int:
        return self._misses

    def _lookup_memory(self, key: str) -> Optional[Any]:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            value, expires_at = entry
            if self._clock() >= expires_at:
                self._entries.pop(key, None)
                return None
            return value

    def get(self, key: str) -> Optional[Any]:
        """Return the cached value for ``key`` or None; Redis is consulted first."""
        layer = "redis"
        value = self.redis.get(key) if self.redis.is_connected else None
        if value is None:
            layer = "memory"
            value = self._lookup_memory(key)

        if value is None:
            self._misses += 1
            logger.debug(f"Cache miss: {key}")
            return None

        self._hits += 1
        logger.debug(f"Cache hit ({layer}): {key}")
        return value

    def set(self, key: str, value: Any, ttl_seconds: int) -> None:
        """Store ``value`` in both layers; a non-positive TTL stores nothing."""
        if ttl_seconds <= 0:
            return

        if self.redis.is_connected:
            self.redis.set(key, value, ttl_seconds)

        now = self._clock()
        with self._lock:
            self._entries.pop(key, None)
            self._evict(now)
            self._entries[key] = (value, now + ttl_seconds)

    def _evict(self, now: float) -> None:
        expired = [key for key, (_, expires_at) in self._entries.items() if expires_at <= now]
        for key in expired:
            del self._entries[key]

        # Insertion order is write order, so the first key is the oldest
        while len(self._entries) >= self._max_entries:
            del self._entries[next(iter(self._entries))]

    def invalidate(self, key: str) -> bool:
        """Drop ``key`` from both layers; True if any layer held it."""
        removed = self.redis.delete(key) if self.redis.is_connected else False
        with self._lock:
            removed = self._entries.pop(key, None) is not None or removed
        return removed

    def clear(self) -> None:
        if self.redis.is_connected:
            removed = self.redis.delete_matching(f"{PREDICTION_PREFIX}:*")
            logger.info(f"Removed {removed} cached predictions from Redis")

        with self._lock:
            self._entries.clear()
        logger.info("Prediction cache cleared")

    @staticmethod
    def prediction_key(home_team: str, away_team: str, algorithm: str, season: Optional[str]) -> str:
        # Unscoped (all-season) predictions share the "*" slot
        return f"{PREDICTION_PREFIX}:{home_team}|{away_team}|{algorithm}|{season or '*'}"

    def get_prediction(self, home_team: str, away_team: str, algorithm: str, season: Optional[str]) -> Optional[Any]:
        return self.get(self.prediction_key(home_team, away_team, algorithm, season))

    def set_prediction(self, home_team: str, away_team: str, algorithm: str, season: Optional[str], data: Any) -> None:
        self.set(self.prediction_key(home_team, away_team, algorithm, season), data, self.TTL_PREDICTIONS)


_cache_instance: Optional[CacheService] = None
_instance_lock = threading.Lock()


def get_cache_service() -> CacheService:
    """Process-wide cache, created on first use."""
    global _cache_instance
    if _cache_instance is None:
        with _instance_lock:
            if _cache_instance is None:
                _cache_instance = CacheService()
                logger.info("Prediction cache initialized")
    return _cache_instance
