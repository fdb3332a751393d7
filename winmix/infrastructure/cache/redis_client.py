"""
Redis Client Module

Thin JSON store over Redis used as the shared layer of the prediction cache.
Every key is namespaced so several predictor instances can share one server.
"""

import json
import logging
from typing import Any, Callable, Optional
import redis

from winmix.config import REDIS_ENABLED, REDIS_HOST, REDIS_PASSWORD, REDIS_PORT

logger = logging.getLogger(__name__)

KEY_NAMESPACE = "winmix"


class RedisClient:
    """JSON key/value access to Redis that degrades to a no-op when offline."""

    def __init__(
        self,
        host: Optional[str] = None,
        port: Optional[int] = None,
        password: Optional[str] = None,
        namespace: str = KEY_NAMESPACE,
        enabled: bool = REDIS_ENABLED,
    ):
        self.host = host or REDIS_HOST
        self.port = port or REDIS_PORT
        self.namespace = namespace
        self._redis: Optional[redis.Redis] = None

        if not enabled:
            logger.info("Redis disabled; predictions are cached in process only")
            return

        self._redis = redis.Redis(
            host=self.host,
            port=self.port,
            password=password or REDIS_PASSWORD,
            decode_responses=True,
            socket_timeout=5,
            retry_on_timeout=True,
        )
        if self._call("ping", lambda client: client.ping(), False):
            logger.info(f"Prediction cache connected to Redis at {self.host}:{self.port}")
        else:
            self._redis = None

    @property
    def is_connected(self) -> bool:
        """True once the startup PING succeeded; later failures fall back per call."""
        return self._redis is not None

    def _key(self, key: str) -> str:
        return f"{self.namespace}:{key}"

    def _call(self, action: str, operation: Callable[[redis.Redis], Any], fallback: Any) -> Any:
        """Run one Redis operation, logging and returning ``fallback`` on failure."""
        if self._redis is None:
            return fallback
        try:
            return operation(self._redis)
        except redis.RedisError as e:
            logger.error(f"Redis {action} failed on {self.host}:{self.port}: {e}")
            return fallback

    def get(self, key: str) -> Optional[Any]:
        raw = self._call(f"GET {key}", lambda client: client.get(self._key(key)), None)
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except ValueError:
            logger.warning(f"Discarding undecodable cache entry {key}")
            return None

    def set(self, key: str, value: Any, ttl_seconds: int) -> bool:
        """Store ``value`` as JSON; the entry expires after ``ttl_seconds``."""
        payload = json.dumps(value, default=str)
        return bool(
            self._call(f"SET {key}", lambda client: client.set(self._key(key), payload, ex=ttl_seconds), False)
        )

    def delete(self, key: str) -> bool:
        return bool(self._call(f"DEL {key}", lambda client: client.delete(self._key(key)), 0))

    def delete_matching(self, pattern: str) -> int:
        """Delete every namespaced key matching ``pattern``; returns the count removed."""

        def _delete_all(client: redis.Redis) -> int:
            removed = 0
            for full_key in client.scan_iter(match=self._key(pattern)):
                removed += client.delete(full_key)
            return removed

        return self._call(f"SCAN {pattern}", _delete_all, 0)


# Singleton instance
_redis_instance: Optional[RedisClient] = None


def get_redis_client() -> RedisClient:
    """Get global Redis client instance."""
    global _redis_instance
    if _redis_instance is None:
        _redis_instance = RedisClient()
    return _redis_instance
