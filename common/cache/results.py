from __future__ import annotations

import json
import time
from typing import Any, Dict, List, Optional, Tuple

import redis.asyncio as redis

from api.app.config import settings
from common.orders.types import Order, Scope, TenantScope


def _now() -> float:
    return time.time()


class MemoryBackend:
    def __init__(self) -> None:
        self._store: Dict[str, Tuple[float, Any]] = {}

    async def get(self, key: str) -> Any:
        entry = self._store.get(key)
        if entry is None:
            return None
        expires_at, value = entry
        if _now() >= expires_at:
            self._store.pop(key, None)
            return None
        return value

    async def set(self, key: str, value: Any, ttl_seconds: int) -> None:
        now = _now()
        for stale in [k for k, (expires_at, _) in self._store.items() if now >= expires_at]:
            del self._store[stale]
        self._store[key] = (now + ttl_seconds, value)

    async def close(self) -> None:
        self._store.clear()


class RedisBackend:
    def __init__(self, url: str) -> None:
        self._redis = redis.from_url(url, decode_responses=True)

    async def get(self, key: str) -> Any:
        raw = await self._redis.get(key)
        if raw is None:
            return None
        return json.loads(raw)

    async def set(self, key: str, value: Any, ttl_seconds: int) -> None:
        await self._redis.set(key, json.dumps(value), ex=ttl_seconds)

    async def close(self) -> None:
        await self._redis.aclose()


def cache_key(scope: Scope, email: str) -> str:
    if isinstance(scope, TenantScope):
        return f"shopify_orders_{scope.mailbox_id}_{email}"
    return f"shopify_orders_{email}"


class ResultCache:
    def __init__(self, backend: MemoryBackend | RedisBackend, ttl_minutes: Optional[int] = None) -> None:
        self.backend = backend
        self.ttl_minutes = ttl_minutes or settings.orders_cache_ttl_minutes

    async def get(self, scope: Scope, email: str) -> Optional[List[Order]]:
        value = await self.backend.get(cache_key(scope, email))
        return value if isinstance(value, list) else None

    async def put(self, scope: Scope, email: str, orders: List[Order], ttl_minutes: Optional[int] = None) -> None:
        ttl = ttl_minutes or self.ttl_minutes
        await self.backend.set(cache_key(scope, email), list(orders), ttl * 60)


_result_cache: Optional[ResultCache] = None


def get_result_cache() -> ResultCache:
    global _result_cache
    if _result_cache is None:
        if settings.cache_backend == "redis":
            backend = RedisBackend(settings.redis_url)
        else:
            backend = MemoryBackend()
        _result_cache = ResultCache(backend)
    return _result_cache


async def close_result_cache() -> None:
    global _result_cache
    if _result_cache is not None:
        await _result_cache.backend.close()
        _result_cache = None
