import json

import pytest
from unittest.mock import AsyncMock

from common.cache import results
from common.cache.results import MemoryBackend, RedisBackend, ResultCache, cache_key
from common.orders.types import GlobalScope, TenantScope


ORDERS = [{"id": 900, "order_number": 1001, "total_price": "19.99"}]


def test_cache_key_includes_tenant():
    assert cache_key(GlobalScope(), "a@x.com") == "shopify_orders_a@x.com"
    assert cache_key(TenantScope(mailbox_id=4), "a@x.com") == "shopify_orders_4_a@x.com"


@pytest.mark.anyio
async def test_put_then_get_within_ttl(monkeypatch):
    monkeypatch.setattr(results, "_now", lambda: 1000.0)
    cache = ResultCache(MemoryBackend(), ttl_minutes=60)

    await cache.put(GlobalScope(), "a@x.com", ORDERS)

    monkeypatch.setattr(results, "_now", lambda: 1000.0 + 59 * 60)
    assert await cache.get(GlobalScope(), "a@x.com") == ORDERS


@pytest.mark.anyio
async def test_entry_expires_after_ttl(monkeypatch):
    monkeypatch.setattr(results, "_now", lambda: 1000.0)
    cache = ResultCache(MemoryBackend(), ttl_minutes=60)
    await cache.put(GlobalScope(), "a@x.com", ORDERS)

    monkeypatch.setattr(results, "_now", lambda: 1000.0 + 60 * 60)
    assert await cache.get(GlobalScope(), "a@x.com") is None


@pytest.mark.anyio
async def test_set_prunes_expired_entries(monkeypatch):
    monkeypatch.setattr(results, "_now", lambda: 1000.0)
    backend = MemoryBackend()
    cache = ResultCache(backend, ttl_minutes=60)
    await cache.put(GlobalScope(), "old@x.com", ORDERS)

    monkeypatch.setattr(results, "_now", lambda: 1000.0 + 61 * 60)
    await cache.put(GlobalScope(), "new@x.com", ORDERS)

    assert list(backend._store) == ["shopify_orders_new@x.com"]


@pytest.mark.anyio
async def test_tenants_do_not_share_entries():
    cache = ResultCache(MemoryBackend(), ttl_minutes=60)

    await cache.put(TenantScope(mailbox_id=1), "a@x.com", ORDERS)

    assert await cache.get(TenantScope(mailbox_id=2), "a@x.com") is None
    assert await cache.get(GlobalScope(), "a@x.com") is None
    assert await cache.get(TenantScope(mailbox_id=1), "a@x.com") == ORDERS


@pytest.mark.anyio
async def test_redis_backend_uses_setex_and_json():
    backend = RedisBackend("redis://localhost:6379/0")
    fake = AsyncMock()
    fake.get.return_value = json.dumps(ORDERS)
    backend._redis = fake
    cache = ResultCache(backend, ttl_minutes=60)

    await cache.put(GlobalScope(), "a@x.com", ORDERS)
    got = await cache.get(GlobalScope(), "a@x.com")

    fake.set.assert_awaited_once_with("shopify_orders_a@x.com", json.dumps(ORDERS), ex=3600)
    fake.get.assert_awaited_once_with("shopify_orders_a@x.com")
    assert got == ORDERS


@pytest.mark.anyio
async def test_get_result_cache_picks_backend(monkeypatch, shop_settings):
    monkeypatch.setattr(results, "settings", shop_settings)
    monkeypatch.setattr(results, "_result_cache", None)

    cache = results.get_result_cache()

    assert isinstance(cache.backend, MemoryBackend)
    assert results.get_result_cache() is cache
    await results.close_result_cache()
    assert results._result_cache is None
