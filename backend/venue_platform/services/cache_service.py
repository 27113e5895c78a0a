"""
Redis caching service for public venue listings.

CACHING STRATEGY
================

What we cache:
  - Public venue list responses (paginated, JSON-serialized)
  - Cache key pattern: "venues:list:page={page}&limit={limit}&type=...&search=...&min=...&max=..."

Invalidation:
  - Any admin write to a venue (create, update, soft delete, restore)
    deletes every "venues:list:*" key via SCAN
  - TTL-based expiry as safety net (REDIS_CACHE_TTL)

Failure mode:
  - The cache fails open. When Redis is disabled or unreachable every call
    here becomes a no-op and listings come straight from the database.

Appointments are never cached: the conflict check needs live data.
"""

import json
from typing import Optional

import redis.asyncio as redis

from venue_platform.core.config import get_settings
from venue_platform.core.logging import get_logger
from venue_platform.core.metrics import record_cache_operation, redis_connection_errors

logger = get_logger(__name__)
settings = get_settings()

VENUE_LIST_PREFIX = "venues:list:"

_redis_client: Optional[redis.Redis] = None


async def get_redis() -> Optional[redis.Redis]:
    """Get or create Redis connection. Returns None if Redis is disabled."""
    global _redis_client

    if not settings.REDIS_ENABLED:
        return None

    if _redis_client is None:
        try:
            _redis_client = redis.from_url(
                settings.REDIS_URL,
                encoding="utf-8",
                decode_responses=True,
                socket_connect_timeout=5,
                socket_timeout=5,
                retry_on_timeout=True,
            )
            await _redis_client.ping()
            logger.info("redis_connected", url=settings.REDIS_URL)
        except Exception as e:
            logger.error("redis_connection_failed", error=str(e))
            redis_connection_errors.inc()
            _redis_client = None
            return None

    return _redis_client


async def close_redis() -> None:
    """Close Redis connection on shutdown."""
    global _redis_client
    if _redis_client:
        await _redis_client.aclose()
        _redis_client = None


def make_venue_list_key(
    page: int,
    limit: int,
    venue_type: Optional[str],
    search: Optional[str],
    min_capacity: Optional[int],
    max_capacity: Optional[int],
) -> str:
    return (
        f"{VENUE_LIST_PREFIX}page={page}&limit={limit}&type={venue_type or ''}"
        f"&search={search or ''}&min={min_capacity or ''}&max={max_capacity or ''}"
    )


async def get_cached_venues(key: str) -> Optional[dict]:
    client = await get_redis()
    if not client:
        return None

    try:
        data = await client.get(key)
        record_cache_operation("get", hit=bool(data))
        if data:
            logger.debug("cache_hit", key=key)
            return json.loads(data)
        logger.debug("cache_miss", key=key)
    except Exception as e:
        logger.error("cache_get_error", key=key, error=str(e))

    return None


async def set_cached_venues(key: str, data: dict) -> None:
    client = await get_redis()
    if not client:
        return

    try:
        await client.setex(key, settings.REDIS_CACHE_TTL, json.dumps(data, default=str))
        logger.debug("cache_set", key=key, ttl=settings.REDIS_CACHE_TTL)
    except Exception as e:
        logger.error("cache_set_error", key=key, error=str(e))


async def invalidate_venue_cache() -> None:
    """Drop every cached venue listing."""
    client = await get_redis()
    if not client:
        return

    try:
        deleted = 0
        async for key in client.scan_iter(match=f"{VENUE_LIST_PREFIX}*", count=100):
            await client.delete(key)
            deleted += 1
        logger.info("cache_invalidated", keys_deleted=deleted)
    except Exception as e:
        logger.error("cache_invalidation_error", error=str(e))


async def get_cache_stats() -> dict:
    """Redis cache statistics for the health endpoints."""
    client = await get_redis()
    if not client:
        return {"status": "disabled"}

    try:
        info = await client.info("stats")
        hits = info.get("keyspace_hits", 0)
        misses = info.get("keyspace_misses", 0)
        return {
            "status": "connected",
            "hits": hits,
            "misses": misses,
            "hit_rate": round(hits / max(hits + misses, 1) * 100, 2),
        }
    except Exception as e:
        return {"status": "error", "error": str(e)}
