"""
Redis caching service for the show catalog listing.

CACHING STRATEGY
================

What we cache:
  - The full show listing (JSON-serialized) under "shows:list"

Why:
  - The catalog is read-only once seeded and is the first screen every
    customer sees, so it is read far more often than anything else

Invalidation:
  - seed_catalog at startup deletes the key
  - TTL-based expiry as safety net (REDIS_CACHE_TTL)

Why NOT cache seat availability:
  - A stale seat map only costs the customer a conflict notice, but there is
    nothing to gain: status_for is a single indexed lookup and the
    reservation commit never trusts it anyway

Redis is advisory only. Every failure is logged and the caller falls back to
the database.
"""

import json
from typing import Optional

import redis.asyncio as redis
from boxoffice.core.config import get_settings
from boxoffice.core.logging import get_logger
from boxoffice.core.metrics import record_cache_operation

logger = get_logger(__name__)

SHOW_LIST_KEY = "shows:list"

_redis_client: Optional[redis.Redis] = None


async def get_redis() -> Optional[redis.Redis]:
    """Get or create Redis connection. Returns None if Redis is disabled or unreachable."""
    global _redis_client
    settings = get_settings()

    if not settings.REDIS_ENABLED:
        return None

    if _redis_client is None:
        client = redis.from_url(
            settings.REDIS_URL,
            encoding="utf-8",
            decode_responses=True,
            socket_connect_timeout=5,
            socket_timeout=5,
            retry_on_timeout=True,
        )
        try:
            await client.ping()
        except (redis.RedisError, OSError) as e:
            logger.error("redis_connection_failed", error=str(e))
            await client.aclose()
            return None
        _redis_client = client
        logger.info("redis_connected", url=settings.REDIS_URL)

    return _redis_client


async def close_redis() -> None:
    """Close Redis connection on shutdown."""
    global _redis_client
    if _redis_client:
        await _redis_client.aclose()
        _redis_client = None


async def get_cached_shows() -> Optional[list[dict]]:
    client = await get_redis()
    if not client:
        return None

    try:
        data = await client.get(SHOW_LIST_KEY)
    except (redis.RedisError, OSError) as e:
        logger.error("cache_get_error", key=SHOW_LIST_KEY, error=str(e))
        return None

    record_cache_operation("get", hit=data is not None)
    if data is None:
        logger.debug("cache_miss", key=SHOW_LIST_KEY)
        return None
    logger.debug("cache_hit", key=SHOW_LIST_KEY)
    return json.loads(data)


async def set_cached_shows(shows: list[dict]) -> None:
    client = await get_redis()
    if not client:
        return

    ttl = get_settings().REDIS_CACHE_TTL
    try:
        await client.setex(SHOW_LIST_KEY, ttl, json.dumps(shows, default=str))
        record_cache_operation("set", hit=False)
        logger.debug("cache_set", key=SHOW_LIST_KEY, ttl=ttl)
    except (redis.RedisError, OSError) as e:
        logger.error("cache_set_error", key=SHOW_LIST_KEY, error=str(e))


async def invalidate_show_cache() -> None:
    client = await get_redis()
    if not client:
        return

    try:
        deleted = await client.delete(SHOW_LIST_KEY)
        logger.info("cache_invalidated", keys_deleted=deleted)
    except (redis.RedisError, OSError) as e:
        logger.error("cache_invalidation_error", error=str(e))


async def get_cache_stats() -> dict:
    """Get Redis cache statistics for monitoring."""
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
    except (redis.RedisError, OSError) as e:
        return {"status": "error", "error": str(e)}
