"""
Shared Redis connections and key naming.

The API process talks to Redis through one async pool; the Celery audit
worker uses one blocking pool. Both are created on first use and live for
the life of the process. Every key the service reads or writes goes
through key(), so one REDIS_KEY_PREFIX isolates environments sharing a
Redis instance.
"""

import logging
from typing import Any, Optional

from redis import ConnectionPool, Redis
from redis.asyncio import ConnectionPool as AsyncConnectionPool
from redis.asyncio import Redis as AsyncRedis

from redaction_service.config import Settings

logger = logging.getLogger(__name__)

SOCKET_TIMEOUT_SECONDS = 5


def _pool_options(settings: Settings) -> dict[str, Any]:
    return {
        "max_connections": settings.REDIS_MAX_CONNECTIONS,
        # Entity, rule and audit payloads are all JSON text
        "decode_responses": True,
        "socket_timeout": SOCKET_TIMEOUT_SECONDS,
        "socket_connect_timeout": SOCKET_TIMEOUT_SECONDS,
        "retry_on_timeout": True,
    }


class RedisClient:
    """
    Process-wide Redis pools.
    
    - Async: entity, rule and audit stores behind POST /redact
    - Sync: SyncRedisAuditSink inside the Celery worker
    """
    
    _sync_pool: Optional[ConnectionPool] = None
    _async_pool: Optional[AsyncConnectionPool] = None
    
    @classmethod
    def get_async_client(cls, settings: Settings) -> AsyncRedis:
        """
        Client on the shared async pool.
        
        Args:
            settings: Application settings
        
        Returns:
            AsyncRedis client instance
        """
        if cls._async_pool is None:
            cls._async_pool = AsyncConnectionPool.from_url(settings.REDIS_URL, **_pool_options(settings))
            logger.info(
                "Redis async pool ready",
                extra={"max_connections": settings.REDIS_MAX_CONNECTIONS},
            )
        return AsyncRedis(connection_pool=cls._async_pool)
    
    @classmethod
    def get_sync_client(cls, settings: Settings) -> Redis:
        """Client on the shared blocking pool (audit worker)."""
        if cls._sync_pool is None:
            cls._sync_pool = ConnectionPool.from_url(settings.REDIS_URL, **_pool_options(settings))
            logger.info(
                "Redis sync pool ready",
                extra={"max_connections": settings.REDIS_MAX_CONNECTIONS},
            )
        return Redis(connection_pool=cls._sync_pool)
    
    @classmethod
    async def close_async_pool(cls):
        """Disconnect the async pool; called on API shutdown."""
        pool, cls._async_pool = cls._async_pool, None
        if pool is not None:
            await pool.disconnect()
            logger.info("Redis async pool closed")
    
    @classmethod
    def close_sync_pool(cls):
        """Disconnect the blocking pool; called from the Celery worker_process_shutdown signal."""
        pool, cls._sync_pool = cls._sync_pool, None
        if pool is not None:
            pool.disconnect()
            logger.info("Redis sync pool closed")


def key(settings: Settings, *parts: str) -> str:
    """Build a namespaced Redis key, e.g. pii:entity:profiles:42."""
    return ":".join((settings.REDIS_KEY_PREFIX, *parts))
