"""
Audit sink: append-only storage for AuditLogEntry records.

Storage layout (Redis):
- List "{prefix}:audit": every entry, oldest first (RPUSH)
- List "{prefix}:audit:{entity_type}:{entity_id}": entries for one entity

Entries are never trimmed or rewritten here; retention belongs to the
compliance tooling that reads the trail.
"""

from abc import ABC, abstractmethod

import structlog
from redis import Redis
from redis.asyncio import Redis as AsyncRedis

from redaction_service.config import Settings
from redaction_service.models.audit_models import AuditLogEntry
from redaction_service.persistence.redis_client import key
from redaction_service.redaction.exceptions import AuditWriteError

logger = structlog.get_logger(__name__)


class AuditSink(ABC):
    """Abstract audit destination."""
    
    @abstractmethod
    async def append(self, entries: list[AuditLogEntry]) -> None:
        """
        Persist entries.
        
        Raises:
            AuditWriteError: Entries could not be written
        """


class InMemoryAuditSink(AuditSink):
    """Collects entries in a list (development and tests)."""
    
    def __init__(self):
        self.entries: list[AuditLogEntry] = []
    
    async def append(self, entries: list[AuditLogEntry]) -> None:
        self.entries.extend(entries)


def _keyed_payloads(settings: Settings, entries: list[AuditLogEntry]) -> list[tuple[str, str]]:
    """(list key, JSON) pairs: one global and one per-entity write per entry."""
    global_key = key(settings, "audit")
    pairs = []
    for entry in entries:
        payload = entry.model_dump_json()
        pairs.append((global_key, payload))
        pairs.append((key(settings, "audit", entry.entity_type.value, entry.entity_id), payload))
    return pairs


class RedisAuditSink(AuditSink):
    """
    Async Redis audit sink used by the API process.
    """
    
    def __init__(self, redis_client: AsyncRedis, settings: Settings):
        self.redis = redis_client
        self.settings = settings
    
    async def append(self, entries: list[AuditLogEntry]) -> None:
        if not entries:
            return
        try:
            async with self.redis.pipeline(transaction=True) as pipe:
                for list_key, payload in _keyed_payloads(self.settings, entries):
                    pipe.rpush(list_key, payload)
                await pipe.execute()
        except Exception as e:
            raise AuditWriteError(
                "Failed to write audit entries",
                details={"count": len(entries), "error": str(e)},
            ) from e
        
        logger.debug("Audit entries written", count=len(entries))


class SyncRedisAuditSink:
    """
    Blocking Redis audit sink used by the Celery audit worker.
    """
    
    def __init__(self, redis_client: Redis, settings: Settings):
        self.redis = redis_client
        self.settings = settings
    
    def append(self, entries: list[AuditLogEntry]) -> None:
        if not entries:
            return
        try:
            with self.redis.pipeline(transaction=True) as pipe:
                for list_key, payload in _keyed_payloads(self.settings, entries):
                    pipe.rpush(list_key, payload)
                pipe.execute()
        except Exception as e:
            raise AuditWriteError(
                "Failed to write audit entries",
                details={"count": len(entries), "error": str(e)},
            ) from e
        
        logger.debug("Audit entries written (sync)", count=len(entries))
