"""
Redis persistence layer.

- redis_client.py: Redis connection pooling for sync and async contexts
- entity_repository.py: Read access to the records being redacted
- rule_repository.py: Redaction rules ordered by priority
- audit_sink.py: Append-only audit trail

Each store has an abstract interface, an in-memory implementation for
development and tests, and a Redis implementation.
"""

from redaction_service.persistence.audit_sink import (
    AuditSink,
    InMemoryAuditSink,
    RedisAuditSink,
    SyncRedisAuditSink,
)
from redaction_service.persistence.entity_repository import (
    EntityRepository,
    InMemoryEntityRepository,
    RedisEntityRepository,
)
from redaction_service.persistence.redis_client import RedisClient
from redaction_service.persistence.rule_repository import (
    InMemoryRuleRepository,
    RedisRuleRepository,
    RuleRepository,
)

__all__ = [
    "RedisClient",
    "EntityRepository",
    "InMemoryEntityRepository",
    "RedisEntityRepository",
    "RuleRepository",
    "InMemoryRuleRepository",
    "RedisRuleRepository",
    "AuditSink",
    "InMemoryAuditSink",
    "RedisAuditSink",
    "SyncRedisAuditSink",
]
