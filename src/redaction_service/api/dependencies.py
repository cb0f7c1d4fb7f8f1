"""
FastAPI dependency injection for the redaction endpoint.

Stores and the engine are built per request on top of the shared Redis
pool; they hold no state of their own, so construction is cheap. Tests
replace get_entity_repository / get_rule_repository / get_audit_sink via
app.dependency_overrides.
"""

from functools import lru_cache

from fastapi import Depends
from redis.asyncio import Redis as AsyncRedis

from redaction_service.audit.recorder import AuditRecorder
from redaction_service.config import Settings, settings
from redaction_service.persistence.audit_sink import AuditSink, RedisAuditSink
from redaction_service.persistence.entity_repository import (
    EntityRepository,
    RedisEntityRepository,
)
from redaction_service.persistence.redis_client import RedisClient
from redaction_service.persistence.rule_repository import (
    RedisRuleRepository,
    RuleRepository,
)
from redaction_service.redaction.engine import RedactionEngine


@lru_cache()
def get_settings() -> Settings:
    """
    Get settings singleton.
    
    Returns:
        Settings instance
    """
    return settings


def get_redis(settings: Settings = Depends(get_settings)) -> AsyncRedis:
    """Async Redis client on the shared connection pool."""
    return RedisClient.get_async_client(settings)


def get_entity_repository(
    redis_client: AsyncRedis = Depends(get_redis),
    settings: Settings = Depends(get_settings),
) -> EntityRepository:
    return RedisEntityRepository(redis_client, settings)


def get_rule_repository(
    redis_client: AsyncRedis = Depends(get_redis),
    settings: Settings = Depends(get_settings),
) -> RuleRepository:
    return RedisRuleRepository(redis_client, settings)


def get_audit_sink(
    redis_client: AsyncRedis = Depends(get_redis),
    settings: Settings = Depends(get_settings),
) -> AuditSink:
    return RedisAuditSink(redis_client, settings)


def get_audit_recorder(
    sink: AuditSink = Depends(get_audit_sink),
    settings: Settings = Depends(get_settings),
) -> AuditRecorder:
    """
    Create audit recorder.
    
    Args:
        sink: Audit sink (injected)
        settings: Application settings (injected)
    
    Returns:
        AuditRecorder instance
    """
    return AuditRecorder(sink, enabled=settings.AUDIT_ENABLED)


def get_redaction_engine(
    entity_repository: EntityRepository = Depends(get_entity_repository),
    rule_repository: RuleRepository = Depends(get_rule_repository),
) -> RedactionEngine:
    """
    Create redaction engine with injected stores.
    
    Args:
        entity_repository: Entity store (injected)
        rule_repository: Rule store (injected)
    
    Returns:
        RedactionEngine instance
    """
    return RedactionEngine(
        entity_repository=entity_repository,
        rule_repository=rule_repository,
    )
