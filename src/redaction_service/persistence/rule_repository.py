"""
Rule store: administrator-managed redaction rules.

Storage layout (Redis):
- Hash "{prefix}:rules": rule_id -> RedactionRule JSON
- Sorted set "{prefix}:rules:order": rule_id scored by priority

ZRANGE orders by score, then lexicographically by member, so evaluation
order is fully determined by (priority, rule_id) and never depends on hash
iteration order.
"""

from abc import ABC, abstractmethod
from typing import Optional

import structlog
from pydantic import ValidationError as PydanticValidationError
from redis.asyncio import Redis as AsyncRedis

from redaction_service.config import Settings
from redaction_service.models.rule_models import RedactionRule
from redaction_service.monitoring.metrics import invalid_rules_skipped_total
from redaction_service.persistence.redis_client import key

logger = structlog.get_logger(__name__)


class RuleRepository(ABC):
    """Abstract rule source."""
    
    @abstractmethod
    async def list_active_rules(self, viewer_role: str) -> list[RedactionRule]:
        """
        Active rules whose applies_to_roles contains viewer_role.
        
        Returned in evaluation order; the engine does not re-sort.
        """


class InMemoryRuleRepository(RuleRepository):
    """
    List-backed rule store for development and tests.
    
    Keeps insertion order (no priority sort) so fixtures control ordering
    directly.
    """
    
    def __init__(self, rules: Optional[list[RedactionRule]] = None):
        self._rules: list[RedactionRule] = list(rules or [])
    
    def add(self, rule: RedactionRule) -> None:
        self._rules.append(rule)
    
    async def list_active_rules(self, viewer_role: str) -> list[RedactionRule]:
        return [
            rule for rule in self._rules
            if rule.is_active and viewer_role in rule.applies_to_roles
        ]


class RedisRuleRepository(RuleRepository):
    """
    Redis-backed rule store.
    """
    
    def __init__(self, redis_client: AsyncRedis, settings: Settings):
        """
        Initialize repository.
        
        Args:
            redis_client: AsyncRedis client instance
            settings: Application settings
        """
        self.redis = redis_client
        self.settings = settings
        self.rules_key = key(settings, "rules")
        self.order_key = key(settings, "rules", "order")
    
    async def list_active_rules(self, viewer_role: str) -> list[RedactionRule]:
        rule_ids = await self.redis.zrange(self.order_key, 0, -1)
        if not rule_ids:
            return []
        
        payloads = await self.redis.hmget(self.rules_key, rule_ids)
        rules = []
        for rule_id, payload in zip(rule_ids, payloads):
            if payload is None:
                # Order index outlived the rule body
                logger.warning("Rule missing from rule hash", rule_id=rule_id)
                continue
            rule = self._parse(rule_id, payload)
            if rule is None:
                continue
            if rule.is_active and viewer_role in rule.applies_to_roles:
                rules.append(rule)
        
        logger.debug("Loaded active rules", viewer_role=viewer_role, count=len(rules))
        return rules
    
    async def save_rule(self, rule: RedactionRule) -> None:
        """Create or replace a rule and its order entry."""
        async with self.redis.pipeline(transaction=True) as pipe:
            pipe.hset(self.rules_key, rule.id, rule.model_dump_json())
            pipe.zadd(self.order_key, {rule.id: rule.priority})
            await pipe.execute()
        logger.info("Saved redaction rule", rule_id=rule.id, rule_name=rule.rule_name)
    
    async def delete_rule(self, rule_id: str) -> bool:
        """Delete a rule; returns False if it did not exist."""
        async with self.redis.pipeline(transaction=True) as pipe:
            pipe.hdel(self.rules_key, rule_id)
            pipe.zrem(self.order_key, rule_id)
            deleted, _ = await pipe.execute()
        logger.info("Deleted redaction rule" if deleted else "Rule not found for deletion", rule_id=rule_id)
        return bool(deleted)
    
    def _parse(self, rule_id: str, payload: str) -> Optional[RedactionRule]:
        try:
            return RedactionRule.model_validate_json(payload)
        except PydanticValidationError as e:
            invalid_rules_skipped_total.inc()
            logger.error(
                "Skipping invalid redaction rule",
                rule_id=rule_id,
                errors=e.error_count(),
            )
            return None
