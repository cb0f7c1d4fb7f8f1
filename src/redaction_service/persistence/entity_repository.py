"""
Entity store: read-only access to the records being redacted.

Storage layout (Redis):
- One JSON document per entity: "{prefix}:entity:{namespace}:{entity_id}"
- namespace comes from settings.ENTITY_NAMESPACES (service_requests,
  profiles, concierge_messages, events)

A service request is returned with its client's profile embedded under
settings.SERVICE_REQUEST_CLIENT_KEY ("client" by default), limited to
settings.SERVICE_REQUEST_CLIENT_FIELDS and resolved from its client_id.
"""

import json
from abc import ABC, abstractmethod
from typing import Any, Optional

import structlog
from redis.asyncio import Redis as AsyncRedis

from redaction_service.config import Settings
from redaction_service.models.enums import EntityType
from redaction_service.persistence.redis_client import key
from redaction_service.redaction.exceptions import RepositoryError

logger = structlog.get_logger(__name__)


class EntityRepository(ABC):
    """Abstract entity source keyed by (entity_type, entity_id)."""
    
    @abstractmethod
    async def fetch(self, entity_type: EntityType, entity_id: str) -> Optional[dict[str, Any]]:
        """Return the entity document, or None if it does not exist."""


class InMemoryEntityRepository(EntityRepository):
    """
    Dict-backed entity store for development and tests.
    
    Documents are returned as stored (not copied); the engine clones before
    mutating.
    """
    
    def __init__(self, documents: Optional[dict[tuple[EntityType, str], dict[str, Any]]] = None):
        self._documents: dict[tuple[EntityType, str], dict[str, Any]] = dict(documents or {})
    
    def add(self, entity_type: EntityType, entity_id: str, document: dict[str, Any]) -> None:
        self._documents[(entity_type, entity_id)] = document
    
    async def fetch(self, entity_type: EntityType, entity_id: str) -> Optional[dict[str, Any]]:
        return self._documents.get((entity_type, entity_id))


class RedisEntityRepository(EntityRepository):
    """
    Redis-backed entity store.
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
    
    def entity_key(self, entity_type: EntityType, entity_id: str) -> str:
        namespace = self.settings.ENTITY_NAMESPACES.get(entity_type.value)
        if namespace is None:
            raise RepositoryError(
                "No storage namespace configured for entity type",
                details={"entity_type": entity_type.value},
            )
        return key(self.settings, "entity", namespace, entity_id)
    
    async def fetch(self, entity_type: EntityType, entity_id: str) -> Optional[dict[str, Any]]:
        """
        Load an entity document.
        
        Raises:
            RepositoryError: Stored payload is not a JSON object
        """
        document = await self._load(self.entity_key(entity_type, entity_id))
        if document is None:
            logger.debug("Entity not found", entity_type=entity_type.value, entity_id=entity_id)
            return None
        
        if entity_type is EntityType.SERVICE_REQUEST:
            await self._embed_client_profile(document)
        
        return document
    
    async def save(self, entity_type: EntityType, entity_id: str, document: dict[str, Any]) -> None:
        """Store an entity document (seeding and fixtures)."""
        await self.redis.set(self.entity_key(entity_type, entity_id), json.dumps(document))
        logger.info("Saved entity", entity_type=entity_type.value, entity_id=entity_id)
    
    async def _load(self, redis_key: str) -> Optional[dict[str, Any]]:
        payload = await self.redis.get(redis_key)
        if payload is None:
            return None
        try:
            document = json.loads(payload)
        except json.JSONDecodeError as e:
            raise RepositoryError("Corrupt entity payload", details={"key": redis_key}) from e
        if not isinstance(document, dict):
            raise RepositoryError("Entity payload is not an object", details={"key": redis_key})
        return document
    
    async def _embed_client_profile(self, document: dict[str, Any]) -> None:
        client_id = document.get("client_id")
        if not client_id:
            return
        
        profile = await self._load(self.entity_key(EntityType.PROFILE, str(client_id)))
        if profile is None:
            document[self.settings.SERVICE_REQUEST_CLIENT_KEY] = None
            return
        
        document[self.settings.SERVICE_REQUEST_CLIENT_KEY] = {
            name: profile.get(name) for name in self.settings.SERVICE_REQUEST_CLIENT_FIELDS
        }
