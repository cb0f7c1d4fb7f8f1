"""
Unit tests for the entity stores.
"""

import json

import pytest

from redaction_service.models.enums import EntityType
from redaction_service.persistence.entity_repository import (
    InMemoryEntityRepository,
    RedisEntityRepository,
)
from redaction_service.redaction.exceptions import RepositoryError


@pytest.fixture
def repository(mock_async_redis, test_settings):
    return RedisEntityRepository(mock_async_redis, test_settings)


def backed_by(mock_async_redis, store: dict):
    """Route redis.get through a dict of key -> JSON payload."""
    async def _get(redis_key):
        return store.get(redis_key)
    mock_async_redis.get.side_effect = _get


class TestRedisEntityRepository:
    
    def test_entity_key_uses_namespace(self, repository):
        assert repository.entity_key(EntityType.MESSAGE, "m-1") == "test:entity:concierge_messages:m-1"
        assert repository.entity_key(EntityType.SERVICE_REQUEST, "sr-1") == "test:entity:service_requests:sr-1"
    
    def test_unconfigured_namespace(self, mock_async_redis, test_settings):
        test_settings.ENTITY_NAMESPACES = {"profile": "profiles"}
        repository = RedisEntityRepository(mock_async_redis, test_settings)
        
        with pytest.raises(RepositoryError):
            repository.entity_key(EntityType.EVENT, "e-1")
    
    @pytest.mark.asyncio
    async def test_fetch_missing_returns_none(self, repository, mock_async_redis):
        assert await repository.fetch(EntityType.PROFILE, "nope") is None
        mock_async_redis.get.assert_awaited_once_with("test:entity:profiles:nope")
    
    @pytest.mark.asyncio
    async def test_fetch_profile(self, repository, mock_async_redis):
        backed_by(mock_async_redis, {
            "test:entity:profiles:u1": json.dumps({"email": "a@b.com"}),
        })
        
        assert await repository.fetch(EntityType.PROFILE, "u1") == {"email": "a@b.com"}
    
    @pytest.mark.asyncio
    async def test_service_request_embeds_client_profile(self, repository, mock_async_redis):
        backed_by(mock_async_redis, {
            "test:entity:service_requests:sr-1": json.dumps({"id": "sr-1", "client_id": "u1"}),
            "test:entity:profiles:u1": json.dumps({
                "display_name": "Jane Doe",
                "email": "jane@example.com",
                "phone": "555-1234",
                "date_of_birth": "1990-01-01",
            }),
        })
        
        document = await repository.fetch(EntityType.SERVICE_REQUEST, "sr-1")
        
        assert document["client"] == {
            "display_name": "Jane Doe",
            "email": "jane@example.com",
            "phone": "555-1234",
        }
    
    @pytest.mark.asyncio
    async def test_service_request_with_missing_client(self, repository, mock_async_redis):
        backed_by(mock_async_redis, {
            "test:entity:service_requests:sr-1": json.dumps({"id": "sr-1", "client_id": "gone"}),
        })
        
        document = await repository.fetch(EntityType.SERVICE_REQUEST, "sr-1")
        
        assert document["client"] is None
    
    @pytest.mark.asyncio
    async def test_client_embed_key_is_configurable(self, mock_async_redis, test_settings):
        test_settings.SERVICE_REQUEST_CLIENT_KEY = "profiles"
        repository = RedisEntityRepository(mock_async_redis, test_settings)
        backed_by(mock_async_redis, {
            "test:entity:service_requests:sr-1": json.dumps({"id": "sr-1", "client_id": "u1"}),
            "test:entity:profiles:u1": json.dumps({"email": "jane@example.com"}),
        })
        
        document = await repository.fetch(EntityType.SERVICE_REQUEST, "sr-1")
        
        assert "client" not in document
        assert document["profiles"]["email"] == "jane@example.com"
    
    @pytest.mark.asyncio
    async def test_corrupt_payload(self, repository, mock_async_redis):
        backed_by(mock_async_redis, {"test:entity:events:e1": "{not json"})
        
        with pytest.raises(RepositoryError):
            await repository.fetch(EntityType.EVENT, "e1")
    
    @pytest.mark.asyncio
    async def test_non_object_payload(self, repository, mock_async_redis):
        backed_by(mock_async_redis, {"test:entity:events:e1": "[1, 2]"})
        
        with pytest.raises(RepositoryError):
            await repository.fetch(EntityType.EVENT, "e1")
    
    @pytest.mark.asyncio
    async def test_save(self, repository, mock_async_redis):
        await repository.save(EntityType.EVENT, "e1", {"title": "Gala"})
        
        mock_async_redis.set.assert_awaited_once_with("test:entity:events:e1", json.dumps({"title": "Gala"}))


@pytest.mark.asyncio
async def test_in_memory_repository():
    repository = InMemoryEntityRepository()
    repository.add(EntityType.PROFILE, "u1", {"email": "a@b.com"})
    
    assert await repository.fetch(EntityType.PROFILE, "u1") == {"email": "a@b.com"}
    assert await repository.fetch(EntityType.MESSAGE, "u1") is None
