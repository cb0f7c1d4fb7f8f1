"""Unit test fixtures (mocks and stubs).

Provides mock Redis clients and in-memory stores for testing without
external services.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest

from redaction_service.persistence.audit_sink import InMemoryAuditSink
from redaction_service.persistence.entity_repository import InMemoryEntityRepository
from redaction_service.persistence.rule_repository import InMemoryRuleRepository


@pytest.fixture
def mock_async_redis():
    """Mock AsyncRedis client with a configurable pipeline.
    
    The pipeline is reachable as mock_async_redis.pipe; its execute()
    returns [1, 1] unless reconfigured.
    """
    mock = MagicMock()
    mock.get = AsyncMock(return_value=None)
    mock.set = AsyncMock(return_value=True)
    mock.zrange = AsyncMock(return_value=[])
    mock.hmget = AsyncMock(return_value=[])
    mock.ping = AsyncMock(return_value=True)
    
    pipe = MagicMock()
    pipe.execute = AsyncMock(return_value=[1, 1])
    mock.pipeline.return_value.__aenter__.return_value = pipe
    mock.pipe = pipe
    return mock


@pytest.fixture
def mock_redis():
    """Mock sync Redis client with a configurable pipeline."""
    mock = MagicMock()
    pipe = MagicMock()
    pipe.execute = MagicMock(return_value=[1, 1])
    mock.pipeline.return_value.__enter__.return_value = pipe
    mock.pipe = pipe
    return mock


@pytest.fixture
def entity_repository():
    """Empty in-memory entity store."""
    return InMemoryEntityRepository()


@pytest.fixture
def rule_repository():
    """Empty in-memory rule store."""
    return InMemoryRuleRepository()


@pytest.fixture
def audit_sink():
    """In-memory audit sink."""
    return InMemoryAuditSink()
