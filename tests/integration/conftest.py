"""Integration test fixtures.

Runs the real FastAPI app (middleware, exception handlers, routing) with
in-memory stores swapped in through dependency overrides.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

from redaction_service.api.dependencies import (
    get_audit_sink,
    get_entity_repository,
    get_redis,
    get_rule_repository,
    get_settings,
)
from redaction_service.main import app
from redaction_service.models.enums import EntityType
from redaction_service.persistence.audit_sink import InMemoryAuditSink
from redaction_service.persistence.entity_repository import InMemoryEntityRepository
from redaction_service.persistence.rule_repository import InMemoryRuleRepository


@pytest.fixture
def entity_store(sample_service_request):
    store = InMemoryEntityRepository()
    store.add(EntityType.SERVICE_REQUEST, "sr-1001", sample_service_request)
    store.add(EntityType.PROFILE, "user-42", {
        "display_name": "Jane Q Doe",
        "email": "jane.doe@example.com",
        "bio": "Frequent flyer",
    })
    return store


@pytest.fixture
def rule_store(sample_rules):
    return InMemoryRuleRepository(sample_rules)


@pytest.fixture
def audit_store():
    return InMemoryAuditSink()


@pytest.fixture
def redis_mock():
    mock = MagicMock()
    mock.ping = AsyncMock(return_value=True)
    return mock


@pytest.fixture
def client(test_settings, entity_store, rule_store, audit_store, redis_mock):
    """TestClient with every external dependency overridden."""
    app.dependency_overrides[get_settings] = lambda: test_settings
    app.dependency_overrides[get_redis] = lambda: redis_mock
    app.dependency_overrides[get_entity_repository] = lambda: entity_store
    app.dependency_overrides[get_rule_repository] = lambda: rule_store
    app.dependency_overrides[get_audit_sink] = lambda: audit_store
    
    with TestClient(app) as test_client:
        yield test_client
    
    app.dependency_overrides.clear()
