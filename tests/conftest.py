"""Shared test fixtures and configuration for all tests.

This conftest.py provides common fixtures used across unit and integration tests.
"""

import json
from pathlib import Path
from typing import Any, Dict

import pytest

from redaction_service.config import Settings
from redaction_service.models.enums import AuditDispatchMode, RedactionType, ViewerRole
from redaction_service.models.rule_models import RedactionRule


@pytest.fixture
def test_settings() -> Settings:
    """Test settings with safe defaults for local testing.
    
    Override specific settings in individual tests as needed:
        def test_something(test_settings):
            test_settings.AUDIT_DISPATCH_MODE = AuditDispatchMode.BACKGROUND
    """
    return Settings(
        # === Application ===
        APP_NAME="PII Redaction Service (Test)",
        APP_VERSION="0.1.0",
        DEBUG=True,
        LOG_LEVEL="DEBUG",
        ENVIRONMENT="development",
        
        # === Redis ===
        REDIS_URL="redis://localhost:6379/15",
        REDIS_MAX_CONNECTIONS=10,
        REDIS_KEY_PREFIX="test",
        
        # === Audit ===
        AUDIT_ENABLED=True,
        AUDIT_DISPATCH_MODE=AuditDispatchMode.INLINE,
        
        PROMETHEUS_ENABLED=False,
    )


@pytest.fixture
def fixtures_dir() -> Path:
    """Path to test fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def sample_service_request(fixtures_dir: Path) -> Dict[str, Any]:
    """Service request document with an embedded client profile."""
    with open(fixtures_dir / "sample_service_request.json") as f:
        return json.load(f)


@pytest.fixture
def sample_rules(fixtures_dir: Path) -> list[RedactionRule]:
    """Rule set from fixture, in file order."""
    with open(fixtures_dir / "sample_rules.json") as f:
        return [RedactionRule.model_validate(rule) for rule in json.load(f)]


@pytest.fixture
def create_test_rule():
    """Factory fixture to create RedactionRule with custom values.
    
    Usage:
        def test_something(create_test_rule):
            rule = create_test_rule(redaction_type=RedactionType.HASH, field_names=["email"])
    """
    counter = {"n": 0}
    
    def _create(
        field_names: list[str] | None = None,
        redaction_type: RedactionType = RedactionType.MASK,
        applies_to_roles: list[str] | None = None,
        exception_roles: list[str] | None = None,
        **overrides: Any,
    ) -> RedactionRule:
        counter["n"] += 1
        data: Dict[str, Any] = {
            "id": f"rule-{counter['n']}",
            "rule_name": f"Test rule {counter['n']}",
            "field_names": field_names or ["email"],
            "redaction_type": redaction_type,
            "applies_to_roles": applies_to_roles or [ViewerRole.PARTNER.value],
            "exception_roles": exception_roles or [],
        }
        data.update(overrides)
        return RedactionRule(**data)
    
    return _create
