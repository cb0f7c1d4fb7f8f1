"""
Data models for the PII Redaction Service.

- enums.py: EntityType, ViewerRole, RedactionType, AuditDispatchMode
- rule_models.py: RedactionRule configuration
- request_models.py: RedactionRequest, AppliedRedaction, RedactionResult
- audit_models.py: AuditLogEntry
"""

from redaction_service.models.audit_models import AuditLogEntry
from redaction_service.models.enums import (
    AuditDispatchMode,
    EntityType,
    RedactionType,
    ViewerRole,
)
from redaction_service.models.request_models import (
    AppliedRedaction,
    RedactionRequest,
    RedactionResult,
)
from redaction_service.models.rule_models import RedactionRule

__all__ = [
    "AuditDispatchMode",
    "EntityType",
    "RedactionType",
    "ViewerRole",
    "RedactionRule",
    "RedactionRequest",
    "AppliedRedaction",
    "RedactionResult",
    "AuditLogEntry",
]
