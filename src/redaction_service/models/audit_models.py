"""
Audit trail model.
"""

from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from redaction_service.models.enums import EntityType, RedactionType


class AuditLogEntry(BaseModel):
    """
    Record of one field redacted for one viewer.
    
    Append-only: entries are written once and never updated or deleted by
    this service.
    """
    
    model_config = ConfigDict(frozen=True)
    
    entity_type: EntityType
    entity_id: str
    field_name: str
    viewer_id: str
    viewer_role: str
    rule_id: Optional[str] = None
    rule_name: str
    redaction_type: RedactionType
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
