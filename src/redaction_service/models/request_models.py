"""
Request and result models for a single redaction run.
"""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from redaction_service.models.enums import EntityType, RedactionType, ViewerRole


class RedactionRequest(BaseModel):
    """What to redact and for whom."""
    
    model_config = ConfigDict(extra="ignore")
    
    entity_type: EntityType
    entity_id: str = Field(..., min_length=1)
    viewer_role: str = Field(
        ...,
        min_length=1,
        description="Open-ended; built-in tiers are listed in ViewerRole",
        examples=[role.value for role in ViewerRole],
    )
    viewer_id: Optional[str] = Field(default=None, description="Used only for audit attribution")
    fields: Optional[list[str]] = Field(
        default=None,
        description="Allow-list of dotted paths; narrows rule scope, never widens it",
    )


class AppliedRedaction(BaseModel):
    """One transformation actually performed on the working copy."""
    
    field: str
    rule_id: str
    rule_name: str
    redaction_type: RedactionType


class RedactionResult(BaseModel):
    """Redacted copy of the entity plus the ordered manifest of changes."""
    
    data: dict[str, Any]
    redactions_applied: list[AppliedRedaction] = Field(default_factory=list)
