"""
API request and response models for the redaction endpoint.

The request body is the domain RedactionRequest; these models shape the
JSON contract returned to callers.
"""

from datetime import datetime, timezone
from typing import Any, Optional

from pydantic import BaseModel, Field

from redaction_service.models.request_models import RedactionRequest, RedactionResult


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class RedactionDetail(BaseModel):
    """One entry of redaction_details."""
    
    field: str = Field(description="Dotted path that was redacted", examples=["profile.email"])
    rule: str = Field(description="Name of the rule that redacted it")
    type: str = Field(description="Redaction strategy", examples=["mask", "hash", "remove"])


class RedactResponse(BaseModel):
    """Successful redaction response."""
    
    success: bool = True
    original_entity_type: str
    original_entity_id: str
    viewer_role: str
    data: dict[str, Any] = Field(description="Redacted copy of the entity")
    redactions_applied: int = Field(ge=0, description="Number of transformations performed")
    redaction_details: list[RedactionDetail] = Field(default_factory=list)
    
    @classmethod
    def from_result(cls, request: RedactionRequest, result: RedactionResult) -> "RedactResponse":
        return cls(
            original_entity_type=request.entity_type.value,
            original_entity_id=request.entity_id,
            viewer_role=request.viewer_role,
            data=result.data,
            redactions_applied=len(result.redactions_applied),
            redaction_details=[
                RedactionDetail(
                    field=applied.field,
                    rule=applied.rule_name,
                    type=applied.redaction_type.value,
                )
                for applied in result.redactions_applied
            ],
        )


class HealthResponse(BaseModel):
    """Response for health check endpoint."""
    
    status: str = Field(
        description="Overall health status",
        examples=["healthy", "unhealthy"]
    )
    version: str = Field(
        description="Service version",
        examples=["0.1.0"]
    )
    services: dict[str, str] = Field(
        description="Dependency health status",
        examples=[{"redis": "ok"}]
    )
    timestamp: datetime = Field(
        default_factory=_utcnow,
        description="Health check timestamp (UTC)"
    )


class ErrorResponse(BaseModel):
    """Standard error envelope."""
    
    error: str = Field(
        description="Error code",
        examples=["invalid_request", "not_found", "internal_error"]
    )
    message: str = Field(
        description="Human-readable error message"
    )
    details: Optional[list[dict[str, Any]]] = Field(
        default=None,
        description="Field-level validation errors (400 only)"
    )
    timestamp: datetime = Field(
        default_factory=_utcnow,
        description="Error timestamp (UTC)"
    )
