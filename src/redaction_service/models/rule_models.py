"""
Redaction rule configuration model.

Rules are authored out-of-band by administrators and read by the engine for
the duration of a single request.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from redaction_service.models.enums import RedactionType


class RedactionRule(BaseModel):
    """
    One field-level redaction rule.
    
    A rule applies to a viewer iff it is active, the viewer's role is listed
    in applies_to_roles and the role is not listed in exception_roles.
    """
    
    model_config = ConfigDict(extra="ignore", use_enum_values=False)
    
    id: str = Field(..., description="Opaque rule identifier")
    rule_name: str = Field(..., description="Human label, recorded in the audit trail")
    field_names: list[str] = Field(..., min_length=1, description="Dotted field paths, e.g. profile.email")
    pattern_type: str = Field(default="custom", description="Bookkeeping tag (email, phone, name, ...)")
    regex_pattern: Optional[str] = Field(default=None, description="Pattern used by the regex strategy")
    redaction_type: RedactionType
    mask_character: str = Field(default="*", min_length=1, max_length=1)
    preserve_length: bool = False
    show_last_n: int = Field(default=0, ge=0)
    applies_to_roles: list[str] = Field(..., min_length=1)
    exception_roles: list[str] = Field(default_factory=list)
    is_active: bool = True
    priority: int = Field(default=0, description="Evaluation order, ascending")
    
    @field_validator("mask_character", mode="before")
    @classmethod
    def default_mask_character(cls, v):
        # Stored rules may carry null or "" for "use the default"
        return v or "*"
    
    def applies_to(self, viewer_role: str) -> bool:
        """Whether this rule must be evaluated for the given viewer role."""
        return (
            self.is_active
            and viewer_role in self.applies_to_roles
            and viewer_role not in self.exception_roles
        )
