"""
Unit tests for request, rule and response models.
"""

import pytest
from pydantic import ValidationError

from redaction_service.api.models import RedactResponse
from redaction_service.models.enums import EntityType, RedactionType, ViewerRole
from redaction_service.models.request_models import (
    AppliedRedaction,
    RedactionRequest,
    RedactionResult,
)
from redaction_service.models.rule_models import RedactionRule


class TestRedactionRequest:
    
    def test_valid_request(self):
        request = RedactionRequest(
            entity_type="profile",
            entity_id="u1",
            viewer_role="partner",
            fields=["email"],
        )
        
        assert request.entity_type is EntityType.PROFILE
        assert request.viewer_id is None
        assert request.fields == ["email"]
    
    def test_unknown_entity_type(self):
        with pytest.raises(ValidationError):
            RedactionRequest(entity_type="invoice", entity_id="i1", viewer_role="partner")
    
    @pytest.mark.parametrize("missing", ["entity_type", "entity_id", "viewer_role"])
    def test_required_fields(self, missing):
        data = {"entity_type": "profile", "entity_id": "u1", "viewer_role": "partner"}
        del data[missing]
        
        with pytest.raises(ValidationError):
            RedactionRequest(**data)
    
    def test_empty_entity_id_rejected(self):
        with pytest.raises(ValidationError):
            RedactionRequest(entity_type="profile", entity_id="", viewer_role="partner")
    
    def test_empty_allow_list_is_kept(self):
        request = RedactionRequest(entity_type="profile", entity_id="u1", viewer_role="partner", fields=[])
        assert request.fields == []
    
    def test_viewer_role_is_open_ended(self):
        builtin = RedactionRequest(entity_type="profile", entity_id="u1", viewer_role=ViewerRole.GUEST.value)
        custom = RedactionRequest(entity_type="profile", entity_id="u1", viewer_role="auditor")
        
        assert builtin.viewer_role == "guest"
        assert custom.viewer_role == "auditor"
    
    def test_viewer_role_schema_lists_builtin_tiers(self):
        schema = RedactionRequest.model_json_schema()
        
        assert schema["properties"]["viewer_role"]["examples"] == ["partner", "member", "admin", "guest"]


class TestRedactionRule:
    
    def _rule(self, **overrides):
        data = {
            "id": "r1",
            "rule_name": "Email",
            "field_names": ["email"],
            "redaction_type": "mask",
            "applies_to_roles": ["partner"],
        }
        data.update(overrides)
        return RedactionRule(**data)
    
    def test_defaults(self):
        rule = self._rule()
        
        assert rule.mask_character == "*"
        assert rule.preserve_length is False
        assert rule.show_last_n == 0
        assert rule.exception_roles == []
        assert rule.is_active is True
        assert rule.priority == 0
    
    @pytest.mark.parametrize("value", [None, ""])
    def test_blank_mask_character_defaults(self, value):
        assert self._rule(mask_character=value).mask_character == "*"
    
    def test_multi_character_mask_rejected(self):
        with pytest.raises(ValidationError):
            self._rule(mask_character="ab")
    
    def test_unknown_redaction_type_rejected(self):
        with pytest.raises(ValidationError):
            self._rule(redaction_type="shred")
    
    def test_negative_show_last_n_rejected(self):
        with pytest.raises(ValidationError):
            self._rule(show_last_n=-1)
    
    def test_empty_field_names_rejected(self):
        with pytest.raises(ValidationError):
            self._rule(field_names=[])
    
    def test_applies_to(self):
        rule = self._rule(applies_to_roles=["partner", "member"], exception_roles=["member"])
        
        assert rule.applies_to("partner")
        assert not rule.applies_to("member")
        assert not rule.applies_to("guest")
        assert not self._rule(is_active=False).applies_to("partner")


def test_redact_response_from_result():
    request = RedactionRequest(entity_type="service_request", entity_id="sr-1", viewer_role="partner")
    result = RedactionResult(
        data={"client": {"email": "****.com"}},
        redactions_applied=[
            AppliedRedaction(
                field="client.email", rule_id="r1", rule_name="Email", redaction_type=RedactionType.MASK
            ),
        ],
    )
    
    response = RedactResponse.from_result(request, result)
    
    assert response.model_dump() == {
        "success": True,
        "original_entity_type": "service_request",
        "original_entity_id": "sr-1",
        "viewer_role": "partner",
        "data": {"client": {"email": "****.com"}},
        "redactions_applied": 1,
        "redaction_details": [{"field": "client.email", "rule": "Email", "type": "mask"}],
    }
