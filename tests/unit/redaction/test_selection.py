"""Unit tests for rule selection and allow-list narrowing."""

import pytest

from redaction_service.redaction.selection import eligible_fields, select_applicable_rules


class TestSelectApplicableRules:
    """Role gating: active, role covered, role not exempted."""
    
    @pytest.mark.parametrize(
        "is_active,applies_to,exceptions,role,expected",
        [
            (True, ["partner"], [], "partner", True),
            (False, ["partner"], [], "partner", False),
            (True, ["guest"], [], "partner", False),
            (True, ["partner"], ["partner"], "partner", False),
            (True, ["partner", "admin"], ["admin"], "partner", True),
            (True, ["partner", "admin"], ["admin"], "admin", False),
        ],
    )
    def test_role_gating(self, create_test_rule, is_active, applies_to, exceptions, role, expected):
        rule = create_test_rule(
            applies_to_roles=applies_to,
            exception_roles=exceptions,
            is_active=is_active,
        )
        assert (select_applicable_rules([rule], role) == [rule]) is expected
    
    def test_preserves_order(self, create_test_rule):
        rules = [create_test_rule() for _ in range(5)]
        assert select_applicable_rules(rules, "partner") == rules


class TestEligibleFields:
    """Allow-list narrowing."""
    
    def test_no_allow_list(self, create_test_rule):
        rule = create_test_rule(field_names=["email", "phone"])
        assert eligible_fields(rule, None) == ["email", "phone"]
    
    def test_intersection_keeps_rule_order(self, create_test_rule):
        rule = create_test_rule(field_names=["email", "phone", "name"])
        assert eligible_fields(rule, ["name", "email"]) == ["email", "name"]
    
    def test_allow_list_never_widens(self, create_test_rule):
        rule = create_test_rule(field_names=["email"])
        assert eligible_fields(rule, ["email", "ssn"]) == ["email"]
    
    def test_empty_allow_list(self, create_test_rule):
        rule = create_test_rule(field_names=["email"])
        assert eligible_fields(rule, []) == []
