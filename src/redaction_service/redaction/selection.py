"""
Rule selection: which rules, and which of their fields, a request may touch.
"""

from typing import Iterable, Optional

from redaction_service.models.rule_models import RedactionRule


def select_applicable_rules(
    rules: Iterable[RedactionRule], viewer_role: str
) -> list[RedactionRule]:
    """
    Keep rules that are active, cover viewer_role and do not exempt it.
    
    The rule store already filters on is_active and applies_to_roles; the
    check is repeated here so any RuleRepository implementation is safe.
    Input order is preserved.
    """
    return [rule for rule in rules if rule.applies_to(viewer_role)]


def eligible_fields(rule: RedactionRule, allow_list: Optional[list[str]]) -> list[str]:
    """
    Rule fields narrowed by the request's allow-list, in rule order.
    
    Args:
        rule: Applicable rule
        allow_list: Optional dotted paths from the request; None means no narrowing
    
    Returns:
        Field paths this rule may redact for the request
    """
    if allow_list is None:
        return list(rule.field_names)
    allowed = set(allow_list)
    return [field for field in rule.field_names if field in allowed]
