"""
Redaction strategies.

Each transformer is a pure function of (value, rule) -> str. Values reach
the transformers already stringified (see stringify_scalar).
"""

import math
import re
from functools import lru_cache
from typing import Any, Callable

import structlog

from redaction_service.models.enums import RedactionType
from redaction_service.models.rule_models import RedactionRule
from redaction_service.monitoring.metrics import invalid_rule_patterns_total
from redaction_service.redaction.exceptions import InvalidRulePatternError

logger = structlog.get_logger(__name__)

REDACTED_MARKER = "[REDACTED]"

# Masked prefix length when show_last_n is set without preserve_length
_FIXED_MASK_PREFIX = 4
# Upper bound on mask length when neither show_last_n nor preserve_length is set
_MAX_PLAIN_MASK = 8
_REGEX_MATCH_MASK_LEN = 4


def stringify_scalar(value: Any) -> str:
    """
    Render a scalar leaf the way it appears in the JSON document.
    
    Booleans become "true"/"false" and integral floats lose their ".0",
    so redaction output does not depend on how a number was decoded.
    """
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and math.isfinite(value) and value.is_integer():
        return str(int(value))
    return str(value)


def stable_hash(value: str) -> int:
    """
    Deterministic non-cryptographic 32-bit hash.
    
    Rolling h = h * 31 + code_unit over UTF-16 code units, wrapped to a
    signed 32-bit integer after every step; the absolute value is returned.
    Identical across processes and runs (unlike the builtin hash()), and
    compatible with hashes produced by the previous JavaScript service.
    
    Examples:
        >>> stable_hash("a")
        97
        >>> stable_hash("ab")
        3105
    """
    h = 0
    # surrogatepass keeps lone surrogates (valid in JSON strings) as code units
    encoded = value.encode("utf-16-le", "surrogatepass")
    for i in range(0, len(encoded), 2):
        code_unit = encoded[i] | (encoded[i + 1] << 8)
        h = (h * 31 + code_unit) & 0xFFFFFFFF
    if h & 0x80000000:
        h -= 0x100000000
    return abs(h)


def mask(value: str, rule: RedactionRule) -> str:
    """
    Replace characters with the rule's mask character.
    
    - show_last_n > 0 and value longer than that: keep the last N characters,
      mask the rest (full length if preserve_length, else a fixed 4)
    - preserve_length: mask every character
    - otherwise: at most 8 mask characters
    
    Examples:
        "4111111111111111", show_last_n=4 -> "****1111"
        "secret", preserve_length=True     -> "******"
    """
    mask_char = rule.mask_character
    show_last_n = rule.show_last_n
    
    if show_last_n > 0 and len(value) > show_last_n:
        visible = value[-show_last_n:]
        masked_len = len(value) - show_last_n if rule.preserve_length else _FIXED_MASK_PREFIX
        return mask_char * masked_len + visible
    
    if rule.preserve_length:
        return mask_char * len(value)
    
    return mask_char * min(_MAX_PLAIN_MASK, len(value))


def hash_value(value: str, rule: RedactionRule) -> str:
    """Replace with a stable correlation token, e.g. "[REDACTED-c21]"."""
    return f"[REDACTED-{stable_hash(value):x}]"


def remove(value: str, rule: RedactionRule) -> str:
    """Discard the value entirely."""
    return REDACTED_MARKER


def pseudonymize(value: str, rule: RedactionRule) -> str:
    """
    Reduce a name to its initials.
    
    Examples:
        "Jane Q Doe" -> "J.Q.D."
        "Madonna"    -> "M."
        ""           -> "[REDACTED]"
    """
    tokens = value.split()
    if not tokens:
        return REDACTED_MARKER
    return ".".join(token[0].upper() for token in tokens) + "."


@lru_cache(maxsize=256)
def compile_rule_pattern(pattern: str) -> re.Pattern:
    """Compile and cache a rule pattern; raises InvalidRulePatternError."""
    try:
        return re.compile(pattern)
    except re.error as e:
        raise InvalidRulePatternError(pattern, str(e)) from e


def regex_replace(value: str, rule: RedactionRule) -> str:
    """
    Mask every match of the rule's pattern with four mask characters.
    
    Falls back to mask() when the pattern is missing or does not compile.
    """
    if not rule.regex_pattern:
        return mask(value, rule)
    
    try:
        compiled = compile_rule_pattern(rule.regex_pattern)
    except InvalidRulePatternError as e:
        invalid_rule_patterns_total.inc()
        logger.warning(
            "Invalid regex pattern, falling back to mask",
            rule_id=rule.id,
            rule_name=rule.rule_name,
            reason=e.message,
        )
        return mask(value, rule)
    
    replacement = rule.mask_character * _REGEX_MATCH_MASK_LEN
    return compiled.sub(lambda _match: replacement, value)


TRANSFORMERS: dict[RedactionType, Callable[[str, RedactionRule], str]] = {
    RedactionType.MASK: mask,
    RedactionType.HASH: hash_value,
    RedactionType.REMOVE: remove,
    RedactionType.PSEUDONYMIZE: pseudonymize,
    RedactionType.REGEX: regex_replace,
}


def apply_redaction(value: Any, rule: RedactionRule) -> str:
    """
    Redact a scalar leaf according to the rule's strategy.
    
    Args:
        value: Scalar leaf value (str, int, float, bool)
        rule: Rule selecting the strategy and its parameters
    
    Returns:
        Redacted string
    """
    transformer = TRANSFORMERS.get(rule.redaction_type, mask)
    return transformer(stringify_scalar(value), rule)
