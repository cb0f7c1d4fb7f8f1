"""
PII Redaction Service.

Applies configurable, role-aware field-level redaction rules to structured
records before they are shown to less-trusted viewers:
- Masking (optionally keeping the last N characters)
- Stable hashing for pseudonymous correlation
- Removal
- Pseudonymization (initials only)
- Regex-based partial masking

Architecture: FastAPI endpoint + Redis-backed entity/rule stores + best-effort audit trail
"""

__version__ = "0.1.0"
