"""
Field-level redaction core.

- document.py: dotted-path get/set over nested documents
- transformers.py: mask, hash, remove, pseudonymize, regex strategies
- selection.py: role gating and allow-list narrowing
- engine.py: orchestration (fetch, evaluate, manifest)
- exceptions.py: error taxonomy
"""

from redaction_service.redaction.engine import RedactionEngine, apply_rules
from redaction_service.redaction.transformers import apply_redaction, stable_hash

__all__ = [
    "RedactionEngine",
    "apply_rules",
    "apply_redaction",
    "stable_hash",
]
