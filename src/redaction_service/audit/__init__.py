"""
Audit trail for applied redactions.

- recorder.py: builds AuditLogEntry records from a manifest and writes them
  best-effort (inline, after the response, or through the Celery queue)
"""

from redaction_service.audit.recorder import AuditRecorder, build_audit_entries

__all__ = [
    "AuditRecorder",
    "build_audit_entries",
]
