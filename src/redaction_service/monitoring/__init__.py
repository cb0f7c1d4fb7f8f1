"""Monitoring and metrics instrumentation for the PII Redaction Service."""

from redaction_service.monitoring.metrics import (
    audit_entries_written_total,
    audit_write_failures_total,
    invalid_rule_patterns_total,
    invalid_rules_skipped_total,
    redaction_duration_seconds,
    redaction_requests_total,
    redactions_applied_total,
)

__all__ = [
    "redaction_requests_total",
    "redaction_duration_seconds",
    "redactions_applied_total",
    "invalid_rule_patterns_total",
    "invalid_rules_skipped_total",
    "audit_entries_written_total",
    "audit_write_failures_total",
]
