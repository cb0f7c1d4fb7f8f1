"""Custom Prometheus metrics for the PII Redaction Service.

Exposed at /metrics alongside the HTTP metrics from the instrumentator.
Alert rules worth configuring:
- audit_write_failures_total (any increase means a compliance gap)
- invalid_rule_patterns_total / invalid_rules_skipped_total (rule misconfiguration)
"""

from prometheus_client import Counter, Histogram

# === Request Metrics ===

redaction_requests_total = Counter(
    "redaction_requests_total",
    "Total redaction requests by entity type and outcome",
    ["entity_type", "status"],
)
"""
Labels:
- entity_type: service_request, profile, message, event
- status: success, not_found, error
"""

redaction_duration_seconds = Histogram(
    "redaction_duration_seconds",
    "End-to-end engine duration (fetch + evaluation) in seconds",
    ["entity_type"],
    buckets=[0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5],
)

redactions_applied_total = Counter(
    "redactions_applied_total",
    "Total field transformations applied by strategy",
    ["redaction_type"],
)

# === Rule Configuration Metrics ===

invalid_rule_patterns_total = Counter(
    "invalid_rule_patterns_total",
    "Regex rules whose pattern failed to compile (fell back to mask)",
)

invalid_rules_skipped_total = Counter(
    "invalid_rules_skipped_total",
    "Stored rules skipped because they failed model validation",
)

# === Audit Metrics ===

audit_entries_written_total = Counter(
    "audit_entries_written_total",
    "Audit log entries successfully handed to a sink",
    ["mode"],
)

audit_write_failures_total = Counter(
    "audit_write_failures_total",
    "Audit writes that failed and were dropped",
    ["mode"],
)
"""
Labels:
- mode: inline, background, queue

Alert thresholds:
- WARN: any increase
"""
