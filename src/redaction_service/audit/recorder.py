"""
Audit recorder: turns a redaction manifest into audit entries and writes
them best-effort.

Failures are logged and counted, never raised. By the time the recorder
runs, the redacted document is already computed and safe to return, so an
unhealthy audit store must not turn a successful redaction into an error.
"""

from typing import Optional

import structlog

from redaction_service.models.audit_models import AuditLogEntry
from redaction_service.models.enums import AuditDispatchMode
from redaction_service.models.request_models import RedactionRequest, RedactionResult
from redaction_service.monitoring.metrics import (
    audit_entries_written_total,
    audit_write_failures_total,
)
from redaction_service.persistence.audit_sink import AuditSink

logger = structlog.get_logger(__name__)


def build_audit_entries(
    request: RedactionRequest, result: RedactionResult
) -> list[AuditLogEntry]:
    """
    One entry per applied redaction, in manifest order.
    
    Returns an empty list when nothing was redacted or the request carries
    no viewer_id (anonymous viewers are not attributed).
    """
    if not result.redactions_applied or not request.viewer_id:
        return []
    
    return [
        AuditLogEntry(
            entity_type=request.entity_type,
            entity_id=request.entity_id,
            field_name=applied.field,
            viewer_id=request.viewer_id,
            viewer_role=request.viewer_role,
            rule_id=applied.rule_id,
            rule_name=applied.rule_name,
            redaction_type=applied.redaction_type,
        )
        for applied in result.redactions_applied
    ]


class AuditRecorder:
    """
    Best-effort writer for the redaction audit trail.
    """
    
    def __init__(self, sink: AuditSink, enabled: bool = True):
        """
        Initialize recorder.
        
        Args:
            sink: Destination for audit entries
            enabled: When False, record() and enqueue() are no-ops
        """
        self.sink = sink
        self.enabled = enabled
    
    async def record(
        self,
        entries: list[AuditLogEntry],
        mode: AuditDispatchMode = AuditDispatchMode.INLINE,
    ) -> bool:
        """
        Write entries to the sink, swallowing and logging any failure.
        
        Args:
            entries: Entries from build_audit_entries()
            mode: Dispatch mode label for logs and metrics
        
        Returns:
            True if entries were written (or there was nothing to write)
        """
        if not self.enabled or not entries:
            return True
        
        try:
            await self.sink.append(entries)
        except Exception as e:
            audit_write_failures_total.labels(mode=mode.value).inc()
            logger.error(
                "Audit write failed, entries dropped",
                mode=mode.value,
                entity_type=entries[0].entity_type.value,
                entity_id=entries[0].entity_id,
                entry_count=len(entries),
                error_type=type(e).__name__,
                exc_info=e,
            )
            return False
        
        audit_entries_written_total.labels(mode=mode.value).inc(len(entries))
        logger.info(
            "Audit entries recorded",
            mode=mode.value,
            entity_type=entries[0].entity_type.value,
            entity_id=entries[0].entity_id,
            entry_count=len(entries),
        )
        return True
    
    def enqueue(self, entries: list[AuditLogEntry]) -> Optional[str]:
        """
        Hand entries to the Celery audit worker.
        
        Returns:
            Celery task id, or None if nothing was queued
        """
        if not self.enabled or not entries:
            return None
        
        # Imported lazily so the API process only needs Celery in queue mode
        from redaction_service.tasks.audit_tasks import write_audit_entries_task
        
        payload = [entry.model_dump(mode="json") for entry in entries]
        try:
            async_result = write_audit_entries_task.delay(payload)  # type: ignore[attr-defined]
        except Exception as e:
            audit_write_failures_total.labels(mode=AuditDispatchMode.QUEUE.value).inc()
            logger.error(
                "Audit enqueue failed, entries dropped",
                entity_id=entries[0].entity_id,
                entry_count=len(entries),
                error_type=type(e).__name__,
                exc_info=e,
            )
            return None
        
        logger.info(
            "Audit entries queued",
            task_id=async_result.id,
            entity_id=entries[0].entity_id,
            entry_count=len(entries),
        )
        return async_result.id
