"""
Celery task that drains queued audit entries into the audit store.

Entries arrive as JSON-serializable dicts (AuditLogEntry.model_dump(mode="json")).
"""

import logging

from celery import Task

from redaction_service.config import settings
from redaction_service.models.audit_models import AuditLogEntry
from redaction_service.persistence.audit_sink import SyncRedisAuditSink
from redaction_service.persistence.redis_client import RedisClient
from redaction_service.redaction.exceptions import AuditWriteError
from redaction_service.tasks.celery_app import celery_app

logger = logging.getLogger(__name__)


class AuditTask(Task):
    """
    Base task holding one sync audit sink per worker process.
    """
    
    _sink = None
    
    @property
    def sink(self) -> SyncRedisAuditSink:
        """Get or initialize the audit sink (singleton per worker)."""
        if self._sink is None:
            redis_client = RedisClient.get_sync_client(settings)
            self._sink = SyncRedisAuditSink(redis_client, settings)
        return self._sink


@celery_app.task(
    bind=True,
    base=AuditTask,
    name="write_audit_entries",
    autoretry_for=(AuditWriteError,),
    retry_backoff=True,
    retry_backoff_max=600,
    max_retries=settings.AUDIT_TASK_MAX_RETRIES,
)
def write_audit_entries_task(self: AuditTask, entry_dicts: list[dict]) -> int:
    """
    Validate and persist a batch of audit entries.
    
    Args:
        entry_dicts: Serialized AuditLogEntry records
    
    Returns:
        Number of entries written
    
    Raises:
        AuditWriteError: Sink failure (retried by Celery with backoff)
        pydantic.ValidationError: Malformed payload (not retried)
    """
    entries = [AuditLogEntry.model_validate(entry) for entry in entry_dicts]
    self.sink.append(entries)
    
    logger.info(
        "Queued audit entries written",
        extra={
            "task_id": self.request.id,
            "entry_count": len(entries),
            "retries": self.request.retries,
        },
    )
    return len(entries)
