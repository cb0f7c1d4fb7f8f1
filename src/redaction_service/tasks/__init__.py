"""
Celery tasks for the durable audit queue.

- celery_app.py: Celery application configuration (Redis broker)
- audit_tasks.py: write_audit_entries task
"""

from redaction_service.tasks.audit_tasks import write_audit_entries_task
from redaction_service.tasks.celery_app import celery_app

__all__ = [
    "celery_app",
    "write_audit_entries_task",
]
