"""
Celery application for the durable audit queue.

Used when AUDIT_DISPATCH_MODE=queue: the API enqueues audit entries on the
Redis broker and a worker writes them, retrying with backoff. Tasks are
defined in audit_tasks.py.
"""

from celery import Celery
from celery.signals import worker_process_shutdown

from redaction_service.config import settings
from redaction_service.persistence.redis_client import RedisClient

celery_app = Celery(
    "redaction_service",
    broker=settings.CELERY_BROKER_URL,
    backend=settings.CELERY_RESULT_BACKEND,
)

celery_app.conf.update(
    # Task execution
    task_time_limit=settings.CELERY_TASK_TIME_LIMIT,
    task_soft_time_limit=max(settings.CELERY_TASK_TIME_LIMIT - 10, 1),
    
    # Worker settings
    worker_concurrency=settings.CELERY_WORKER_CONCURRENCY,
    worker_prefetch_multiplier=1,
    
    # Serialization
    task_serializer="json",
    result_serializer="json",
    accept_content=["json"],
    
    # Timezone
    timezone="UTC",
    enable_utc=True,
    
    # Audit tasks return nothing worth keeping
    task_ignore_result=True,
    
    # Entries must survive a worker crash
    task_acks_late=True,
    task_reject_on_worker_lost=True,
)

celery_app.autodiscover_tasks(["redaction_service.tasks"], related_name="audit_tasks")


@worker_process_shutdown.connect
def close_redis_pool(**kwargs):
    """Release the audit sink's blocking Redis pool when a worker process exits."""
    RedisClient.close_sync_pool()
