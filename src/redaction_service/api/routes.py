"""
Redaction API routes.

POST /redact returns a redacted copy of one entity for one viewer.

Audit dispatch (settings.AUDIT_DISPATCH_MODE) trades response latency
against audit durability:
- inline: the audit write is awaited before responding. Use this on
  request-scoped runtimes that may stop the process right after the
  response, where post-response work can be lost.
- background: written after the response is sent, in this process. Lowest
  latency; entries are lost if the process dies in between.
- queue: handed to the Celery audit worker through Redis (durable outbox).
  Costs one broker round-trip on the request path.
In every mode an audit failure is logged and never changes the response.
"""

import time

import structlog
from fastapi import APIRouter, BackgroundTasks, Depends, Response, status
from fastapi.responses import JSONResponse
from redis.asyncio import Redis as AsyncRedis

from redaction_service.api.dependencies import (
    get_audit_recorder,
    get_redaction_engine,
    get_redis,
    get_settings,
)
from redaction_service.api.models import ErrorResponse, HealthResponse, RedactResponse
from redaction_service.audit.recorder import AuditRecorder, build_audit_entries
from redaction_service.config import Settings
from redaction_service.models.enums import AuditDispatchMode
from redaction_service.models.request_models import RedactionRequest
from redaction_service.monitoring.metrics import redaction_requests_total
from redaction_service.redaction.engine import RedactionEngine
from redaction_service.redaction.exceptions import EntityNotFoundError

logger = structlog.get_logger(__name__)

router = APIRouter()


@router.post(
    "/redact",
    response_model=RedactResponse,
    status_code=status.HTTP_200_OK,
    summary="Redact one entity for a viewer role",
    description="""
    Fetch an entity, apply every active redaction rule for the viewer role
    (minus rules that exempt the role), and return the redacted copy with
    a list of the transformations performed.
    
    An optional `fields` allow-list restricts redaction to those paths.
    """,
    responses={
        200: {"description": "Redaction completed (possibly with zero redactions)"},
        400: {"model": ErrorResponse, "description": "Missing or invalid request fields"},
        404: {"model": ErrorResponse, "description": "Entity not found"},
        500: {"model": ErrorResponse, "description": "Store failure"},
    },
)
async def redact_entity(
    request: RedactionRequest,
    background_tasks: BackgroundTasks,
    engine: RedactionEngine = Depends(get_redaction_engine),
    recorder: AuditRecorder = Depends(get_audit_recorder),
    settings: Settings = Depends(get_settings),
) -> RedactResponse:
    """
    Redact a single entity.
    
    Args:
        request: Entity reference and viewer
        background_tasks: FastAPI post-response task queue
        engine: Redaction engine (injected)
        recorder: Audit recorder (injected)
        settings: Application settings (injected)
    
    Returns:
        RedactResponse with the redacted document
    """
    entity_type = request.entity_type.value
    logger.info(
        "Redaction request received",
        entity_type=entity_type,
        entity_id=request.entity_id,
        viewer_role=request.viewer_role,
        allow_list_size=len(request.fields) if request.fields is not None else None,
    )
    
    start_time = time.perf_counter()
    try:
        result = await engine.redact(request)
    except EntityNotFoundError:
        redaction_requests_total.labels(entity_type=entity_type, status="not_found").inc()
        raise
    except Exception:
        redaction_requests_total.labels(entity_type=entity_type, status="error").inc()
        raise
    
    entries = build_audit_entries(request, result)
    if entries:
        mode = settings.AUDIT_DISPATCH_MODE
        if mode is AuditDispatchMode.INLINE:
            await recorder.record(entries, mode=mode)
        elif mode is AuditDispatchMode.BACKGROUND:
            background_tasks.add_task(recorder.record, entries, mode)
        else:
            recorder.enqueue(entries)
    
    redaction_requests_total.labels(entity_type=entity_type, status="success").inc()
    logger.info(
        "Redaction response ready",
        entity_type=entity_type,
        entity_id=request.entity_id,
        redactions_applied=len(result.redactions_applied),
        audit_entries=len(entries),
        duration_ms=round((time.perf_counter() - start_time) * 1000, 2),
    )
    
    return RedactResponse.from_result(request, result)


@router.options(
    "/redact",
    include_in_schema=False,
)
async def redact_preflight() -> Response:
    """Answer bare OPTIONS probes; real CORS preflights are handled by CORSMiddleware."""
    return Response(status_code=status.HTTP_200_OK)


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
    responses={
        200: {"description": "Redis reachable"},
        503: {"description": "Redis unreachable"},
    },
)
async def health_check(
    redis_client: AsyncRedis = Depends(get_redis),
    settings: Settings = Depends(get_settings),
) -> JSONResponse:
    """
    Check the Redis backing store.
    
    Returns:
        HealthResponse with service statuses
    """
    services = {}
    try:
        await redis_client.ping()
        services["redis"] = "ok"
    except Exception as e:
        services["redis"] = f"unreachable ({type(e).__name__})"
    
    healthy = services["redis"] == "ok"
    logger.info("Health check", healthy=healthy, services=services)
    
    response = HealthResponse(
        status="healthy" if healthy else "unhealthy",
        version=settings.APP_VERSION,
        services=services,
    )
    return JSONResponse(
        status_code=status.HTTP_200_OK if healthy else status.HTTP_503_SERVICE_UNAVAILABLE,
        content=response.model_dump(mode="json"),
    )
