"""
FastAPI application entry point for the PII Redaction Service.
"""

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from prometheus_fastapi_instrumentator import Instrumentator

from redaction_service.api.error_handlers import EXCEPTION_HANDLERS
from redaction_service.api.middleware import RequestTracingMiddleware
from redaction_service.api.routes import router
from redaction_service.config import settings
from redaction_service.logging_config import configure_logging
from redaction_service.persistence.redis_client import RedisClient

# Configure structured logging before anything logs
configure_logging(settings.LOG_LEVEL, settings.ENVIRONMENT)
logger = structlog.get_logger(__name__)

app = FastAPI(
    title=settings.APP_NAME,
    description="Role-aware field-level PII redaction for shared records",
    version=settings.APP_VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(RequestTracingMiddleware)

# Browser clients call /redact directly
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ALLOW_ORIGINS,
    allow_methods=["POST", "OPTIONS"],
    allow_headers=[
        "authorization",
        "x-client-info",
        "apikey",
        "content-type",
        "x-request-id",
    ],
)

for exc_class, handler in EXCEPTION_HANDLERS.items():
    app.add_exception_handler(exc_class, handler)

app.include_router(router, tags=["redaction"])


@app.on_event("startup")
async def startup():
    """Application startup."""
    logger.info(
        "Application startup",
        version=settings.APP_VERSION,
        environment=settings.ENVIRONMENT,
        audit_enabled=settings.AUDIT_ENABLED,
        audit_dispatch_mode=settings.AUDIT_DISPATCH_MODE.value,
    )


@app.on_event("shutdown")
async def shutdown():
    """Application shutdown - release the Redis pool."""
    await RedisClient.close_async_pool()
    logger.info("Application shutdown complete")


if settings.PROMETHEUS_ENABLED:
    Instrumentator().instrument(app).expose(app)


@app.get("/")
async def root():
    """Root endpoint with API documentation links."""
    return {
        "service": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "docs": "/docs",
        "health": "/health",
        "metrics": "/metrics" if settings.PROMETHEUS_ENABLED else None,
    }


if __name__ == "__main__":
    import uvicorn
    
    uvicorn.run(
        "redaction_service.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG,
    )
