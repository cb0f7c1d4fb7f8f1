"""
FastAPI API routes and endpoints.

- routes.py: POST/OPTIONS /redact, GET /health
- dependencies.py: Dependency injection for stores, engine and audit recorder
- models.py: Response contract and error envelope
- error_handlers.py: Exception handlers for structured error responses
- middleware.py: Request id tracing
"""

from redaction_service.api import dependencies, error_handlers, models
from redaction_service.api.routes import router

__all__ = [
    "router",
    "dependencies",
    "error_handlers",
    "models",
]
