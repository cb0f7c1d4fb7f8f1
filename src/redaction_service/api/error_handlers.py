"""
FastAPI exception handlers for structured error responses.

Callers only ever see invalid_request (400), not_found (404) or a generic
internal_error (500). Store failures are logged with their details here
and reported to the caller without them.
"""

import logging
from datetime import datetime, timezone

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError as PydanticValidationError

from redaction_service.redaction.exceptions import (
    EntityNotFoundError,
    RedactionError,
    RepositoryError,
    RuleStoreError,
)

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("entity_type", "entity_id", "viewer_role")
MISSING_FIELDS_MESSAGE = "entity_type, entity_id, and viewer_role are required"


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


def _summarize_errors(errors: list[dict]) -> list[dict]:
    # ctx may hold exception instances, which are not JSON serializable
    return [
        {"loc": list(error.get("loc", ())), "msg": error.get("msg", ""), "type": error.get("type", "")}
        for error in errors
    ]


def _bad_request_message(errors: list[dict]) -> str:
    for error in errors:
        loc = error.get("loc", ())
        if error.get("type") == "missing" and loc and loc[-1] in REQUIRED_FIELDS:
            return MISSING_FIELDS_MESSAGE
    return "Request validation failed"


async def request_validation_error_handler(
    request: Request, exc: RequestValidationError | PydanticValidationError
) -> JSONResponse:
    """
    Handle invalid request bodies (missing required fields, unknown entity_type).
    
    Maps to 400 Bad Request.
    """
    errors = list(exc.errors())
    details = _summarize_errors(errors)
    logger.warning(
        "Invalid request format",
        extra={"errors": details},
    )
    
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "error": "invalid_request",
            "message": _bad_request_message(errors),
            "details": details,
            "timestamp": _timestamp(),
        },
    )


async def entity_not_found_handler(request: Request, exc: EntityNotFoundError) -> JSONResponse:
    """
    Handle missing entities.
    
    Maps to 404 Not Found.
    """
    logger.info(
        "Entity not found",
        extra={"entity_type": exc.entity_type, "entity_id": exc.entity_id},
    )
    
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content={
            "error": "not_found",
            "message": "Entity not found",
            "timestamp": _timestamp(),
        },
    )


async def store_error_handler(request: Request, exc: RedactionError) -> JSONResponse:
    """
    Handle entity/rule store failures.
    
    Maps to 500; exception details are logged, not returned.
    """
    logger.error(
        "Store failure",
        extra={
            "error_type": type(exc).__name__,
            "details": exc.details,
        },
        exc_info=exc,
    )
    
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": "internal_error",
            "message": "An unexpected error occurred",
            "timestamp": _timestamp(),
        },
    )


async def generic_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Handle unexpected errors.
    
    Maps to 500 Internal Server Error.
    """
    logger.error(
        "Unexpected error",
        extra={"error_type": type(exc).__name__},
        exc_info=exc,
    )
    
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": "internal_error",
            "message": "An unexpected error occurred",
            "timestamp": _timestamp(),
        },
    )


# Exception handler mapping for FastAPI app.add_exception_handler()
EXCEPTION_HANDLERS = {
    RequestValidationError: request_validation_error_handler,
    PydanticValidationError: request_validation_error_handler,
    EntityNotFoundError: entity_not_found_handler,
    RepositoryError: store_error_handler,
    RuleStoreError: store_error_handler,
    RedactionError: store_error_handler,
    Exception: generic_error_handler,
}
