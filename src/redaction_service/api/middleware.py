"""FastAPI middleware binding a request id to every log line."""

import time
import uuid
from typing import Callable

import structlog
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

logger = structlog.get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


def _elapsed_ms(start_time: float) -> float:
    return round((time.perf_counter() - start_time) * 1000, 2)


class RequestTracingMiddleware(BaseHTTPMiddleware):
    """Correlate engine, audit and error logs for one call.
    
    An inbound X-Request-ID (e.g. from an API gateway) is reused so traces
    line up across services; otherwise a UUID4 is generated. The id is
    echoed back in the response header. Request bodies are never logged
    since they name the entity being viewed.
    """
    
    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Response]
    ) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        structlog.contextvars.bind_contextvars(
            request_id=request_id,
            method=request.method,
            path=request.url.path,
        )
        
        start_time = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception as exc:
            logger.error("Unhandled error while serving request", exc_info=exc, duration_ms=_elapsed_ms(start_time))
            raise
        else:
            response.headers[REQUEST_ID_HEADER] = request_id
            logger.info("Request served", status_code=response.status_code, duration_ms=_elapsed_ms(start_time))
            return response
        finally:
            structlog.contextvars.clear_contextvars()
