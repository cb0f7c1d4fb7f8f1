"""Structured logging for the redaction service.

structlog owns formatting for both structlog and stdlib loggers (Celery,
uvicorn, redis): JSON lines in production, colored console output in
development. Field values must never be logged; drop_raw_values enforces
that for the keys most likely to carry them.
"""

import logging
import sys

import structlog
from structlog.types import EventDict, Processor, WrappedLogger

APP_LOG_NAME = "pii-redaction-service"

# Keys that must never reach a log line; the service handles raw PII.
_BLOCKED_KEYS = frozenset({"value", "original_value", "document", "data"})

_THIRD_PARTY_LEVELS = {
    "redis": logging.WARNING,
    "asyncio": logging.WARNING,
    "celery": logging.INFO,
    "uvicorn.access": logging.WARNING,
}


def add_app_context(
    logger: WrappedLogger, method_name: str, event_dict: EventDict
) -> EventDict:
    """Add application context to all log events."""
    event_dict["app"] = APP_LOG_NAME
    return event_dict


def drop_raw_values(
    logger: WrappedLogger, method_name: str, event_dict: EventDict
) -> EventDict:
    """Strip keys that could carry unredacted field contents."""
    for key in _BLOCKED_KEYS.intersection(event_dict):
        event_dict[key] = "[FILTERED]"
    return event_dict


def _pre_chain(is_production: bool) -> list[Processor]:
    chain: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        add_app_context,
        drop_raw_values,
    ]
    if is_production:
        chain.append(structlog.processors.format_exc_info)
    return chain


def configure_logging(log_level: str = "INFO", environment: str = "development") -> None:
    """Configure structlog and route stdlib logging through it.
    
    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        environment: Environment name; "production" selects JSON rendering
    """
    level = logging.getLevelName(log_level.upper())
    if not isinstance(level, int):
        level = logging.INFO
    
    is_production = environment.lower() == "production"
    pre_chain = _pre_chain(is_production)
    renderer: Processor = (
        structlog.processors.JSONRenderer() if is_production
        else structlog.dev.ConsoleRenderer(colors=True)
    )
    
    structlog.configure(
        processors=[*pre_chain, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
    
    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(processor=renderer, foreign_pre_chain=pre_chain)
    )
    
    root_logger = logging.getLogger()
    # Replace rather than add, so reloads do not duplicate output
    root_logger.handlers = [handler]
    root_logger.setLevel(level)
    
    for name, third_party_level in _THIRD_PARTY_LEVELS.items():
        logging.getLogger(name).setLevel(third_party_level)
    
    structlog.get_logger(__name__).info(
        "Logging configured",
        log_level=logging.getLevelName(level),
        environment=environment,
        renderer="json" if is_production else "console",
    )
