"""
Structured logging configuration using structlog.

Standardized log format:
{
    "ts": "2026-10-19T04:30:00.123456Z",
    "level": "info",
    "service": "zendesk-sentiment-tag",
    "correlation_id": "uuid-v4",
    "event": "event.received",
    "module": "transformations.api.router",
    "func_name": "receive",
    "lineno": 42,
    ...additional context...
}
"""
import structlog
import logging
from typing import Any


def service_name_adder(service_name: str):
    """Build a processor that stamps the service name on every entry."""

    def add_service_name(logger: Any, method_name: str, event_dict: dict) -> dict:
        event_dict.setdefault("service", service_name)
        return event_dict

    return add_service_name


def setup_logging(json_output: bool = True, service_name: str = "transformations", level: int = logging.INFO):
    """
    Configure structured logging with standardized fields.

    Args:
        json_output: If True, output JSON logs. If False, use console format.
        service_name: Name of the transformation service.
        level: Minimum level to emit.
    """
    shared_processors = [
        # correlation_id is bound by the middleware
        structlog.contextvars.merge_contextvars,
        service_name_adder(service_name),
        structlog.processors.TimeStamper(fmt="iso", key="ts"),
        structlog.processors.add_log_level,
        structlog.processors.CallsiteParameterAdder(
            {
                structlog.processors.CallsiteParameter.MODULE,
                structlog.processors.CallsiteParameter.FUNC_NAME,
                structlog.processors.CallsiteParameter.LINENO,
            }
        ),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if json_output:
        processors = shared_processors + [structlog.processors.JSONRenderer()]
    else:
        processors = shared_processors + [structlog.dev.ConsoleRenderer()]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(format="%(message)s", level=level)

    # botocore is chatty at INFO
    logging.getLogger("botocore").setLevel(logging.WARNING)
    # Silence uvicorn's default logging to avoid duplicate logs
    logging.getLogger("uvicorn.error").handlers = []
    logging.getLogger("uvicorn.access").handlers = []
