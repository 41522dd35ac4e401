"""
Observability Infrastructure

Structured logging for readiness evaluations. Every log line emitted while an
evaluation is running carries its evaluation id so concurrent line walks and
coverage stages can be told apart.
"""

import contextvars
import logging
import sys
import uuid
from typing import Any

import structlog

from .config import settings

# Context variable for evaluation correlation
evaluation_id_var: contextvars.ContextVar[str] = contextvars.ContextVar(
    "evaluation_id", default=""
)


class EvaluationIdProcessor:
    """Structlog processor to add the evaluation id to log entries."""

    def __call__(
        self, logger: Any, method_name: str, event_dict: dict[str, Any]
    ) -> dict[str, Any]:
        evaluation_id = evaluation_id_var.get("")
        if evaluation_id:
            event_dict["evaluation_id"] = evaluation_id
        return event_dict


def setup_structured_logging() -> None:
    """Configure structured logging with JSON or console output."""

    log_level = getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)

    processors = [
        structlog.contextvars.merge_contextvars,
        EvaluationIdProcessor(),
        structlog.processors.TimeStamper(fmt="ISO"),
        structlog.processors.add_log_level,
        structlog.stdlib.add_logger_name,
    ]

    if settings.LOG_FORMAT == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(
            structlog.dev.ConsoleRenderer(colors=settings.ENVIRONMENT == "local")
        )

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=log_level,
    )

    # httpx logs every PostgREST request at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)


def get_logger(name: str) -> structlog.BoundLogger:
    """Get a structured logger instance."""
    return structlog.get_logger(name)


def set_evaluation_id(evaluation_id: str | None = None) -> str:
    """Set the evaluation id for the current context."""
    if evaluation_id is None:
        evaluation_id = str(uuid.uuid4())
    evaluation_id_var.set(evaluation_id)
    return evaluation_id


def get_evaluation_id() -> str:
    """Get the evaluation id of the current context."""
    return evaluation_id_var.get("")
