"""
Shared logging configuration for the Masa MCP service.
"""

import sys
import structlog
import logging
import uuid
from typing import Any, Dict, Optional
from contextvars import ContextVar

# Context variables for correlation IDs
request_id_var: ContextVar[Optional[str]] = ContextVar('request_id', default=None)
tool_var: ContextVar[Optional[str]] = ContextVar('tool', default=None)


REDACTED = "[REDACTED]"
SENSITIVE_KEYS = frozenset({"authorization", "api_key", "apikey", "token", "password", "cookie"})


def configure_logging(service_name: str, log_level: str = "info", json_logs: bool = True) -> None:
    """Configure structured logging for the MCP server process.

    Output goes to stderr: stdout carries the MCP stdio transport and must
    hold protocol frames only. `json_logs=False` switches to the console
    renderer for local development.
    """
    renderer = structlog.processors.JSONRenderer() if json_logs else structlog.dev.ConsoleRenderer(colors=False)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            add_service_context,
            add_correlation_context,
            redact_sensitive_fields,
            renderer
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    # force=True: the MCP SDK may have installed its own root handler
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=getattr(logging, log_level.upper()),
        force=True,
    )
    structlog.contextvars.bind_contextvars(service_name=service_name)


def add_service_context(logger: Any, method_name: str, event_dict: Dict[str, Any]) -> Dict[str, Any]:
    """Add service context to log events."""
    # "masa.http_client" -> service "masa"
    logger_name = event_dict.get("logger", "")
    if "." in logger_name:
        event_dict["service"] = logger_name.split(".")[0]

    return event_dict


def add_correlation_context(logger: Any, method_name: str, event_dict: Dict[str, Any]) -> Dict[str, Any]:
    """Add correlation context to log events."""
    request_id = request_id_var.get()
    if request_id:
        event_dict["request_id"] = request_id

    tool = tool_var.get()
    if tool:
        event_dict["tool"] = tool

    return event_dict


def redact_sensitive_fields(logger: Any, method_name: str, event_dict: Dict[str, Any]) -> Dict[str, Any]:
    """Mask credential-like keys, including inside nested dicts such as headers."""
    return _redact(event_dict)


def _redact(values: Dict[str, Any]) -> Dict[str, Any]:
    for key, value in values.items():
        if isinstance(key, str) and key.lower() in SENSITIVE_KEYS:
            values[key] = REDACTED
        elif isinstance(value, dict):
            values[key] = _redact(dict(value))
    return values


def set_request_id(request_id: Optional[str] = None) -> str:
    """Set request ID in context."""
    if request_id is None:
        request_id = str(uuid.uuid4())
    request_id_var.set(request_id)
    return request_id


def set_tool_context(tool: Optional[str] = None):
    """Set the name of the tool being served."""
    tool_var.set(tool)


def clear_context():
    """Clear all context variables."""
    request_id_var.set(None)
    tool_var.set(None)


def get_logger(name: str) -> structlog.BoundLogger:
    """Get a structured logger instance."""
    return structlog.get_logger(name)
