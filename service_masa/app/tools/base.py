"""
Shared plumbing for tool handlers.
"""

from typing import Any, Awaitable, Callable, Dict

import structlog
from pydantic import BaseModel

from shared.logging import clear_context, set_request_id, set_tool_context


async def run_tool(tool_name: str,
                   logger: structlog.BoundLogger,
                   call: Callable[[], Awaitable[BaseModel]],
                   **params: Any) -> Dict[str, Any]:
    """Run one tool call with correlation context and error logging.

    Errors are logged and re-raised for the MCP layer to report.
    """
    request_id = set_request_id()
    set_tool_context(tool_name)
    try:
        logger.info("Tool called", **params)
        try:
            result = await call()
        except Exception as exc:
            logger.error(
                f"[{tool_name}][ERR]",
                error=str(exc),
                error_type=exc.__class__.__name__,
                request_id=request_id
            )
            raise
        return result.model_dump(by_alias=True)
    finally:
        clear_context()
