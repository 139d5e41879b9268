"""Observability for the assistants MCP server.

Structured logging (structlog, console or JSON, always on stderr) and a
Prometheus-compatible metrics collector.

Example:
    >>> from assistants_mcp.observability import get_logger
    >>>
    >>> logger = get_logger(__name__)
    >>> logger.info("mcp.tool.executed", tool="assistant-list", duration_ms=12.5)
"""

from assistants_mcp.observability.logging import (
    bind_context,
    clear_context,
    configure_logging,
    get_logger,
    is_debug_mode,
    sanitize_for_logging,
    unbind_context,
)
from assistants_mcp.observability.metrics import MetricsCollector

__all__ = [
    "MetricsCollector",
    "bind_context",
    "clear_context",
    "configure_logging",
    "get_logger",
    "is_debug_mode",
    "sanitize_for_logging",
    "unbind_context",
]
