"""Tool registry: name-to-handler dispatch for tools/call.

A registry is built per request by ``create_tool_registry`` with every
handler bound to one provider. Registration problems are programming
errors and fail at construction time.

Example:
    >>> registry = create_tool_registry(provider, request_id=1)
    >>> # result = await registry.execute("assistant-get", {"assistant_id": "asst_..."})
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable, Mapping
from typing import Any

from assistants_mcp.errors import DuplicateToolError, ToolNotFoundError
from assistants_mcp.observability import get_logger
from assistants_mcp.providers.base import AssistantProvider
from assistants_mcp.tools.handlers import HANDLER_CLASSES, BaseToolHandler, ToolContext

logger = get_logger(__name__)

MAX_SUGGESTIONS = 3


def suggest_tool_names(name: str, candidates: Iterable[str]) -> list[str]:
    """Up to three candidates sharing a prefix or substring with ``name``."""
    needle = name.lower()
    if not needle:
        return []
    prefix = needle.split("-", 1)[0]
    matches = [
        tool
        for tool in candidates
        if needle in tool or tool in needle or (prefix and tool.startswith(prefix))
    ]
    return matches[:MAX_SUGGESTIONS]


class ToolRegistry:
    """Maps tool names to handler instances."""

    def __init__(self) -> None:
        self._handlers: dict[str, BaseToolHandler] = {}

    def register(self, name: str, handler: BaseToolHandler) -> None:
        """Register a handler under its tool name.

        Raises:
            DuplicateToolError: If the name is taken or differs from the handler's tool_name.
        """
        if name in self._handlers:
            raise DuplicateToolError(name)
        if handler.tool_name != name:
            raise DuplicateToolError(
                name, reason=f"handler is for tool '{handler.tool_name}'"
            )
        self._handlers[name] = handler

    def has_tool(self, name: str) -> bool:
        return name in self._handlers

    def list_tools(self) -> list[str]:
        """Registered tool names in registration order."""
        return list(self._handlers)

    async def execute(self, name: str, args: Mapping[str, Any]) -> Any:
        """Validate arguments and run the named tool.

        Raises:
            ToolNotFoundError: If no handler is registered for ``name``.
            ValidationError: If the arguments are rejected; the provider is not called.
            ToolExecutionError: If the provider call fails.
        """
        handler = self._handlers.get(name)
        if handler is None:
            suggestions = suggest_tool_names(name, self._handlers)
            logger.warning("mcp.tool.not_found", tool=name, suggestions=suggestions)
            raise ToolNotFoundError(name, suggestions, sorted(self._handlers))
        return await handler.handle(args)

    def get_stats(self) -> dict[str, Any]:
        by_category = Counter(handler.category for handler in self._handlers.values())
        return {
            "totalHandlers": len(self._handlers),
            "handlersByCategory": dict(by_category),
            "registeredTools": sorted(self._handlers),
        }


def create_tool_registry(
    provider: AssistantProvider, request_id: str | int | None = None
) -> ToolRegistry:
    """Build a registry with every tool handler bound to ``provider``."""
    context = ToolContext(provider=provider, request_id=request_id)
    registry = ToolRegistry()
    for handler_cls in HANDLER_CLASSES:
        registry.register(handler_cls.tool_name, handler_cls(context))
    return registry
