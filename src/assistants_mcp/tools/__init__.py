"""Assistant tools: definitions, validation, handlers, and the tool registry."""

from assistants_mcp.tools.definitions import (
    TOOL_CATEGORIES,
    TOOL_DEFINITIONS,
    ToolDefinition,
    get_tool_definition,
)
from assistants_mcp.tools.handlers import HANDLER_CLASSES, BaseToolHandler, ToolContext
from assistants_mcp.tools.registry import ToolRegistry, create_tool_registry, suggest_tool_names

__all__ = [
    "HANDLER_CLASSES",
    "TOOL_CATEGORIES",
    "TOOL_DEFINITIONS",
    "BaseToolHandler",
    "ToolContext",
    "ToolDefinition",
    "ToolRegistry",
    "create_tool_registry",
    "get_tool_definition",
    "suggest_tool_names",
]
