"""Tool handlers, one class per tool."""

from assistants_mcp.tools.handlers.assistants import ASSISTANT_HANDLERS
from assistants_mcp.tools.handlers.base import BaseToolHandler, ToolContext, request_body
from assistants_mcp.tools.handlers.messages import MESSAGE_HANDLERS
from assistants_mcp.tools.handlers.run_steps import RUN_STEP_HANDLERS
from assistants_mcp.tools.handlers.runs import RUN_HANDLERS
from assistants_mcp.tools.handlers.threads import THREAD_HANDLERS

# Same order as TOOL_DEFINITIONS.
HANDLER_CLASSES: tuple[type[BaseToolHandler], ...] = (
    *ASSISTANT_HANDLERS,
    *THREAD_HANDLERS,
    *MESSAGE_HANDLERS,
    *RUN_HANDLERS,
    *RUN_STEP_HANDLERS,
)

__all__ = [
    "HANDLER_CLASSES",
    "BaseToolHandler",
    "ToolContext",
    "request_body",
]
