"""Model Context Protocol (MCP) server for the Assistants API.

Implements MCP 2025-11-25 (and earlier revisions on request): JSON-RPC 2.0
over stdio or HTTP, with tools, resources, prompts, and completions.

Example:
    >>> from assistants_mcp.context import build_context
    >>> from assistants_mcp.mcp import MCPServer
    >>> # context = await build_context()
    >>> # asyncio.run(MCPServer(context).run_stdio())
"""

from assistants_mcp.mcp.completion import CompletionEngine
from assistants_mcp.mcp.pagination import Page, paginate
from assistants_mcp.mcp.protocol import (
    MCP_PROTOCOL_VERSION,
    SUPPORTED_PROTOCOL_VERSIONS,
    CallToolRequestParams,
    CallToolResult,
    InitializeRequestParams,
    InitializeResult,
    JSONRPCError,
    JSONRPCRequest,
    JSONRPCResponse,
    ListToolsResult,
    TextContent,
    Tool,
)
from assistants_mcp.mcp.server import MCPServer

__all__ = [
    "MCPServer",
    "MCP_PROTOCOL_VERSION",
    "SUPPORTED_PROTOCOL_VERSIONS",
    "CallToolRequestParams",
    "CallToolResult",
    "CompletionEngine",
    "InitializeRequestParams",
    "InitializeResult",
    "JSONRPCError",
    "JSONRPCRequest",
    "JSONRPCResponse",
    "ListToolsResult",
    "Page",
    "TextContent",
    "Tool",
    "paginate",
]
