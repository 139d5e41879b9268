"""Network transports for the assistants MCP server."""

from assistants_mcp.transport.http import MCP_PATH, create_app

__all__ = ["MCP_PATH", "create_app"]
