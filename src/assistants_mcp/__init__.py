"""MCP server exposing an AI-assistant API (assistants, threads, messages, runs).

The package is organized leaf-first:

- ``mcp.pagination``: opaque, versioned cursors shared by every list method.
- ``providers``: the capability interface, concrete providers, and the
  provider registry.
- ``tools``: tool definitions, argument validation, handlers, and the tool
  registry.
- ``mcp.completion``: argument completion for prompts and resource URIs.
- ``mcp.server``: the JSON-RPC dispatcher and the stdio transport.
- ``transport.http``: the FastAPI transport.

Example:
    >>> from assistants_mcp.config import Settings
    >>> from assistants_mcp.context import build_context
    >>> from assistants_mcp.mcp import MCPServer
    >>> # context = asyncio.run(build_context(Settings.from_env()))
    >>> # asyncio.run(MCPServer(context).serve_stdio())
"""

__version__ = "3.0.0"

__all__ = ["__version__"]
