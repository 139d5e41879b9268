"""Testing helpers for the assistants MCP server.

Import MockProvider from ``assistants_mcp.testing.mocks``; load the fixtures
with ``pytest_plugins = ["assistants_mcp.testing.fixtures"]``.
"""

from assistants_mcp.testing.assertions import (
    assert_jsonrpc_error,
    assert_jsonrpc_result,
    assert_tool_result,
)
from assistants_mcp.testing.mocks import MockProvider, MockProviderFactory, ProviderCall

__all__ = [
    "MockProvider",
    "MockProviderFactory",
    "ProviderCall",
    "assert_jsonrpc_error",
    "assert_jsonrpc_result",
    "assert_tool_result",
]
