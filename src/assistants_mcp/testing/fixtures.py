"""Pytest fixtures for assistants MCP tests.

Load as a plugin (``pytest_plugins = ["assistants_mcp.testing.fixtures"]``).

Fixtures:
    mock_provider: Fresh MockProvider named "mock".
    server_context: ServerContext whose only (default) provider is mock_provider.
    mcp_server: MCPServer over server_context.
"""

from collections.abc import AsyncIterator

import pytest
import pytest_asyncio

from assistants_mcp.context import ServerContext
from assistants_mcp.mcp.server import MCPServer
from assistants_mcp.providers.registry import ProviderRegistry
from assistants_mcp.testing.mocks import MockProvider


@pytest.fixture
def mock_provider() -> MockProvider:
    """Create a fresh MockProvider for the test.

    Returns:
        A MockProvider with no recorded calls or pre-set responses.
    """
    return MockProvider()


@pytest_asyncio.fixture
async def server_context(mock_provider: MockProvider) -> AsyncIterator[ServerContext]:
    """Provide a ServerContext backed by mock_provider; closed after the test."""
    registry = ProviderRegistry()
    await registry.register_provider(mock_provider)
    context = ServerContext(provider_registry=registry)
    yield context
    await context.aclose()


@pytest.fixture
def mcp_server(server_context: ServerContext) -> MCPServer:
    return MCPServer(server_context)
