"""Shared pytest configuration for assistants MCP tests.

Common fixtures (mock_provider, server_context, mcp_server) come from the
assistants_mcp.testing.fixtures plugin; request builders live in helpers.py.
"""

from __future__ import annotations

from collections.abc import Iterator

import pytest

from assistants_mcp.observability import clear_context

pytest_plugins = ["assistants_mcp.testing.fixtures"]

_ENV_VARS = (
    "ASSISTANTS_MCP_PROVIDER",
    "ASSISTANTS_MCP_TIMEOUT",
    "ASSISTANTS_MCP_PAGE_SIZE",
    "ASSISTANTS_MCP_HOST",
    "ASSISTANTS_MCP_PORT",
    "ASSISTANTS_MCP_MAX_REQUEST_SIZE",
    "ASSISTANTS_MCP_DEBUG",
    "OPENAI_API_KEY",
    "OPENAI_BASE_URL",
    "OPENAI_ORGANIZATION",
    "OPENAI_PROJECT",
    "ANTHROPIC_API_KEY",
    "GEMINI_API_KEY",
)


@pytest.fixture(autouse=True)
def _isolate_environment(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Run every test without server env vars and with an empty log context."""
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    yield
    clear_context()
