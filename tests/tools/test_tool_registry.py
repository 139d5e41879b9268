"""Tests for ToolRegistry and tool-name suggestions."""

from __future__ import annotations

import pytest
from helpers import THREAD_ID

from assistants_mcp.errors import DuplicateToolError, ToolNotFoundError
from assistants_mcp.testing import MockProvider
from assistants_mcp.tools.handlers import ToolContext
from assistants_mcp.tools.handlers.threads import DeleteThreadHandler, GetThreadHandler
from assistants_mcp.tools.registry import ToolRegistry, create_tool_registry, suggest_tool_names


class TestSuggestions:
    def test_prefix_match(self) -> None:
        names = ["thread-create", "thread-get", "run-get"]
        assert suggest_tool_names("thread-fetch", names) == ["thread-create", "thread-get"]

    def test_substring_match(self) -> None:
        assert suggest_tool_names("get", ["thread-get", "run-cancel"]) == ["thread-get"]

    def test_at_most_three(self) -> None:
        names = [f"run-{verb}" for verb in ("create", "list", "get", "update", "cancel")]
        assert len(suggest_tool_names("run-x", names)) == 3

    def test_no_match(self) -> None:
        assert suggest_tool_names("zzz", ["thread-get"]) == []
        assert suggest_tool_names("", ["thread-get"]) == []


class TestToolRegistry:
    def test_duplicate_registration(self, mock_provider: MockProvider) -> None:
        registry = ToolRegistry()
        context = ToolContext(provider=mock_provider)
        registry.register("thread-get", GetThreadHandler(context))
        with pytest.raises(DuplicateToolError):
            registry.register("thread-get", GetThreadHandler(context))

    def test_name_must_match_handler(self, mock_provider: MockProvider) -> None:
        registry = ToolRegistry()
        with pytest.raises(DuplicateToolError, match="handler is for tool 'thread-delete'"):
            registry.register("thread-get", DeleteThreadHandler(ToolContext(mock_provider)))

    @pytest.mark.asyncio
    async def test_unknown_tool(self, mock_provider: MockProvider) -> None:
        registry = create_tool_registry(mock_provider)
        with pytest.raises(ToolNotFoundError) as exc_info:
            await registry.execute("thread-fetch", {})
        assert exc_info.value.suggestions == ["thread-create", "thread-get", "thread-update"]
        assert mock_provider.calls == []

    @pytest.mark.asyncio
    async def test_execute(self, mock_provider: MockProvider) -> None:
        registry = create_tool_registry(mock_provider, request_id="req-1")
        result = await registry.execute("thread-get", {"thread_id": THREAD_ID})
        assert result == {"id": THREAD_ID, "object": "thread"}

    def test_stats(self, mock_provider: MockProvider) -> None:
        registry = create_tool_registry(mock_provider)
        stats = registry.get_stats()
        assert stats["totalHandlers"] == 22
        assert stats["handlersByCategory"] == {
            "assistant": 5,
            "thread": 4,
            "message": 5,
            "run": 6,
            "run-step": 2,
        }
        assert registry.list_tools()[0] == "assistant-create"
        assert registry.has_tool("run-step-list")
